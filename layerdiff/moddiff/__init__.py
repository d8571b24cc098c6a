# Copyright Red Hat
#
# layerdiff/moddiff/__init__.py - Module layer differ package
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Module layer diff package.

Provides installation snapshot building and hierarchical comparison of
modules, packages and classes. The main entry points are ``TreeWalker``,
``diff_installations`` and ``DiffOptions``.
"""
from .engine import diff_installations, diff_mappings
from .model import Archive, Installation, JavaClass, Module, Package
from .options import DiffOptions
from .report import DiffReport
from .treewalk import TreeWalker

__all__ = [
    "Archive",
    "DiffOptions",
    "DiffReport",
    "Installation",
    "JavaClass",
    "Module",
    "Package",
    "TreeWalker",
    "diff_installations",
    "diff_mappings",
]

# Copyright Red Hat
#
# layerdiff/__init__.py - Module layer differ package initialisation
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Layerdiff top-level package.
"""
from ._layerdiff import *  # noqa: F401, F403
from ._layerdiff import __all__  # noqa: F401

__version__ = "0.1.0"

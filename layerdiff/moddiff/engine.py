# Copyright Red Hat
#
# layerdiff/moddiff/engine.py - Module layer diff engine
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Module layer diff engine.

A single set-diff primitive, ``diff_mappings()``, is applied at each level
of the installation tree. Each level supplies a comparator that is called
with the values found under one key on each side (``None`` where a side has
no such key) and returns the report fragment for that key.
"""
from typing import Callable, Iterable, Mapping, Optional, TypeVar
import logging

from layerdiff import LAYERDIFF_SUBSYSTEM_DIFF

from .difftypes import DiffType
from .filetypes import is_interesting_class
from .model import Archive, Installation, JavaClass, Module, Package, flatten_packages
from .report import Depth, DiffReport, format_line

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_diff(msg, *args, **kwargs):
    """A wrapper for diff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": LAYERDIFF_SUBSYSTEM_DIFF}, **kwargs)


V = TypeVar("V")

Comparator = Callable[[Optional[V], Optional[V]], Optional[str]]


def diff_mappings(
    set1: Mapping[str, V], set2: Mapping[str, V], compare: Comparator
) -> str:
    """
    Compare two mappings key by key.

    The union of the keys of ``set1`` and ``set2`` is visited in sorted
    order and ``compare(v1, v2)`` is called for each key, with ``None`` in
    place of a missing value. Non-empty comparator results are concatenated
    in key order.

    :param set1: The original mapping.
    :type set1: ``Mapping[str, V]``
    :param set2: The updated mapping.
    :type set2: ``Mapping[str, V]``
    :param compare: The comparator for a single key.
    :type compare: ``Callable[[Optional[V], Optional[V]], Optional[str]]``
    :returns: The concatenated report fragments.
    :rtype: ``str``
    """
    fragments = []
    for key in sorted(set1.keys() | set2.keys()):
        fragment = compare(set1.get(key), set2.get(key))
        if fragment:
            fragments.append(fragment)
    return "".join(fragments)


def compare_classes(
    class1: Optional[JavaClass], class2: Optional[JavaClass]
) -> Optional[str]:
    """
    Compare a class across two snapshots.

    Classes present on both sides are identical. Removed and added classes
    are reported unless they are anonymous inner classes.
    """
    if class1 is not None:
        if class2 is not None:
            return None
        if is_interesting_class(class1):
            return format_line(Depth.CLASS, DiffType.REMOVED, class1.name)
        return None
    if is_interesting_class(class2):
        return format_line(Depth.CLASS, DiffType.ADDED, class2.name)
    return None


def compare_packages(
    package1: Optional[Package], package2: Optional[Package]
) -> Optional[str]:
    """
    Compare a package across two snapshots.

    A package present on both sides is reported as modified, with its class
    differences, only if at least one class line is produced.
    """
    if package1 is not None:
        if package2 is not None:
            report = diff_mappings(
                package1.classes, package2.classes, compare_classes
            )
            if report:
                _log_debug_diff("Package %s changed", package1.name)
                return (
                    format_line(Depth.PACKAGE, DiffType.MODIFIED, package1.name)
                    + report
                )
            return None
        return format_line(Depth.PACKAGE, DiffType.REMOVED, package1.name)
    return format_line(Depth.PACKAGE, DiffType.ADDED, package2.name)


def diff_module_packages(
    archives1: Iterable[Archive], archives2: Iterable[Archive]
) -> str:
    """
    Compare the packages of two sets of module archives.

    Packages are flattened across all archives on each side before they are
    compared, so classes moving between archives of one module are not
    reported.

    :param archives1: The archives of the original module.
    :type archives1: ``Iterable[Archive]``
    :param archives2: The archives of the updated module.
    :type archives2: ``Iterable[Archive]``
    :returns: The package level report fragment.
    :rtype: ``str``
    """
    return diff_mappings(
        flatten_packages(archives1), flatten_packages(archives2), compare_packages
    )


def compare_modules(
    module1: Optional[Module], module2: Optional[Module]
) -> Optional[str]:
    """
    Compare a module across two snapshots.
    """
    if module1 is not None:
        if module2 is not None:
            report = diff_module_packages(
                module1.archives.values(), module2.archives.values()
            )
            if report:
                _log_debug_diff("Module %s changed", module1.name)
                return (
                    format_line(
                        Depth.MODULE, DiffType.MODIFIED, f"module {module1.name} changed"
                    )
                    + report
                )
            return None
        _log_debug_diff("Module %s deleted", module1.name)
        return format_line(
            Depth.MODULE, DiffType.REMOVED, f"module {module1.name} deleted"
        )
    _log_debug_diff("Module %s added", module2.name)
    return format_line(Depth.MODULE, DiffType.ADDED, f"module {module2.name} added")


def diff_installations(
    installation1: Installation, installation2: Installation
) -> DiffReport:
    """
    Compare two installation snapshots.

    :param installation1: The original installation.
    :type installation1: ``Installation``
    :param installation2: The updated installation.
    :type installation2: ``Installation``
    :returns: The difference report.
    :rtype: ``DiffReport``
    """
    _log_info(
        "Comparing %d modules with %d modules",
        len(installation1),
        len(installation2),
    )
    report = diff_mappings(
        installation1.modules, installation2.modules, compare_modules
    )
    return DiffReport(report)


__all__ = [
    "compare_classes",
    "compare_modules",
    "compare_packages",
    "diff_installations",
    "diff_mappings",
    "diff_module_packages",
]

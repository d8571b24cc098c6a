# Copyright Red Hat
#
# layerdiff/_layerdiff.py - Module layer differ global definitions
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level layerdiff package.
"""
import logging

_log = logging.getLogger("layerdiff")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Layerdiff debugging subsystem mask
LAYERDIFF_DEBUG_SCAN = 1
LAYERDIFF_DEBUG_DIFF = 2
LAYERDIFF_DEBUG_COMMAND = 4
LAYERDIFF_DEBUG_ALL = LAYERDIFF_DEBUG_SCAN | LAYERDIFF_DEBUG_DIFF | LAYERDIFF_DEBUG_COMMAND

# Layerdiff debugging subsystem names
LAYERDIFF_SUBSYSTEM_SCAN = "layerdiff.scan"
LAYERDIFF_SUBSYSTEM_DIFF = "layerdiff.diff"
LAYERDIFF_SUBSYSTEM_COMMAND = "layerdiff.command"

_DEBUG_MASK_TO_SUBSYSTEM = {
    LAYERDIFF_DEBUG_SCAN: LAYERDIFF_SUBSYSTEM_SCAN,
    LAYERDIFF_DEBUG_DIFF: LAYERDIFF_SUBSYSTEM_DIFF,
    LAYERDIFF_DEBUG_COMMAND: LAYERDIFF_SUBSYSTEM_COMMAND,
}

_debug_subsystems = frozenset()

#: Default module layer location relative to an installation root
DEFAULT_LAYER_PATH = "modules/system/layers/base"


class SubsystemFilter(logging.Filter):
    """
    Pass DEBUG records only for the subsystems enabled by the current debug
    mask. Other records, and DEBUG records without a ``subsystem``
    attribute, always pass.
    """

    def filter(self, record):
        if record.levelno != logging.DEBUG:
            return True
        subsystem = getattr(record, "subsystem", None)
        return subsystem is None or subsystem in _debug_subsystems


def get_debug_mask():
    """
    Return the current debug mask for the ``layerdiff`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    mask = 0
    for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items():
        if subsystem_name in _debug_subsystems:
            mask |= flag
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``layerdiff`` package.

    :param mask: the logical OR of the ``LAYERDIFF_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > LAYERDIFF_DEBUG_ALL:
        raise ValueError(f"Invalid layerdiff debug mask: {mask}")

    _debug_subsystems = frozenset(
        subsystem_name
        for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items()
        if mask & flag
    )


#
# Layerdiff exception types
#


class LayerdiffError(Exception):
    """
    Base class for layerdiff errors.
    """


class LayerdiffSystemError(LayerdiffError):
    """
    An I/O error occurred while scanning an installation.
    """


class LayerdiffPathError(LayerdiffError):
    """
    An installation path does not contain the expected module layer.
    """


class LayerdiffParseError(LayerdiffError):
    """
    A module descriptor could not be parsed.
    """


class LayerdiffArgumentError(LayerdiffError):
    """
    An invalid argument was passed to a layerdiff API call.
    """


__all__ = [
    "LAYERDIFF_DEBUG_SCAN",
    "LAYERDIFF_DEBUG_DIFF",
    "LAYERDIFF_DEBUG_COMMAND",
    "LAYERDIFF_DEBUG_ALL",
    "LAYERDIFF_SUBSYSTEM_SCAN",
    "LAYERDIFF_SUBSYSTEM_DIFF",
    "LAYERDIFF_SUBSYSTEM_COMMAND",
    "DEFAULT_LAYER_PATH",
    "SubsystemFilter",
    "get_debug_mask",
    "set_debug_mask",
    "LayerdiffError",
    "LayerdiffSystemError",
    "LayerdiffPathError",
    "LayerdiffParseError",
    "LayerdiffArgumentError",
]

# Copyright Red Hat
#
# layerdiff/moddiff/descriptor.py - Module descriptor support
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Module descriptor (``module.xml``) support.
"""
from pathlib import Path
from typing import Union
import xml.etree.ElementTree as ET
import logging

from layerdiff import LayerdiffParseError, LAYERDIFF_SUBSYSTEM_SCAN

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_scan(msg, *args, **kwargs):
    """A wrapper for scan subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": LAYERDIFF_SUBSYSTEM_SCAN}, **kwargs)


#: Module descriptor file name
MODULE_DESCRIPTOR = "module.xml"

#: Module property holding the API visibility of a module
API_PROPERTY = "jboss.api"

#: API visibility value marking a module as private
API_PRIVATE = "private"

# Equivalent to /module/properties/property[@name='jboss.api']/@value with
# tags matched in any (or no) namespace.
_PROPERTY_PATH = f"./{{*}}properties/{{*}}property[@name='{API_PROPERTY}']"


def _local_name(tag: str) -> str:
    """Strip any ``{namespace}`` prefix from ``tag``."""
    return tag.rpartition("}")[2]


def read_api_property(descriptor: Union[str, Path]) -> str:
    """
    Read the ``jboss.api`` property value from a module descriptor.

    :param descriptor: Path to the ``module.xml`` file.
    :type descriptor: ``Union[str, Path]``
    :returns: The property value, or the empty string if the descriptor has
              no such property.
    :rtype: ``str``
    :raises LayerdiffParseError: If the descriptor cannot be read or parsed.
    """
    try:
        root = ET.parse(descriptor).getroot()
    except (ET.ParseError, OSError) as err:
        raise LayerdiffParseError(
            f"Could not parse module descriptor {descriptor}: {err}"
        ) from err

    if _local_name(root.tag) != "module":
        return ""

    prop = root.find(_PROPERTY_PATH)
    if prop is None:
        return ""
    return prop.get("value", "")


def is_private_module(dir_path: Union[str, Path]) -> bool:
    """
    Determine whether ``dir_path`` holds a private module descriptor.

    :param dir_path: The directory to check.
    :type dir_path: ``Union[str, Path]``
    :returns: ``True`` if ``dir_path`` contains a ``module.xml`` whose
              ``jboss.api`` property is ``"private"``, or ``False`` otherwise.
    :rtype: ``bool``
    :raises LayerdiffParseError: If the descriptor cannot be read or parsed.
    """
    descriptor = Path(dir_path) / MODULE_DESCRIPTOR
    if not descriptor.exists():
        return False
    api = read_api_property(descriptor)
    _log_debug_scan("Module descriptor %s has %s=%s", descriptor, API_PROPERTY, api)
    return api == API_PRIVATE


__all__ = [
    "MODULE_DESCRIPTOR",
    "is_private_module",
    "read_api_property",
]

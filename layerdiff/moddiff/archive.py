# Copyright Red Hat
#
# layerdiff/moddiff/archive.py - Module layer archive reader
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Archive reading support.
"""
from pathlib import Path
from typing import List, Union
import logging
import zipfile

from layerdiff import LayerdiffSystemError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Compiled class entry extension
CLASS_EXTENSION = ".class"


def class_name_from_entry(entry_name: str) -> str:
    """
    Convert an archive entry name into a fully-qualified class name.

    :param entry_name: An entry name ending in ``.class``.
    :type entry_name: ``str``
    :returns: The entry name with the extension removed and path separators
              converted to dots.
    :rtype: ``str``
    """
    return entry_name[: -len(CLASS_EXTENSION)].replace("/", ".")


def read_class_names(archive_path: Union[str, Path]) -> List[str]:
    """
    Return the class names of all class entries in the archive at
    ``archive_path``.

    The archive is closed before this function returns.

    :param archive_path: The path to a zip or jar archive.
    :type archive_path: ``Union[str, Path]``
    :returns: A list of fully-qualified class names in entry order.
    :rtype: ``List[str]``
    :raises LayerdiffSystemError: If the archive cannot be opened or read.
    """
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            return [
                class_name_from_entry(name)
                for name in zf.namelist()
                if name.endswith(CLASS_EXTENSION)
            ]
    except zipfile.BadZipFile as err:
        raise LayerdiffSystemError(
            f"Could not read archive {archive_path}: {err}"
        ) from err
    except OSError as err:
        raise LayerdiffSystemError(
            f"Could not open archive {archive_path}: {err}"
        ) from err


__all__ = [
    "CLASS_EXTENSION",
    "class_name_from_entry",
    "read_class_names",
]

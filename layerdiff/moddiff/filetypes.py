# Copyright Red Hat
#
# layerdiff/moddiff/filetypes.py - Module layer file and class filters
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
File type and class name filters.
"""
from typing import ClassVar, Tuple, Union
from pathlib import Path
import logging
import magic

from layerdiff import LAYERDIFF_SUBSYSTEM_SCAN

from .model import NESTED_CLASS_SEPARATOR, JavaClass

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_scan(msg, *args, **kwargs):
    """A wrapper for scan subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": LAYERDIFF_SUBSYSTEM_SCAN}, **kwargs)


#: Resource file extensions that never hold classes
EXCLUDED_EXTENSIONS = (
    ".css",
    ".html",
    ".ico",
    ".index",
    ".png",
    ".properties",
    ".txt",
)

#: Archive metadata directory name
METADATA_DIR = "META-INF"


def is_interesting_file(file_path: Union[str, Path]) -> bool:
    """
    Return ``True`` if ``file_path`` may be an archive worth indexing.

    Files are included unless excluded: only known resource extensions and
    paths below an archive metadata directory are rejected.

    :param file_path: The file path to check.
    :type file_path: ``Union[str, Path]``
    :returns: ``True`` if the file should be read, or ``False`` otherwise.
    :rtype: ``bool``
    """
    path_str = str(file_path)
    if path_str.endswith(EXCLUDED_EXTENSIONS):
        return False
    return METADATA_DIR not in path_str


def is_interesting_class(java_class: JavaClass) -> bool:
    """
    Return ``True`` if ``java_class`` should appear in a report.

    Anonymous and synthetic inner classes (``Foo$1``) are not interesting.

    :param java_class: The class to check.
    :type java_class: ``JavaClass``
    :returns: ``False`` if the simple name of a nested class consists of
              decimal digits only, or ``True`` otherwise.
    :rtype: ``bool``
    """
    if NESTED_CLASS_SEPARATOR not in java_class.name:
        return True
    # An empty simple name counts as numeric.
    return not all(c.isdecimal() for c in java_class.simple_name)


class ArchiveTypeDetector:
    """
    Detect zip based archives using ``magic`` from python3-file-magic.
    """

    archive_types: ClassVar[Tuple[str, ...]] = (
        "application/zip",
        "application/java-archive",
        "application/x-java-archive",
    )

    def is_archive(self, file_path: Union[str, Path]) -> bool:
        """
        Return ``True`` if libmagic identifies ``file_path`` as a zip archive.

        Detection failures are logged and treated as archives so that the
        archive reader reports any real problem with the file.

        :param file_path: The path to the file to inspect.
        :type file_path: ``Union[str, Path]``
        :returns: ``True`` if the file is a zip or jar archive.
        :rtype: ``bool``
        """
        # c9s magic does not have magic.error
        if hasattr(magic, "error"):
            magic_errors = (magic.error, OSError, ValueError)
        else:
            magic_errors = (OSError, ValueError)

        try:
            fm = magic.detect_from_filename(str(file_path))
        except magic_errors as err:
            _log_warn("Error detecting file type for %s: %s", str(file_path), err)
            return True

        mime_type = (fm.mime_type or "").lower()
        _log_debug_scan("Detected %s for %s", mime_type, str(file_path))
        return mime_type in self.archive_types


__all__ = [
    "EXCLUDED_EXTENSIONS",
    "ArchiveTypeDetector",
    "is_interesting_class",
    "is_interesting_file",
]

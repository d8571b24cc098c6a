# Copyright Red Hat
#
# layerdiff/moddiff/treewalk.py - Module layer tree walk
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Tree walking support for building installation snapshots.
"""
from typing import Dict, Optional, Tuple
from pathlib import Path
from datetime import datetime
import logging
import os

from layerdiff import (
    LayerdiffArgumentError,
    LayerdiffPathError,
    LayerdiffSystemError,
    LAYERDIFF_SUBSYSTEM_SCAN,
)

from .archive import read_class_names
from .descriptor import MODULE_DESCRIPTOR, is_private_module
from .filetypes import ArchiveTypeDetector, is_interesting_file
from .model import Archive, Installation
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_scan(msg, *args, **kwargs):
    """A wrapper for scan subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": LAYERDIFF_SUBSYSTEM_SCAN}, **kwargs)


#: Separator used to join module directory names into a module name
MODULE_NAME_SEPARATOR = "."

# A resource lives at <module dirs...>/<slot>/<archive>
_MIN_RESOURCE_DEPTH = 3


def module_name_from_path(resource: Path) -> Optional[str]:
    """
    Derive a module name from a resource path relative to the layer root.

    The last two path segments (the slot directory and the archive file
    name) are dropped and the remaining segments are joined with ``.``.

    :param resource: The relative resource path.
    :type resource: ``Path``
    :returns: The module name, or ``None`` if ``resource`` is too shallow to
              belong to a module.
    :rtype: ``Optional[str]``
    """
    parts = resource.parts
    if len(parts) < _MIN_RESOURCE_DEPTH:
        return None
    return MODULE_NAME_SEPARATOR.join(parts[:-2])


class TreeWalker:
    """
    Walk the module layer of an installation and build an ``Installation``.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        """
        Initialise a new ``TreeWalker`` object.

        :param options: Options to control this ``TreeWalker`` instance.
        :type options: ``DiffOptions``
        :raises LayerdiffArgumentError: If the layer path is not relative.
        """
        self.options: DiffOptions = options or DiffOptions()
        if os.path.isabs(self.options.layer_path):
            raise LayerdiffArgumentError(
                f"Module layer path must be relative: {self.options.layer_path}"
            )
        self.file_type_detector: ArchiveTypeDetector = ArchiveTypeDetector()

    @staticmethod
    def _dir_id(dir_path: str) -> Tuple[int, int]:
        """
        Return the (device, inode) pair identifying ``dir_path``.
        """
        try:
            st = os.stat(dir_path)
        except OSError as err:
            raise LayerdiffSystemError(
                f"Could not stat directory {dir_path}: {err}"
            ) from err
        return (st.st_dev, st.st_ino)

    def _process_file(self, installation: Installation, start: str, file_path: str):
        """
        Index a single file found below the layer root ``start``.

        :param installation: The installation being built.
        :type installation: ``Installation``
        :param start: The layer root the walk started from.
        :type start: ``str``
        :param file_path: The path of the file to process.
        :type file_path: ``str``
        """
        resource = Path(os.path.relpath(file_path, start))

        if resource.name == MODULE_DESCRIPTOR:
            return
        if not os.path.isfile(file_path):
            _log_debug_scan("Skipping non-regular file %s", file_path)
            return
        if not is_interesting_file(resource):
            _log_debug_scan("Skipping uninteresting file %s", resource)
            return
        if self.options.use_magic_file_type:
            if not self.file_type_detector.is_archive(file_path):
                _log_debug_scan("Skipping non-archive file %s", resource)
                return

        module_name = module_name_from_path(resource)
        if module_name is None:
            _log_debug_scan("Skipping file %s outside any module", resource)
            return

        archive = Archive(resource.name)
        for class_name in read_class_names(file_path):
            archive.add_class(class_name)

        _log_debug_scan(
            "Adding archive %s to module %s (%d classes)",
            archive.name,
            module_name,
            len(archive),
        )
        installation.get_module(module_name).add_archive(archive)

    def walk_installation(self, root: str) -> Installation:
        """
        Walk the module layer below ``root`` and return the resulting
        ``Installation``.

        Private module directories are pruned, and any I/O failure aborts the
        walk.

        :param root: The installation root directory.
        :type root: ``str``
        :returns: A new ``Installation`` for ``root``.
        :rtype: ``Installation``
        :raises LayerdiffPathError: If ``root`` has no module layer directory.
        :raises LayerdiffSystemError: If a directory or archive cannot be read.
        :raises LayerdiffParseError: If a module descriptor cannot be parsed.
        """
        start = os.path.join(root, self.options.layer_path)
        if not os.path.isdir(start):
            raise LayerdiffPathError(f"Module layer {start} is not a directory")

        installation = Installation(root)
        follow_symlinks = self.options.follow_symlinks

        _log_info("Scanning modules in %s", start)
        start_time = datetime.now()

        if is_private_module(start):
            _log_debug_scan("Pruning private module directory %s", start)
            return installation

        def _onerror(err: OSError):
            raise LayerdiffSystemError(
                f"Error walking {err.filename or start}: {err}"
            ) from err

        # Identities of each pending directory and its ancestors.
        ancestors: Dict[str, Tuple[Tuple[int, int], ...]] = {
            start: (self._dir_id(start),)
        }

        for dir_path, dirs, files in os.walk(
            start, onerror=_onerror, followlinks=follow_symlinks
        ):
            chain = ancestors.pop(dir_path, ())
            visit = []
            for name in sorted(dirs):
                sub_path = os.path.join(dir_path, name)
                if os.path.islink(sub_path) and not follow_symlinks:
                    continue
                dir_id = self._dir_id(sub_path)
                if dir_id in chain:
                    raise LayerdiffSystemError(
                        f"File system loop detected at {sub_path}"
                    )
                if is_private_module(sub_path):
                    _log_debug_scan("Pruning private module directory %s", sub_path)
                    continue
                ancestors[sub_path] = chain + (dir_id,)
                visit.append(name)
            dirs[:] = visit

            for name in sorted(files):
                self._process_file(installation, start, os.path.join(dir_path, name))

        end_time = datetime.now()
        nr_archives = sum(len(module.archives) for module in installation)
        nr_classes = sum(module.class_count for module in installation)
        _log_info(
            "Scanned %d modules (%d archives, %d classes) in %s",
            len(installation),
            nr_archives,
            nr_classes,
            end_time - start_time,
        )
        return installation


__all__ = [
    "TreeWalker",
    "module_name_from_path",
]

# Copyright Red Hat
#
# layerdiff/moddiff/model.py - Module layer entity model
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Entity model for module layer snapshots.

An ``Installation`` owns ``Module`` objects, which own ``Archive`` objects,
which own ``JavaClass`` objects. ``Package`` objects are not stored in the
tree: they are built on demand by ``flatten_packages()`` from the union of
the classes in a module's archives.
"""
from typing import Dict, Iterable, Iterator
import logging

from layerdiff import LAYERDIFF_SUBSYSTEM_SCAN

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_scan(msg, *args, **kwargs):
    """A wrapper for scan subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": LAYERDIFF_SUBSYSTEM_SCAN}, **kwargs)


#: Package name used for classes without a package prefix
DEFAULT_PACKAGE = "<default>"

#: Nested class name separator
NESTED_CLASS_SEPARATOR = "$"


class JavaClass:
    """
    A single class found in an archive.
    """

    def __init__(self, name: str):
        """
        Initialise a new ``JavaClass`` object.

        :param name: The fully-qualified, dot separated class name.
        :type name: ``str``
        """
        self.name: str = name

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"JavaClass({self.name!r})"

    def __eq__(self, other):
        if not isinstance(other, JavaClass):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    @property
    def package_name(self) -> str:
        """
        The dot-qualified package prefix of this class.

        :returns: The package name, or ``DEFAULT_PACKAGE`` if the class name
                  has no package prefix.
        :rtype: ``str``
        """
        package, _, _ = self.name.rpartition(".")
        return package or DEFAULT_PACKAGE

    @property
    def simple_name(self) -> str:
        """
        The innermost simple name of this class: the text following the last
        ``$`` nested class separator, or following the package prefix for
        top-level classes.

        :returns: The simple class name.
        :rtype: ``str``
        """
        if NESTED_CLASS_SEPARATOR in self.name:
            return self.name.rpartition(NESTED_CLASS_SEPARATOR)[2]
        return self.name.rpartition(".")[2]


class Archive:
    """
    A binary archive (jar) belonging to a module.
    """

    def __init__(self, name: str):
        """
        Initialise a new, empty ``Archive`` object.

        :param name: The archive file name.
        :type name: ``str``
        """
        self.name: str = name
        self.classes: Dict[str, JavaClass] = {}

    def __repr__(self):
        return f"Archive({self.name!r}, classes={len(self.classes)})"

    def __len__(self):
        return len(self.classes)

    def add_class(self, class_name: str) -> JavaClass:
        """
        Add a class to this archive.

        :param class_name: The fully-qualified class name to add.
        :type class_name: ``str``
        :returns: The ``JavaClass`` registered for ``class_name``.
        :rtype: ``JavaClass``
        """
        if class_name not in self.classes:
            self.classes[class_name] = JavaClass(class_name)
        return self.classes[class_name]


class Package:
    """
    A grouping of classes sharing a package prefix.

    Packages are a view computed across all archives of a module at diff
    time and are never stored on an ``Archive``.
    """

    def __init__(self, name: str):
        self.name: str = name
        self.classes: Dict[str, JavaClass] = {}

    def __repr__(self):
        return f"Package({self.name!r}, classes={len(self.classes)})"

    def add_class(self, java_class: JavaClass):
        """Add ``java_class`` to this package."""
        self.classes[java_class.name] = java_class


class Module:
    """
    A named deployment unit grouping one or more archives.
    """

    def __init__(self, name: str):
        """
        Initialise a new, empty ``Module`` object.

        :param name: The module name.
        :type name: ``str``
        """
        self.name: str = name
        self.archives: Dict[str, Archive] = {}

    def __repr__(self):
        return f"Module({self.name!r}, archives={sorted(self.archives)})"

    def add_archive(self, archive: Archive):
        """
        Register ``archive`` with this module.

        If an archive with the same file name is already registered (the same
        jar name in two resource directories of one module) the class sets
        are merged.

        :param archive: The archive to add.
        :type archive: ``Archive``
        """
        existing = self.archives.get(archive.name)
        if existing is None:
            self.archives[archive.name] = archive
            return
        _log_warn(
            "Duplicate archive name '%s' in module '%s': merging classes",
            archive.name,
            self.name,
        )
        for class_name in archive.classes:
            existing.add_class(class_name)

    @property
    def class_count(self) -> int:
        """The total number of classes in this module's archives."""
        return sum(len(archive) for archive in self.archives.values())


class Installation:
    """
    The root of one scanned snapshot: a mapping of module names to modules.
    """

    def __init__(self, root: str = ""):
        """
        Initialise a new, empty ``Installation`` object.

        :param root: The file system root this installation was read from.
        :type root: ``str``
        """
        self.root: str = root
        self._modules: Dict[str, Module] = {}

    def __repr__(self):
        return f"Installation({self.root!r}, modules={len(self._modules)})"

    def __len__(self):
        return len(self._modules)

    def __iter__(self) -> Iterator[Module]:
        for name in sorted(self._modules):
            yield self._modules[name]

    def __contains__(self, name):
        return name in self._modules

    @property
    def modules(self) -> Dict[str, Module]:
        """
        A mapping of module name to ``Module``, ordered by name.
        """
        return {name: self._modules[name] for name in sorted(self._modules)}

    def get_module(self, name: str) -> Module:
        """
        Return the module named ``name``, creating it on first reference.

        :param name: The module name.
        :type name: ``str``
        :returns: The existing or newly created ``Module``.
        :rtype: ``Module``
        """
        module = self._modules.get(name)
        if module is not None:
            return module
        _log_debug_scan("Adding module %s", name)
        module = Module(name)
        self._modules[name] = module
        return module


def flatten_packages(archives: Iterable[Archive]) -> Dict[str, Package]:
    """
    Group the classes of ``archives`` into packages.

    The result is the union of the classes of every archive in
    ``archives``, keyed by package name.

    :param archives: The archives to flatten.
    :type archives: ``Iterable[Archive]``
    :returns: A mapping of package name to ``Package``.
    :rtype: ``Dict[str, Package]``
    """
    packages: Dict[str, Package] = {}
    for archive in archives:
        for java_class in archive.classes.values():
            name = java_class.package_name
            if name not in packages:
                packages[name] = Package(name)
            packages[name].add_class(java_class)
    return packages


__all__ = [
    "DEFAULT_PACKAGE",
    "NESTED_CLASS_SEPARATOR",
    "Archive",
    "Installation",
    "JavaClass",
    "Module",
    "Package",
    "flatten_packages",
]

# Copyright Red Hat
#
# tests/moddiff/test_archive.py - Archive reader tests
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
from unittest.mock import patch
import tempfile
import os

from layerdiff import LayerdiffSystemError
from layerdiff.moddiff.archive import class_name_from_entry, read_class_names

from .._util import write_jar


class TestArchive(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def test_class_name_from_entry(self):
        self.assertEqual(class_name_from_entry("org/foo/Bar.class"), "org.foo.Bar")
        self.assertEqual(
            class_name_from_entry("org/foo/Bar$Inner.class"), "org.foo.Bar$Inner"
        )
        self.assertEqual(class_name_from_entry("Main.class"), "Main")

    def test_read_class_names(self):
        jar = os.path.join(self.dir, "a.jar")
        write_jar(
            jar,
            ["org.foo.Bar", "org.foo.Bar$1"],
            extra_entries=["org/foo/messages.properties", "org/foo/"],
        )
        self.assertEqual(read_class_names(jar), ["org.foo.Bar", "org.foo.Bar$1"])

    def test_read_class_names_empty(self):
        jar = os.path.join(self.dir, "empty.jar")
        write_jar(jar, [])
        self.assertEqual(read_class_names(jar), [])

    def test_corrupt_archive(self):
        path = os.path.join(self.dir, "corrupt.jar")
        with open(path, "wb") as fp:
            fp.write(b"not a zip file")
        with self.assertRaises(LayerdiffSystemError) as cm:
            read_class_names(path)
        self.assertIn("corrupt.jar", str(cm.exception))

    def test_missing_archive(self):
        with self.assertRaises(LayerdiffSystemError) as cm:
            read_class_names(os.path.join(self.dir, "missing.jar"))
        self.assertIsInstance(cm.exception.__cause__, OSError)

    def test_archive_closed_on_success(self):
        jar = os.path.join(self.dir, "a.jar")
        write_jar(jar, ["org.foo.Bar"])
        with patch("layerdiff.moddiff.archive.zipfile.ZipFile.close") as mock_close:
            read_class_names(jar)
            mock_close.assert_called()

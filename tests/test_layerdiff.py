# Copyright Red Hat
#
# tests/test_layerdiff.py - Layerdiff global definitions tests
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
import logging

log = logging.getLogger()

import layerdiff


class LayerdiffTests(unittest.TestCase):
    """
    Tests for layerdiff package top-level interfaces.
    """

    def tearDown(self):
        layerdiff.set_debug_mask(0)

    def test_set_debug_mask(self):
        layerdiff.set_debug_mask(layerdiff.LAYERDIFF_DEBUG_ALL)
        self.assertEqual(layerdiff.get_debug_mask(), layerdiff.LAYERDIFF_DEBUG_ALL)

    def test_set_debug_mask_bad_mask(self):
        with self.assertRaises(ValueError):
            layerdiff.set_debug_mask(layerdiff.LAYERDIFF_DEBUG_ALL + 1)
        with self.assertRaises(ValueError):
            layerdiff.set_debug_mask(-1)

    def test_SubsystemFilter_follows_mask(self):
        layerdiff.set_debug_mask(0)
        sf = layerdiff.SubsystemFilter("layerdiff")
        record = logging.LogRecord("layerdiff", logging.DEBUG, __file__, 1, "msg", (), None)
        record.subsystem = layerdiff.LAYERDIFF_SUBSYSTEM_DIFF
        self.assertFalse(sf.filter(record))
        # An installed filter sees later mask changes
        layerdiff.set_debug_mask(
            layerdiff.LAYERDIFF_DEBUG_SCAN | layerdiff.LAYERDIFF_DEBUG_DIFF
        )
        self.assertTrue(sf.filter(record))
        self.assertEqual(
            layerdiff.get_debug_mask(),
            layerdiff.LAYERDIFF_DEBUG_SCAN | layerdiff.LAYERDIFF_DEBUG_DIFF,
        )

    def test_SubsystemFilter_filter(self):
        layerdiff.set_debug_mask(layerdiff.LAYERDIFF_DEBUG_SCAN)
        sf = layerdiff.SubsystemFilter("layerdiff")

        def _record(level, subsystem=None):
            record = logging.LogRecord(
                "layerdiff", level, __file__, 1, "msg", (), None
            )
            if subsystem:
                record.subsystem = subsystem
            return record

        self.assertTrue(sf.filter(_record(logging.INFO)))
        self.assertTrue(sf.filter(_record(logging.DEBUG)))
        self.assertTrue(
            sf.filter(_record(logging.DEBUG, layerdiff.LAYERDIFF_SUBSYSTEM_SCAN))
        )
        self.assertFalse(
            sf.filter(_record(logging.DEBUG, layerdiff.LAYERDIFF_SUBSYSTEM_DIFF))
        )
        self.assertTrue(
            sf.filter(_record(logging.INFO, layerdiff.LAYERDIFF_SUBSYSTEM_DIFF))
        )

    def test_error_hierarchy(self):
        for cls in (
            layerdiff.LayerdiffSystemError,
            layerdiff.LayerdiffPathError,
            layerdiff.LayerdiffParseError,
            layerdiff.LayerdiffArgumentError,
        ):
            with self.subTest(cls=cls.__name__):
                self.assertTrue(issubclass(cls, layerdiff.LayerdiffError))

    def test_version(self):
        self.assertTrue(layerdiff.__version__)

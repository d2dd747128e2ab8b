# Copyright 2024, xvacheck Contributors, All rights reserved.

import unittest

from common import (
    AppError,
    ClassifiedEntry,
    EntryKind,
    PairObservation,
    PairState,
    ValidationResult,
    ValidationStats,
)


class TestClassifiedEntry(unittest.TestCase):
    def test_ignored(self):
        self.assertTrue(ClassifiedEntry(EntryKind.IGNORED).is_ignored)
        self.assertFalse(ClassifiedEntry(EntryKind.BLOCK, "Ref:0/00000001").is_ignored)


class TestPairObservation(unittest.TestCase):
    def test_opened_has_no_expected_for_block(self):
        observation = PairObservation("Ref:0/00000001", PairState.OPENED, "a" * 40, EntryKind.BLOCK)
        self.assertIsNone(observation.expected_digest)
        self.assertEqual("a" * 40, observation.actual_digest)


class TestValidationResult(unittest.TestCase):
    def test_valid(self):
        result = ValidationResult.valid()
        self.assertEqual(ValidationResult.Status.VALID, result.status)
        self.assertTrue(result.is_valid)
        self.assertEqual("", result.reason)
        self.assertIsNone(result.error)
        self.assertEqual(ValidationStats(), result.stats)

    def test_invalid(self):
        stats = ValidationStats(entries_seen=2)
        result = ValidationResult.invalid("Missing checksums or data blocks: Ref:0/00000001", stats)
        self.assertEqual(ValidationResult.Status.INVALID, result.status)
        self.assertFalse(result.is_valid)
        self.assertEqual("Missing checksums or data blocks: Ref:0/00000001", result.reason)
        self.assertIs(stats, result.stats)

    def test_failed(self):
        error = AppError("Unable to open backup.xva")
        result = ValidationResult.failed(error)
        self.assertEqual(ValidationResult.Status.ERROR, result.status)
        self.assertFalse(result.is_valid)
        self.assertIs(error, result.error)

    def test_status_enum_values(self):
        self.assertEqual(0, ValidationResult.Status.VALID.value)
        self.assertEqual(1, ValidationResult.Status.INVALID.value)
        self.assertEqual(2, ValidationResult.Status.ERROR.value)


class TestValidationStats(unittest.TestCase):
    def test_as_dict(self):
        stats = ValidationStats(entries_seen=5, entries_ignored=1, blocks_hashed=2, bytes_hashed=10, pairs_validated=2)
        self.assertEqual(
            {
                "entries_seen": 5,
                "entries_ignored": 1,
                "blocks_hashed": 2,
                "bytes_hashed": 10,
                "pairs_validated": 2,
            },
            stats.as_dict(),
        )

# Copyright 2024, xvacheck Contributors, All rights reserved.

import unittest

from parameterized import parameterized

from common import EntryKind
from xva import EntryClassifier


class TestEntryClassifier(unittest.TestCase):
    @parameterized.expand(
        [
            ("first_block", "Ref:0/00000001"),
            ("zero_sequence", "Ref:12/00000000"),
            ("large_index", "Ref:4207/99999999"),
        ]
    )
    def test_block(self, _, name):
        classified = EntryClassifier.classify(name, True)
        self.assertEqual(EntryKind.BLOCK, classified.kind)
        self.assertEqual(name, classified.key)
        self.assertFalse(classified.is_ignored)

    @parameterized.expand(
        [
            ("first_checksum", "Ref:0/00000001.checksum", "Ref:0/00000001"),
            ("large_index", "Ref:4207/99999999.checksum", "Ref:4207/99999999"),
        ]
    )
    def test_checksum(self, _, name, key):
        classified = EntryClassifier.classify(name, True)
        self.assertEqual(EntryKind.CHECKSUM, classified.kind)
        self.assertEqual(key, classified.key)

    @parameterized.expand(
        [
            ("metadata", "ova.xml"),
            ("ref_directory", "Ref:0"),
            ("short_sequence", "Ref:0/0000001"),
            ("long_sequence", "Ref:0/000000001"),
            ("no_index", "Ref:/00000001"),
            ("lowercase_ref", "ref:0/00000001"),
            ("other_suffix", "Ref:0/00000001.xxhash"),
            ("suffix_only_partial", "Ref:0/00000001.check"),
            ("leading_path", "backup/Ref:0/00000001"),
            ("trailing_newline", "Ref:0/00000001\n"),
            ("checksum_trailing_newline", "Ref:0/00000001.checksum\n"),
            ("non_ascii_digits", "Ref:0/0000000١"),
        ]
    )
    def test_ignored_names(self, _, name):
        classified = EntryClassifier.classify(name, True)
        self.assertEqual(EntryKind.IGNORED, classified.kind)
        self.assertIsNone(classified.key)
        self.assertTrue(classified.is_ignored)

    def test_non_regular_entries_are_ignored(self):
        self.assertTrue(EntryClassifier.classify("Ref:0/00000001", False).is_ignored)
        self.assertTrue(EntryClassifier.classify("Ref:0/00000001.checksum", False).is_ignored)

    def test_block_and_checksum_share_key(self):
        block = EntryClassifier.classify("Ref:3/00000042", True)
        checksum = EntryClassifier.classify("Ref:3/00000042.checksum", True)
        self.assertEqual(block.key, checksum.key)

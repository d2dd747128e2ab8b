# Copyright 2024, xvacheck Contributors, All rights reserved.

import io
import os
import shutil
import tempfile
import unittest

from parameterized import parameterized

from system import ArchiveEntry, ArchiveReader, ArchiveReaderError
from tests.utils import TestUtils


class TestArchiveEntry(unittest.TestCase):
    def test_properties(self):
        reader = io.BytesIO(b"content")
        entry = ArchiveEntry("Ref:0/00000001", 7, True, reader)
        self.assertEqual("Ref:0/00000001", entry.name)
        self.assertEqual(7, entry.size)
        self.assertTrue(entry.is_regular)
        self.assertIs(reader, entry.reader)

    def test_bad_size(self):
        with self.assertRaises(ValueError):
            ArchiveEntry("Ref:0/00000001", -1, True)

    def test_no_content(self):
        entry = ArchiveEntry("Ref:0", 0, False)
        self.assertFalse(entry.is_regular)
        with self.assertRaises(TypeError):
            _ = entry.reader


class TestArchiveReader(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp(prefix="test_archive_")
        self.xva_path = os.path.join(self.temp_dir, "backup.xva")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    @parameterized.expand(
        [
            ("plain", "w"),
            ("gzip", "w:gz"),
            ("bzip2", "w:bz2"),
            ("xz", "w:xz"),
        ]
    )
    def test_entries_in_order(self, _, mode):
        TestUtils.write_xva(
            self.xva_path,
            [
                ("ova.xml", b"<value/>"),
                TestUtils.dir_member("Ref:0"),
                ("Ref:0/00000001", b"block one"),
                TestUtils.symlink_member("link", "ova.xml"),
                ("Ref:0/00000001.checksum", b"c" * 40),
            ],
            mode,
        )
        with ArchiveReader(self.xva_path) as reader:
            entries = [(e.name, e.size, e.is_regular) for e in reader.entries()]
        self.assertEqual(
            [
                ("ova.xml", 8, True),
                ("Ref:0", 0, False),
                ("Ref:0/00000001", 9, True),
                ("link", 0, False),
                ("Ref:0/00000001.checksum", 40, True),
            ],
            entries,
        )

    def test_content_is_bound_to_entry(self):
        TestUtils.write_xva(self.xva_path, [("first", b"11111"), ("second", b"22")])
        contents = []
        with ArchiveReader(self.xva_path) as reader:
            for entry in reader.entries():
                contents.append(entry.reader.read())
        self.assertEqual([b"11111", b"22"], contents)

    def test_unread_content_is_skipped(self):
        TestUtils.write_xva(self.xva_path, [("first", b"1" * 5000), ("second", b"22")])
        with ArchiveReader(self.xva_path) as reader:
            entries = reader.entries()
            first = next(entries)
            self.assertEqual(b"1" * 10, first.reader.read(10))
            second = next(entries)
            self.assertEqual(b"22", second.reader.read())
            self.assertIsNone(next(entries, None))

    def test_headers_are_not_retained(self):
        TestUtils.write_xva(self.xva_path, [("Ref:0/{:08d}".format(i), b"b") for i in range(1000)])
        count = 0
        with ArchiveReader(self.xva_path) as reader:
            # noinspection PyUnresolvedReferences
            tar = reader._ArchiveReader__tar
            for _ in reader.entries():
                count += 1
                self.assertLessEqual(len(tar.members), 1)
            self.assertLessEqual(len(tar.members), 1)
        self.assertEqual(1000, count)

    def test_missing_file(self):
        path = os.path.join(self.temp_dir, "missing.xva")
        reader = ArchiveReader(path)
        self.assertEqual(path, reader.archive_path)
        with self.assertRaises(ArchiveReaderError):
            reader.open()

    def test_not_a_tar(self):
        with open(self.xva_path, "wb") as f:
            f.write(b"\x00\x01garbage" * 200)
        with self.assertRaises(ArchiveReaderError):
            with ArchiveReader(self.xva_path) as reader:
                list(reader.entries())

    def test_entries_requires_open(self):
        reader = ArchiveReader(self.xva_path)
        with self.assertRaises(ArchiveReaderError):
            next(reader.entries())

    def test_truncated_content(self):
        TestUtils.write_xva(self.xva_path, [("Ref:0/00000001", b"x" * 10000)])
        with open(self.xva_path, "r+b") as f:
            f.truncate(512 + 4096)
        with ArchiveReader(self.xva_path) as reader:
            entry = next(reader.entries())
            with self.assertRaises(ArchiveReaderError):
                entry.reader.read(10000)

    def test_closed_after_context(self):
        TestUtils.write_xva(self.xva_path, [("first", b"1")])
        reader = ArchiveReader(self.xva_path)
        with reader:
            list(reader.entries())
        with self.assertRaises(ArchiveReaderError):
            next(reader.entries())

# Copyright 2024, xvacheck Contributors, All rights reserved.

"""
Digest computation for xva validation.

This module provides:
- Block digests computed over exactly the declared entry size
- Checksum record extraction, taken verbatim from the entry content
"""

import hashlib
import logging

from common import AppError, Constants, EntryKind
from system import ArchiveEntry


class ChecksumError(AppError):
    """Exception raised when a digest cannot be computed or read."""

    pass


class DigestComputer:
    """
    Computes the digest values compared by the validator.

    Block digests are lowercase hex SHA-1, which is also how xva checksum
    records are written, so both sides compare as plain text.
    A single read buffer is reused for every block.
    """

    # Width of a checksum record: hex encoded SHA-1
    CHECKSUM_WIDTH = 40

    def __init__(self, read_buffer_size: int = Constants.XVA_BLOCK_SIZE_IN_BYTES):
        if read_buffer_size < DigestComputer.CHECKSUM_WIDTH:
            raise ValueError("read_buffer_size must be at least {}".format(DigestComputer.CHECKSUM_WIDTH))
        self.__buffer = bytearray(read_buffer_size)
        self.logger = logging.getLogger(self.__class__.__name__)

    def set_base_logger(self, base_logger: logging.Logger):
        self.logger = base_logger.getChild(self.__class__.__name__)

    @property
    def read_buffer_size(self) -> int:
        return len(self.__buffer)

    def compute_digest(self, entry: ArchiveEntry, kind: EntryKind) -> str:
        """
        Compute the digest of a block entry or read the one of a checksum entry.

        Args:
            entry: Entry whose content is positioned at its first byte
            kind: Classification of the entry

        Returns:
            Digest as text
        """
        if kind == EntryKind.BLOCK:
            return self.compute_block_digest(entry)
        elif kind == EntryKind.CHECKSUM:
            return self.read_checksum_record(entry)
        else:
            raise ChecksumError("Entry {} carries no digest".format(entry.name))

    def compute_block_digest(self, entry: ArchiveEntry) -> str:
        """
        Hash exactly entry.size bytes of the block content.

        Raises:
            ChecksumError: if the content ends before the declared size
        """
        hasher = hashlib.sha1()
        view = memoryview(self.__buffer)
        remaining = entry.size
        while remaining > 0:
            chunk = view[: min(remaining, len(view))]
            read = self._fill(entry, chunk)
            hasher.update(chunk[:read])
            remaining -= read
        return hasher.hexdigest()

    def read_checksum_record(self, entry: ArchiveEntry) -> str:
        """
        Read the fixed width checksum record verbatim.

        Raises:
            ChecksumError: if the record is shorter than CHECKSUM_WIDTH
        """
        if entry.size < DigestComputer.CHECKSUM_WIDTH:
            raise ChecksumError(
                "Checksum record {} is {} bytes, expected {}".format(
                    entry.name, entry.size, DigestComputer.CHECKSUM_WIDTH
                )
            )
        record = memoryview(self.__buffer)[: DigestComputer.CHECKSUM_WIDTH]
        self._fill(entry, record)
        # latin-1 maps every byte to one character, so the record is kept as is
        return bytes(record).decode("latin-1")

    def _fill(self, entry: ArchiveEntry, chunk: memoryview) -> int:
        """Fill chunk completely from the entry content, or raise ChecksumError."""
        filled = 0
        while filled < len(chunk):
            read = entry.reader.readinto(chunk[filled:])
            if not read:
                raise ChecksumError(
                    "Short read on {}: got {} of {} requested bytes".format(entry.name, filled, len(chunk))
                )
            filled += read
        return filled

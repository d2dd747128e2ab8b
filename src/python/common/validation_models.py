# Copyright 2024, xvacheck Contributors, All rights reserved.

"""
Validation models for xva archive integrity verification.

This module provides the data classes shared by the entry classifier,
the pairing table and the validation driver.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class EntryKind(Enum):
    """Role of an archive entry with respect to validation."""

    BLOCK = 0  # Data block of the disk image
    CHECKSUM = 1  # Detached checksum record of a data block
    IGNORED = 2  # Anything else (metadata, directories, links)


@dataclass(frozen=True)
class ClassifiedEntry:
    """
    Result of classifying an archive entry.

    Attributes:
        kind: Role of the entry
        key: Block key shared by a block and its checksum record (None if ignored)
    """

    kind: EntryKind
    key: Optional[str] = None

    @property
    def is_ignored(self) -> bool:
        return self.kind == EntryKind.IGNORED


class PairState(Enum):
    """Outcome of observing one side of a block/checksum pair."""

    OPENED = 0  # First occurrence, digest recorded
    CLOSED = 1  # Second occurrence, digests match
    CONFLICT = 2  # Second occurrence, digests differ
    DUPLICATE = 3  # Same kind seen twice, or key seen after its pair closed


@dataclass(frozen=True)
class PairObservation:
    """
    Attributes:
        key: Block key that was observed
        state: What the observation did to the pairing table
        digest: Digest carried by the observed entry
        kind: Kind of the observed entry
        recorded_digest: Digest recorded for the first occurrence (None when OPENED
            or when the pair was already closed)
    """

    key: str
    state: PairState
    digest: str
    kind: EntryKind
    recorded_digest: Optional[str] = None

    @property
    def expected_digest(self) -> Optional[str]:
        """Digest carried by the checksum record of the pair."""
        if self.kind == EntryKind.CHECKSUM:
            return self.digest
        return self.recorded_digest

    @property
    def actual_digest(self) -> Optional[str]:
        """Digest computed over the data block of the pair."""
        if self.kind == EntryKind.BLOCK:
            return self.digest
        return self.recorded_digest


@dataclass
class ValidationStats:
    """
    Counters collected during a validation run.

    Attributes:
        entries_seen: Number of archive entries read
        entries_ignored: Number of entries that took no part in validation
        blocks_hashed: Number of data blocks digested
        bytes_hashed: Total number of data block bytes digested
        pairs_validated: Number of block/checksum pairs found equal
    """

    entries_seen: int = 0
    entries_ignored: int = 0
    blocks_hashed: int = 0
    bytes_hashed: int = 0
    pairs_validated: int = 0

    def as_dict(self) -> dict:
        return {
            "entries_seen": self.entries_seen,
            "entries_ignored": self.entries_ignored,
            "blocks_hashed": self.blocks_hashed,
            "bytes_hashed": self.bytes_hashed,
            "pairs_validated": self.pairs_validated,
        }


@dataclass
class ValidationResult:
    """
    Verdict of a validation run.

    A corrupt archive (INVALID) and an archive that could not be read (ERROR)
    are distinct statuses; reason is empty for a valid archive.

    Attributes:
        status: Verdict of the run
        reason: Human-readable explanation of an INVALID verdict
        error: Cause of an ERROR verdict
        stats: Counters collected until the run concluded
    """

    class Status(Enum):
        VALID = 0
        INVALID = 1
        ERROR = 2

    status: "ValidationResult.Status"
    reason: str = ""
    error: Optional[Exception] = None
    stats: ValidationStats = field(default_factory=ValidationStats)

    @classmethod
    def valid(cls, stats: Optional[ValidationStats] = None) -> "ValidationResult":
        return cls(status=cls.Status.VALID, stats=stats or ValidationStats())

    @classmethod
    def invalid(cls, reason: str, stats: Optional[ValidationStats] = None) -> "ValidationResult":
        return cls(status=cls.Status.INVALID, reason=reason, stats=stats or ValidationStats())

    @classmethod
    def failed(cls, error: Exception, stats: Optional[ValidationStats] = None) -> "ValidationResult":
        return cls(status=cls.Status.ERROR, error=error, stats=stats or ValidationStats())

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationResult.Status.VALID

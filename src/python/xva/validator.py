# Copyright 2024, xvacheck Contributors, All rights reserved.

"""
Integrity validation of xva archives.

A single forward pass pairs every data block with its checksum record:
entries are classified, digested and fed to a pairing table. The run ends
with VALID when every pair matched, INVALID on the first mismatch or
duplicate entry or when pairs are left incomplete, and ERROR when the
archive could not be read.
"""

import logging
from typing import Optional

from common import (
    Constants,
    EntryKind,
    PairState,
    ValidationResult,
    ValidationStats,
)
from common.log_manager import Verbosity, log_with_context
from system import ArchiveReader, ArchiveReaderError
from .checksum import DigestComputer, ChecksumError
from .classifier import EntryClassifier
from .pairing import PairingTable


_KIND_NAMES = {
    EntryKind.BLOCK: "data block",
    EntryKind.CHECKSUM: "checksum record",
}


class ArchiveValidator:
    """
    Validates that every data block of an xva archive matches its checksum record.
    """

    def __init__(self, read_buffer_size: int = Constants.XVA_BLOCK_SIZE_IN_BYTES):
        self.__digest_computer = DigestComputer(read_buffer_size)
        self.logger = logging.getLogger(self.__class__.__name__)

    def set_base_logger(self, base_logger: logging.Logger):
        self.logger = base_logger.getChild(self.__class__.__name__)
        self.__digest_computer.set_base_logger(self.logger)

    def validate(self, archive_path: str, verbosity: int = Verbosity.QUIET) -> ValidationResult:
        """
        Validate the archive at archive_path.

        Args:
            archive_path: Path to the xva file
            verbosity: At Verbosity.DETAILED and above, every classified entry
                       and every validated pair is logged

        Returns:
            ValidationResult with status VALID, INVALID (with reason) or ERROR (with error)
        """
        detailed = verbosity >= Verbosity.DETAILED
        stats = ValidationStats()
        self.logger.debug("Validating {}".format(archive_path))
        try:
            result = self._run(archive_path, stats, detailed)
        except (ArchiveReaderError, ChecksumError) as e:
            self.logger.debug("Validation of {} aborted: {}".format(archive_path, str(e)))
            result = ValidationResult.failed(e, stats)
        log_with_context(
            self.logger,
            logging.DEBUG,
            "Validation of {} finished: {}, {} pair(s) validated, {} byte(s) hashed".format(
                archive_path, result.status.name, stats.pairs_validated, stats.bytes_hashed
            ),
            **stats.as_dict(),
        )
        return result

    def _run(self, archive_path: str, stats: ValidationStats, detailed: bool) -> ValidationResult:
        table = PairingTable()

        reader = ArchiveReader(archive_path)
        reader.set_base_logger(self.logger)
        with reader:
            if detailed:
                self.logger.debug("Iterating on archive content")
            for entry in reader.entries():
                stats.entries_seen += 1
                classified = EntryClassifier.classify(entry.name, entry.is_regular)
                if classified.is_ignored:
                    stats.entries_ignored += 1
                    if detailed:
                        self.logger.debug("Ignoring entry {}".format(entry.name))
                    continue

                digest = self.__digest_computer.compute_digest(entry, classified.kind)
                if classified.kind == EntryKind.BLOCK:
                    stats.blocks_hashed += 1
                    stats.bytes_hashed += entry.size
                if detailed:
                    self.logger.debug(
                        "Entry {} is a {} for {}: {}".format(
                            entry.name, classified.kind.name.lower(), classified.key, digest
                        )
                    )

                observation = table.observe(classified.key, digest, classified.kind)
                if observation.state == PairState.DUPLICATE:
                    return ValidationResult.invalid(
                        "Duplicate {} for {}".format(_KIND_NAMES[observation.kind], observation.key), stats
                    )
                if observation.state == PairState.CONFLICT:
                    return ValidationResult.invalid(
                        "Invalid checksum for {}: expected {}, got {}".format(
                            observation.key, observation.expected_digest, observation.actual_digest
                        ),
                        stats,
                    )
                if observation.state == PairState.CLOSED:
                    stats.pairs_validated += 1
                    if detailed:
                        self.logger.debug("Checksum valid for {} : {}".format(observation.key, digest))

            if detailed:
                self.logger.debug("End of archive")

        remaining = table.remaining()
        if remaining:
            return ValidationResult.invalid(
                "Missing checksums or data blocks: {}".format(", ".join(remaining)), stats
            )
        return ValidationResult.valid(stats)


def validate(
    archive_path: str, verbosity: int = Verbosity.QUIET, logger: Optional[logging.Logger] = None
) -> ValidationResult:
    """
    Validate the xva archive at archive_path with the default read buffer.
    """
    validator = ArchiveValidator()
    if logger is not None:
        validator.set_base_logger(logger)
    return validator.validate(archive_path, verbosity)

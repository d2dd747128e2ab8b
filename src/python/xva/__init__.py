# Copyright 2024, xvacheck Contributors, All rights reserved.

"""
Integrity validation of xva archives.

This module provides:
- Classification of archive entries into data blocks and checksum records
- Digest computation over block content
- Order independent pairing of blocks with their checksum records
- The single pass validation driver
"""

from .classifier import EntryClassifier
from .checksum import DigestComputer, ChecksumError
from .pairing import PairingTable
from .validator import ArchiveValidator, validate

__all__ = [
    "EntryClassifier",
    "DigestComputer",
    "ChecksumError",
    "PairingTable",
    "ArchiveValidator",
    "validate",
]

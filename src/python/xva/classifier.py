# Copyright 2024, xvacheck Contributors, All rights reserved.

import re

from common import EntryKind, ClassifiedEntry


CHECKSUM_SUFFIX = ".checksum"

# Data blocks are named Ref:<index>/<8-digit sequence>
_PATTERN_BLOCK = re.compile(r"Ref:[0-9]+/[0-9]{8}")
_PATTERN_CHECKSUM = re.compile(r"Ref:[0-9]+/[0-9]{8}" + re.escape(CHECKSUM_SUFFIX))

_IGNORED = ClassifiedEntry(EntryKind.IGNORED)


class EntryClassifier:
    """
    Decides the role of an archive entry from its name and type
    The block key of a checksum record is its name without the suffix,
    which is the name of the data block it belongs to
    """

    @staticmethod
    def classify(name: str, is_regular: bool) -> ClassifiedEntry:
        if not is_regular:
            return _IGNORED
        if _PATTERN_CHECKSUM.fullmatch(name):
            return ClassifiedEntry(EntryKind.CHECKSUM, name[: -len(CHECKSUM_SUFFIX)])
        if _PATTERN_BLOCK.fullmatch(name):
            return ClassifiedEntry(EntryKind.BLOCK, name)
        return _IGNORED

# Copyright 2024, xvacheck Contributors, All rights reserved.

from common import EntryKind, PairState, PairObservation


class PairingTable:
    """
    Tracks block keys seen once, awaiting their counterpart

    A key is pending between its first and second occurrence. Blocks and
    checksum records may arrive in either order, but each key must come from
    exactly one block and one checksum record.
    """

    def __init__(self):
        # key -> (digest, kind) of the first occurrence
        self.__pending: dict[str, tuple[str, EntryKind]] = {}
        # keys whose pair is complete
        self.__closed: set[str] = set()

    def __len__(self) -> int:
        return len(self.__pending)

    def __contains__(self, key: str) -> bool:
        return key in self.__pending

    def observe(self, key: str, digest: str, kind: EntryKind) -> PairObservation:
        """
        Record one side of a pair

        The key is closed once both sides are seen with equal digests. On a
        conflict the recorded digest is left in place. A second entry of the
        same kind, or any entry for a closed key, is a duplicate.
        """
        if key in self.__closed:
            return PairObservation(key=key, state=PairState.DUPLICATE, digest=digest, kind=kind)

        if key not in self.__pending:
            self.__pending[key] = (digest, kind)
            return PairObservation(key=key, state=PairState.OPENED, digest=digest, kind=kind)

        recorded_digest, recorded_kind = self.__pending[key]
        if recorded_kind == kind:
            state = PairState.DUPLICATE
        elif recorded_digest == digest:
            del self.__pending[key]
            self.__closed.add(key)
            state = PairState.CLOSED
        else:
            state = PairState.CONFLICT
        return PairObservation(key=key, state=state, digest=digest, kind=kind, recorded_digest=recorded_digest)

    def remaining(self) -> list[str]:
        """Sorted keys still missing their counterpart"""
        return sorted(self.__pending.keys())

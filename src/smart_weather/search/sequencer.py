"""Monotonic request numbering for discarding out-of-order responses."""

from __future__ import annotations


class RequestSequencer:
    """Tag requests at issue time and accept only responses newer than the last applied.

    Without this, whichever response settles last would win even when it
    belongs to an older query.
    """

    def __init__(self) -> None:
        self._issued = 0
        self._applied = 0

    @property
    def issued(self) -> int:
        return self._issued

    @property
    def applied(self) -> int:
        return self._applied

    def issue(self) -> int:
        self._issued += 1
        return self._issued

    def is_stale(self, seq: int) -> bool:
        return seq <= self._applied

    def accept(self, seq: int) -> bool:
        """Mark `seq` applied; False means the response is stale and must be dropped."""
        if self.is_stale(seq):
            return False
        self._applied = seq
        return True

    def invalidate(self) -> None:
        """Treat every request issued so far as stale."""
        self._applied = self._issued

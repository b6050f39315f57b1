"""Log entries and snapshot state that have not yet been written to storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from raftquorum.errors import fatal

# Fixed per-entry overhead counted besides payload and context bytes.
_ENTRY_OVERHEAD = 12


@dataclass
class Entry:
    """A single Raft log entry."""

    index: int = 0
    term: int = 0
    data: bytes = b""
    context: bytes = b""

    def approximate_size(self) -> int:
        """Return an estimate of the entry's size in bytes."""
        return len(self.data) + len(self.context) + _ENTRY_OVERHEAD


@dataclass
class SnapshotMetadata:
    """Position of the last log entry a snapshot contains."""

    index: int = 0
    term: int = 0


@dataclass
class Snapshot:
    """A state machine snapshot and its metadata."""

    data: bytes = b""
    metadata: SnapshotMetadata = field(default_factory=SnapshotMetadata)

    def is_empty(self) -> bool:
        """Return True if the snapshot covers no log position."""
        return self.metadata.index == 0


class Unstable:
    """Entries and snapshot not yet persisted.

    ``entries[i]`` has log position ``i + offset``. The offset may be lower
    than the last index in storage, in which case the next write must
    truncate the stored log first.
    """

    def __init__(self, offset: int, logger: Any = None) -> None:
        self.offset: int = offset
        self.logger = logger
        self.snapshot: Snapshot | None = None
        self.entries: list[Entry] = []
        self.entries_size: int = 0

    def __repr__(self) -> str:
        return (
            f"Unstable(offset={self.offset}, entries={self.entries!r}, "
            f"snapshot={self.snapshot!r})"
        )

    def maybe_first_index(self) -> int | None:
        """Return the first possible entry index if there is a snapshot."""
        if self.snapshot is None:
            return None
        return self.snapshot.metadata.index + 1

    def maybe_last_index(self) -> int | None:
        """Return the last index if there is an unstable entry or snapshot."""
        if self.entries:
            return self.offset + len(self.entries) - 1
        if self.snapshot is None:
            return None
        return self.snapshot.metadata.index

    def maybe_term(self, idx: int) -> int | None:
        """Return the term of the entry at ``idx``, if known."""
        if idx < self.offset:
            if self.snapshot is None:
                return None
            meta = self.snapshot.metadata
            return meta.term if idx == meta.index else None
        last = self.maybe_last_index()
        if last is None or idx > last:
            return None
        return self.entries[idx - self.offset].term

    def stable_entries(self, index: int, term: int) -> None:
        """Drop the unstable entries once persisted up to ``index``/``term``."""
        if self.snapshot is not None:
            fatal(self.logger, "the unstable snapshot must be stabled before entries")
        if not self.entries:
            fatal(
                self.logger,
                f"unstable.slice is empty, expect its last one's index and term "
                f"are {index} and {term}",
            )
        last = self.entries[-1]
        if last.index != index or last.term != term:
            fatal(
                self.logger,
                f"the last one of unstable.slice has different index {last.index} "
                f"and term {last.term}, expect {index} {term}",
            )
        self.offset = last.index + 1
        self.entries.clear()
        self.entries_size = 0

    def stable_snap(self, index: int) -> None:
        """Drop the unstable snapshot once persisted at ``index``."""
        if self.snapshot is None:
            fatal(
                self.logger,
                f"unstable.snap is none, expect a snapshot with index {index}",
            )
        snap_index = self.snapshot.metadata.index
        if snap_index != index:
            fatal(
                self.logger,
                f"unstable.snap has different index {snap_index}, expect {index}",
            )
        self.snapshot = None

    def restore(self, snap: Snapshot) -> None:
        """Replace the unstable state with ``snap`` without unpacking it."""
        self.entries.clear()
        self.entries_size = 0
        self.offset = snap.metadata.index + 1
        self.snapshot = snap

    def truncate_and_append(self, ents: list[Entry]) -> None:
        """Append ``ents``, first truncating any overlapping unstable entries."""
        if not ents:
            fatal(self.logger, "cannot append an empty list of entries")
        after = ents[0].index
        if after == self.offset + len(self.entries):
            pass
        elif after <= self.offset:
            self.offset = after
            self.entries.clear()
            self.entries_size = 0
        else:
            self.must_check_outofbounds(self.offset, after)
            keep = after - self.offset
            self.entries_size -= sum(e.approximate_size() for e in self.entries[keep:])
            del self.entries[keep:]
        self.entries.extend(ents)
        self.entries_size += sum(e.approximate_size() for e in ents)

    def slice(self, lo: int, hi: int) -> list[Entry]:
        """Return the entries with indexes in ``[lo, hi)``."""
        self.must_check_outofbounds(lo, hi)
        return self.entries[lo - self.offset : hi - self.offset]

    def must_check_outofbounds(self, lo: int, hi: int) -> None:
        """Raise if ``[lo, hi)`` is inverted or outside the unstable entries."""
        if lo > hi:
            fatal(self.logger, f"invalid unstable.slice {lo} > {hi}")
        upper = self.offset + len(self.entries)
        if lo < self.offset or hi > upper:
            fatal(
                self.logger,
                f"unstable.slice[{lo}, {hi}] out of bound[{self.offset}, {upper}]",
            )
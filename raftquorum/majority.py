"""Majority quorum configuration: commit index and vote tallying."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass

from raftquorum.quorum import U64_MAX, Index, VoteResult, majority


class MajorityConfig:
    """A set of voter ids that uses majority quorums to make decisions."""

    def __init__(self, voters: Iterable[int] | None = None) -> None:
        self._voters: set[int] = set(voters) if voters is not None else set()

    def __len__(self) -> int:
        return len(self._voters)

    def __iter__(self) -> Iterator[int]:
        return iter(self._voters)

    def __contains__(self, voter_id: object) -> bool:
        return voter_id in self._voters

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MajorityConfig):
            return NotImplemented
        return self._voters == other._voters

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "(" + " ".join(str(v) for v in sorted(self._voters)) + ")"

    def __repr__(self) -> str:
        return f"MajorityConfig({sorted(self._voters)!r})"

    def copy(self) -> MajorityConfig:
        """Return an independent copy of this configuration."""
        return MajorityConfig(self._voters)

    def ids(self) -> Iterator[int]:
        """Iterate over the voter ids."""
        return iter(self._voters)

    def slice(self) -> list[int]:
        """Return the voter ids as a sorted list."""
        return sorted(self._voters)

    def raw_slice(self) -> list[int]:
        """Return the voter ids as a list, in no particular order."""
        return list(self._voters)

    def add(self, voter_id: int) -> None:
        """Add a voter."""
        self._voters.add(voter_id)

    def remove(self, voter_id: int) -> None:
        """Remove a voter if present."""
        self._voters.discard(voter_id)

    def clear(self) -> None:
        """Remove all voters."""
        self._voters.clear()

    def committed_index(
        self, use_group_commit: bool, acked: Mapping[int, Index]
    ) -> tuple[int, bool]:
        """Compute the committed index from the acknowledged indexes.

        The flag tells whether the index was computed by the group commit
        algorithm. An empty configuration yields the maximum index, so it
        behaves as the neutral half of a joint quorum.
        """
        if not self._voters:
            return U64_MAX, True

        matched = [acked.get(v) or Index() for v in sorted(self._voters)]
        matched.sort(key=lambda m: m.index, reverse=True)

        quorum_index = matched[majority(len(matched)) - 1]
        if not use_group_commit:
            return quorum_index.index, False

        quorum_commit_index = quorum_index.index
        checked_group_id = quorum_index.group_id
        single_group = True
        for m in matched:
            if m.group_id == 0:
                single_group = False
                continue
            if checked_group_id == 0:
                checked_group_id = m.group_id
                continue
            if checked_group_id == m.group_id:
                continue
            return min(m.index, quorum_commit_index), True

        if single_group:
            return quorum_commit_index, False
        return matched[-1].index, False

    def vote_result(self, check: Callable[[int], bool | None]) -> VoteResult:
        """Tally votes: ``check`` maps a voter to True, False or None (missing)."""
        if not self._voters:
            # An empty config wins by convention, so a half-populated joint
            # quorum behaves like a plain majority quorum.
            return VoteResult.WON

        yes = missing = 0
        for v in self._voters:
            vote = check(v)
            if vote is None:
                missing += 1
            elif vote:
                yes += 1

        q = majority(len(self._voters))
        if yes >= q:
            return VoteResult.WON
        if yes + missing >= q:
            return VoteResult.PENDING
        return VoteResult.LOST

    def describe(self, acked: Mapping[int, Index]) -> str:
        """Return a multi-line picture of the acknowledged indexes per voter."""
        n = len(self._voters)
        if n == 0:
            return "<empty majority quorum>"

        @dataclass
        class _Row:
            voter_id: int
            idx: Index | None
            bar: int = 0

            @property
            def value(self) -> int:
                return self.idx.index if self.idx is not None else 0

        rows = [_Row(v, acked.get(v)) for v in self._voters]
        rows.sort(key=lambda r: (r.value, r.voter_id))
        for position, (prev, row) in enumerate(zip(rows, rows[1:]), start=1):
            if prev.value < row.value:
                row.bar = position
        rows.sort(key=lambda r: r.voter_id)

        lines = [" " * n + "    idx\n"]
        for row in rows:
            if row.idx is not None:
                prefix = "x" * row.bar + ">" + " " * (n - row.bar)
                shown = str(row.idx)
            else:
                prefix = "?" + " " * n
                shown = str(Index())
            lines.append(f"{prefix} {shown:>5}    (id={row.voter_id})\n")
        return "".join(lines)
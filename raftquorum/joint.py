"""Joint quorum configuration built from two majority configurations."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from raftquorum.majority import MajorityConfig
from raftquorum.quorum import Index, VoteResult


def _as_majority(voters: Iterable[int] | MajorityConfig | None) -> MajorityConfig:
    if voters is None:
        return MajorityConfig()
    if isinstance(voters, MajorityConfig):
        return voters.copy()
    return MajorityConfig(voters)


class JointConfig:
    """Two (possibly overlapping) majority configurations.

    Decisions require the support of both majorities. An empty outgoing
    half makes the configuration behave like the incoming majority alone.
    """

    def __init__(
        self,
        voters: Iterable[int] | MajorityConfig | None = None,
        outgoing: Iterable[int] | MajorityConfig | None = None,
    ) -> None:
        self.incoming: MajorityConfig = _as_majority(voters)
        self.outgoing: MajorityConfig = _as_majority(outgoing)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JointConfig):
            return NotImplemented
        return self.incoming == other.incoming and self.outgoing == other.outgoing

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JointConfig(incoming={self.incoming}, outgoing={self.outgoing})"

    def __contains__(self, voter_id: object) -> bool:
        return voter_id in self.incoming or voter_id in self.outgoing

    def committed_index(
        self, use_group_commit: bool, acked: Mapping[int, Index]
    ) -> tuple[int, bool]:
        """Return the largest index committed in both majorities.

        The flag is true only when both halves used group commit.
        """
        i_idx, i_gc = self.incoming.committed_index(use_group_commit, acked)
        o_idx, o_gc = self.outgoing.committed_index(use_group_commit, acked)
        return min(i_idx, o_idx), i_gc and o_gc

    def vote_result(self, check: Callable[[int], bool | None]) -> VoteResult:
        """Tally votes; both majorities must vote in favour to win."""
        i = self.incoming.vote_result(check)
        o = self.outgoing.vote_result(check)
        if i is VoteResult.WON and o is VoteResult.WON:
            return VoteResult.WON
        if VoteResult.LOST in (i, o):
            return VoteResult.LOST
        return VoteResult.PENDING

    def clear(self) -> None:
        """Remove all voters from both halves."""
        self.incoming.clear()
        self.outgoing.clear()

    def is_singleton(self) -> bool:
        """Return True if the only voter is a single incoming member."""
        return len(self.outgoing) == 0 and len(self.incoming) == 1

    def ids(self) -> set[int]:
        """Return the union of voter ids of both halves."""
        return set(self.incoming) | set(self.outgoing)

    def contains(self, voter_id: int) -> bool:
        """Return True if ``voter_id`` is a voter in either half."""
        return voter_id in self

    def describe(self, acked: Mapping[int, Index]) -> str:
        """Return a multi-line picture of the acknowledged indexes of all voters."""
        return MajorityConfig(self.ids()).describe(acked)
"""Basic quorum types: vote outcomes, acknowledged log positions, majority size."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict

U64_MAX = (1 << 64) - 1


class VoteResult(enum.Enum):
    """Outcome of a vote."""

    PENDING = "VotePending"
    LOST = "VoteLost"
    WON = "VoteWon"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Index:
    """A Raft log position, optionally tagged with a commit group id."""

    index: int = 0
    group_id: int = 0

    def __str__(self) -> str:
        shown = "∞" if self.index == U64_MAX else str(self.index)
        if self.group_id == 0:
            return shown
        return f"[{self.group_id}]{shown}"

    def __repr__(self) -> str:
        return str(self)


AckIndexer = Dict[int, Index]
"""Mapping from voter id to the index that voter has acknowledged."""


def majority(total: int) -> int:
    """Return the number of members that make a majority of ``total``."""
    return total // 2 + 1
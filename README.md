# raftquorum

Building blocks for the Raft consensus algorithm. The package covers majority
and joint (two-phase membership change) quorum configurations, vote tallying,
committed-index computation including group commit, and the in-memory log of
entries that have not yet been written to stable storage.

It has no dependencies outside the standard library.

## Installation

```
pip install raftquorum
```

## Modules

- `raftquorum.quorum`: `VoteResult`, `Index`, `majority(total)`.
- `raftquorum.majority`: `MajorityConfig`.
- `raftquorum.joint`: `JointConfig`.
- `raftquorum.log_unstable`: `Entry`, `SnapshotMetadata`, `Snapshot`, `Unstable`.
- `raftquorum.errors`: `RaftFatalError`, `fatal(logger, msg)`, `default_logger()`.

## Quorums

`majority(total)` gives the number of votes that make a majority of `total`
voters (`total // 2 + 1`).

`Index(index, group_id)` is a log position that a voter has acknowledged,
optionally tagged with a commit group id. Printed, it shows the index (or `∞`
for the maximum 64-bit value), prefixed by `[group_id]` when the group id is
not zero.

A `MajorityConfig` holds a set of voter ids. It supports `len()`, iteration,
`in`, `add`, `remove`, `clear`, `copy`, `slice()` (sorted ids) and
`raw_slice()` (unordered ids). Given a mapping of voter id to `Index`, it works
out the committed index; voters missing from the mapping count as index 0:

```python
from raftquorum.majority import MajorityConfig
from raftquorum.quorum import Index

config = MajorityConfig({1, 2, 3})
acked = {1: Index(100), 2: Index(101), 3: Index(99)}
index, used_group_commit = config.committed_index(False, acked)
# index == 100, used_group_commit is False
```

With `use_group_commit=True`, group ids are taken into account: the index is
only reported as computed by group commit (flag `True`) when the acknowledging
voters span more than one group.

Votes are tallied with a callable that returns `True` (yes), `False` (no) or
`None` (not yet voted) for a voter id. The result is a `VoteResult`:
`PENDING`, `LOST` or `WON`.

```python
votes = {1: True, 2: True}
result = config.vote_result(votes.get)   # VoteResult.WON
```

An empty majority configuration wins every vote and reports the maximum
64-bit index as committed, so it behaves as a neutral half of a joint
configuration.

## Joint configurations

`JointConfig(voters, outgoing)` pairs an incoming and an outgoing majority
during a membership change. Either half may be given as an iterable of ids or
as a `MajorityConfig` (which is copied); an omitted half is empty. An index is
committed only when both halves commit it, and a vote is won only when both
halves win it; it is lost when either half loses it.

```python
from raftquorum.joint import JointConfig

joint = JointConfig({1, 2, 3}, {3, 4, 5})
joint.contains(4)       # True
joint.is_singleton()    # False
joint.ids()             # {1, 2, 3, 4, 5}
joint.committed_index(False, acked)
```

`describe(acked)` on either configuration renders a small text chart of the
acknowledged indexes per voter, useful when debugging.

## The unstable log

`Unstable` keeps entries (and possibly an incoming `Snapshot`) that have not
yet been persisted. Entry `i` of its list sits at log position `offset + i`,
and `entries_size` tracks the sum of `Entry.approximate_size()` over them.

```python
from raftquorum.errors import default_logger
from raftquorum.log_unstable import Entry, Unstable

log = Unstable(5, default_logger())
log.truncate_and_append([Entry(index=5, term=1), Entry(index=6, term=1)])
log.maybe_last_index()    # 6
log.maybe_term(5)         # 1
log.slice(5, 7)           # both entries
log.stable_entries(6, 1)  # entries persisted; offset becomes 7
```

`restore(snapshot)` drops all entries and moves the offset past the
snapshot; `stable_snap(index)` clears the snapshot once it is persisted.

## Errors and logging

Violated invariants, such as slicing out of bounds, appending an empty list
of entries, or marking the wrong entries or snapshot stable, raise
`RaftFatalError` from `raftquorum.errors`. The message is also logged as
critical on the logger the `Unstable` was given, with any key/value context of
a `logging.LoggerAdapter` appended to the error text.

`default_logger()` returns a `logging.LoggerAdapter` over the `raftquorum`
logger, tagged with a `case` value taken from the current thread name.

## What this package does not do

It provides the quorum and unstable-log pieces only. There is no Raft node or
state machine (elections, ticking, message stepping), no message transport,
no progress tracking, and no persistent storage of entries or snapshots;
callers supply those themselves.
import pytest

from raftquorum.majority import MajorityConfig
from raftquorum.quorum import U64_MAX, Index, VoteResult


def _acked(values):
    return {voter: Index(index) for voter, index in values.items() if index > 0}


def test_committed_index_documented_example():
    cfg = MajorityConfig([1, 2, 3, 4, 5])
    acked = _acked({1: 2, 2: 2, 3: 2, 4: 4, 5: 5})
    assert cfg.committed_index(False, acked) == (2, False)


def test_group_commit_documented_example():
    cfg = MajorityConfig([1, 2, 3])
    acked = {1: Index(1, 1), 2: Index(2, 2), 3: Index(3, 2)}
    assert cfg.committed_index(True, acked) == (1, True)


def test_empty_config_commits_everything():
    cfg = MajorityConfig()
    assert cfg.committed_index(False, {}) == (U64_MAX, True)
    assert cfg.committed_index(True, {}) == (U64_MAX, True)


def test_empty_config_wins_vote():
    assert MajorityConfig().vote_result(lambda _id: None) is VoteResult.WON


@pytest.mark.parametrize(
    "values",
    [
        {1: 100, 2: 101, 3: 99},
        {1: 5, 2: 0, 3: 7},
        {1: 3, 2: 3, 3: 3, 4: 9},
        {1: 1, 2: 4, 3: 8, 4: 2, 5: 6, 6: 3, 7: 5, 8: 10, 9: 7},
    ],
)
def test_committed_index_is_backed_by_majority(values):
    cfg = MajorityConfig(values)
    acked = _acked(values)
    idx, flag = cfg.committed_index(False, acked)
    assert flag is False
    assert idx in set(values.values())
    supporters = sum(1 for v in values.values() if v >= idx)
    assert supporters > len(values) // 2


@pytest.mark.parametrize(
    "values",
    [
        {1: 100, 2: 101, 3: 99},
        {1: 2, 2: 2, 3: 2, 4: 4, 5: 5},
        {1: 5, 2: 9, 3: 7, 4: 1},
    ],
)
def test_lowering_index_below_commit_keeps_commit(values):
    cfg = MajorityConfig(values)
    acked = _acked(values)
    idx, _ = cfg.committed_index(False, acked)
    for voter, ack in list(acked.items()):
        if idx > ack.index:
            acked[voter] = Index(ack.index - 1, ack.group_id)
            assert cfg.committed_index(False, acked)[0] == idx
            acked[voter] = Index(0, ack.group_id)
            assert cfg.committed_index(False, acked)[0] == idx
            acked[voter] = ack


def test_group_commit_single_group_matches_plain_commit():
    cfg = MajorityConfig([1, 2, 3])
    acked = {1: Index(4, 1), 2: Index(6, 1), 3: Index(9, 1)}
    plain = cfg.committed_index(False, acked)[0]
    assert cfg.committed_index(True, acked) == (plain, False)


def test_group_commit_without_groups_uses_lowest_index():
    values = {1: 4, 2: 6, 3: 9}
    cfg = MajorityConfig(values)
    result = cfg.committed_index(True, _acked(values))
    assert result == (min(values.values()), False)


def test_vote_result_all_yes_no_missing():
    cfg = MajorityConfig([1, 2, 3])
    assert cfg.vote_result(lambda _id: True) is VoteResult.WON
    assert cfg.vote_result(lambda _id: False) is VoteResult.LOST
    assert cfg.vote_result(lambda _id: None) is VoteResult.PENDING


@pytest.mark.parametrize("size", [1, 2, 3, 4, 5, 7])
def test_vote_result_is_monotonic_in_yes_votes(size):
    cfg = MajorityConfig(range(1, size + 1))
    order = {VoteResult.LOST: 0, VoteResult.PENDING: 1, VoteResult.WON: 2}
    previous = -1
    for yes_count in range(size + 1):
        votes = {v: v <= yes_count for v in range(1, size + 1)}
        result = cfg.vote_result(votes.get)
        assert result is not VoteResult.PENDING
        assert order[result] >= previous
        previous = order[result]
    assert previous == order[VoteResult.WON]


def test_describe_empty():
    assert MajorityConfig().describe({}) == "<empty majority quorum>"


def test_describe_lists_each_voter():
    cfg = MajorityConfig([1, 2, 3])
    acked = {1: Index(100), 2: Index(101)}
    lines = cfg.describe(acked).splitlines()
    assert len(lines) == 4
    assert lines[0].endswith("idx")
    assert [line.rsplit("(id=", 1)[1] for line in lines[1:]] == ["1)", "2)", "3)"]
    assert lines[3].startswith("?")
    assert "100" in lines[1] and "101" in lines[2]
    bars = [line.index(">") for line in lines[1:3]]
    assert bars[0] < bars[1]


def test_set_operations_and_slices():
    cfg = MajorityConfig([3, 1])
    cfg.add(2)
    assert cfg.slice() == [1, 2, 3]
    assert sorted(cfg.raw_slice()) == [1, 2, 3]
    assert sorted(cfg.ids()) == [1, 2, 3]
    assert 2 in cfg and len(cfg) == 3
    assert str(cfg) == "(1 2 3)"
    cfg.remove(2)
    assert 2 not in cfg
    assert cfg == MajorityConfig([1, 3])
    cfg.clear()
    assert len(cfg) == 0
    assert cfg == MajorityConfig()
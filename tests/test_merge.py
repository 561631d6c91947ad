import itertools

import pytest

from lapsed.staleness import InteractionIndex, merge_interactions

from .helpers import record


def test_merge_keeps_max_timestamp_across_sources():
    calls = [record("555", 5), record("555", 20, "call")]
    messages = [record("555", 3, "message")]

    index = merge_interactions([calls, messages])

    assert dict(index) == {"555": 20}


def test_merge_is_order_independent():
    calls = [record("111", 10), record("222", 40), record("111", 30)]
    messages = [record("222", 5, "message"), record("333", 7, "message"), record("(111)", 25, "message")]
    expected = dict(merge_interactions([calls, messages]))

    for sources in itertools.permutations([calls, messages, []]):
        assert dict(merge_interactions(sources)) == expected
    assert dict(merge_interactions([list(reversed(messages)), list(reversed(calls))])) == expected
    assert expected == {"111": 30, "222": 40, "333": 7}


def test_merge_normalizes_raw_identifiers_into_one_key():
    index = merge_interactions([[record("555-1234", 1), record("(555) 1234", 9)]])
    assert dict(index) == {"5551234": 9}


def test_merge_skips_unusable_identifiers_and_missing_timestamps():
    index = merge_interactions([[
        record("Unknown", 100),
        record(None, 200),
        record("", 300),
        record("555", None),
        record("777", 1),
    ]])

    assert dict(index) == {"777": 1}
    assert "" not in index


def test_empty_sources_contribute_nothing():
    assert len(merge_interactions([])) == 0
    assert len(merge_interactions([[], []])) == 0


def test_index_is_read_only():
    index = merge_interactions([[record("555", 1)]])
    with pytest.raises(TypeError):
        index["555"] = 2
    assert index["555"] == 1


def test_index_latest():
    assert InteractionIndex().latest() is None
    index = InteractionIndex({"111": 5, "222": 50})
    assert index.latest() == ("222", 50)

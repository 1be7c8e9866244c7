"""Tests for ranking commit dates onto a color scale."""

import itertools

from blametint.blame_parser import ChangeRecord, parse_blame
from blametint.color_index import ColorIndex, index_colors
from blametint.constants import NO_COLOR

SCALE = ["#c0", "#c1", "#c2"]


def _record(nr: int, timestamp: int) -> ChangeRecord:
    return ChangeRecord(oid=f"{nr:040x}", lines=[nr], timestamp=timestamp)


def _blame_str(seconds_list: list[int]) -> str:
    entries = []
    for nr, seconds in enumerate(seconds_list, start=1):
        entries.append(
            f"{nr:040x} {nr} {nr} 1\n"
            f"author Author {nr}\n"
            f"author-time {seconds}\n"
            f"summary Commit {nr}\n"
            f"\tline {nr}\n"
        )
    return "".join(entries)


def test_newest_date_gets_first_color():
    records = [_record(1, 1000), _record(2, 3000), _record(3, 2000)]
    assert index_colors(records, SCALE) == {3000: "#c0", 2000: "#c1", 1000: "#c2"}


def test_ranking_independent_of_input_order():
    for order in itertools.permutations([100, 200, 300]):
        records = parse_blame(_blame_str(list(order)))
        color_index = ColorIndex.from_records(records, SCALE)
        assert color_index.color_for(300_000) == "#c0"
        assert color_index.color_for(200_000) == "#c1"
        assert color_index.color_for(100_000) == "#c2"


def test_equal_dates_share_one_color():
    records = [_record(1, 5000), _record(2, 5000), _record(3, 4000)]
    timestamp2color = index_colors(records, SCALE)
    assert timestamp2color == {5000: "#c0", 4000: "#c1"}


def test_dates_beyond_scale_get_no_color():
    seconds_list = [10, 60, 20, 50, 30, 40]
    color_index = ColorIndex.from_records(parse_blame(_blame_str(seconds_list)), SCALE)
    assert len(color_index) == len(SCALE)
    no_color_timestamps = [
        s * 1000 for s in seconds_list if color_index.color_for(s * 1000) == NO_COLOR
    ]
    # The oldest N - L dates are not colored.
    assert sorted(no_color_timestamps) == [10_000, 20_000, 30_000]
    assert 60_000 in color_index
    assert 10_000 not in color_index


def test_unknown_timestamp_gets_no_color():
    color_index = ColorIndex.from_records([_record(1, 1000)], SCALE)
    assert color_index.color_for(1000) == "#c0"
    assert color_index.color_for(999) == NO_COLOR


def test_empty_records():
    color_index = ColorIndex.from_records(parse_blame(""), SCALE)
    assert len(color_index) == 0
    assert color_index.color_for(0) == NO_COLOR


def test_empty_scale():
    assert index_colors([_record(1, 1000)], []) == {}

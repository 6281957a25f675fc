"""Segment Chain — tests for ordered traversal, insertion splits, and removal splices.

Tests cover:
    - ordered_stations walks head to tail regardless of storage order
    - distance_between sums hops in either direction and is additive
    - add() splits from the front / back, extends at head / tail
    - add() rejects duplicates, redundant segments, disconnected segments,
      and splits that leave a non-positive distance (chain unchanged)
    - remove() drops head / tail, merges interior, refuses single-section chains
      and stations not on the line
"""

import pytest
from uuid import uuid4

from subway.core.domain_types import ChainPosition, SplitKind
from subway.core.errors import (
    ChainEmptyError,
    DuplicateSegmentError,
    InvalidDistanceError,
    NotPossibleRemoveError,
    SegmentNotFoundError,
    StationsAlreadyExistError,
    StationsNoExistError,
)
from subway.core.section import Section, Station
from subway.core.sections import Sections


def _station(name: str) -> Station:
    return Station(id=uuid4(), name=name)


@pytest.fixture
def a():
    return _station("Samseong")


@pytest.fixture
def b():
    return _station("Gyodae")


@pytest.fixture
def c():
    return _station("Seolleung")


@pytest.fixture
def d():
    return _station("Yeoksam")


@pytest.fixture
def chain(a, b):
    """A -(20)- B"""
    return Sections.of(Section(a, b, 20))


def _assert_path_property(chain: Sections):
    ordered = chain.ordered_stations()
    assert len(ordered) == len(chain) + 1
    pairs = {(s.up_station, s.down_station) for s in chain.sections}
    for up, down in zip(ordered, ordered[1:]):
        assert (up, down) in pairs


# ─── ordered_stations ────────────────────────────────────────────

def test_ordered_stations_single_section(chain, a, b):
    assert chain.ordered_stations() == (a, b)


def test_ordered_stations_ignores_storage_order(a, b, c, d):
    chain = Sections([Section(c, d, 3), Section(a, b, 1), Section(b, c, 2)])
    assert chain.ordered_stations() == (a, b, c, d)
    assert [s.distance for s in chain] == [1, 2, 3]


def test_ordered_stations_on_empty_chain_raises():
    with pytest.raises(ChainEmptyError):
        Sections.empty().ordered_stations()


def test_head_and_tail(a, b, c):
    chain = Sections.of(Section(a, b, 5), Section(b, c, 5))
    assert chain.head == a
    assert chain.tail == c


def test_stations_compare_by_id_not_name(chain, a):
    same_station_other_object = Station(id=a.id, name="renamed")
    assert same_station_other_object in chain
    assert chain.ordered_stations()[0] == same_station_other_object


# ─── distance_between ────────────────────────────────────────────

def test_distance_between_adjacent(chain, a, b):
    assert chain.distance_between(a, b) == 20


def test_distance_between_is_direction_independent(chain, a, b):
    assert chain.distance_between(b, a) == 20


def test_distance_between_same_station_is_zero(chain, a):
    assert chain.distance_between(a, a) == 0


def test_distance_between_station_not_on_line_raises(chain, a, c):
    with pytest.raises(SegmentNotFoundError):
        chain.distance_between(a, c)


def test_distance_between_on_empty_chain_raises(a, b):
    with pytest.raises(SegmentNotFoundError):
        Sections.empty().distance_between(a, b)


def test_distance_between_is_additive(a, b, c, d):
    chain = Sections.of(Section(a, b, 4), Section(b, c, 6), Section(c, d, 9))
    assert chain.distance_between(a, b) + chain.distance_between(b, d) == chain.distance_between(a, d)
    assert chain.distance_between(a, d) == 19


# ─── add: splits and extensions ──────────────────────────────────

def test_add_extends_at_tail(chain, a, b, c):
    """(A - B) + (B - C) => (A - B - C)"""
    kind = chain.add(Section(b, c, 10))
    assert kind == SplitKind.EXTEND
    assert chain.ordered_stations() == (a, b, c)
    assert chain.distance_between(a, b) == 20
    assert chain.distance_between(b, c) == 10
    _assert_path_property(chain)


def test_add_extends_at_head(chain, a, b, c):
    """(A - B) + (C - A) => (C - A - B)"""
    kind = chain.add(Section(c, a, 10))
    assert kind == SplitKind.EXTEND
    assert chain.ordered_stations() == (c, a, b)
    assert chain.distance_between(c, a) == 10
    assert chain.distance_between(a, b) == 20
    _assert_path_property(chain)


def test_add_sharing_up_station_splits_from_front(chain, a, b, c):
    """(A - B(20)) + (A - C(10)) => (A - C(10) - B(10))"""
    kind = chain.add(Section(a, c, 10))
    assert kind == SplitKind.FRONT
    assert chain.ordered_stations() == (a, c, b)
    assert chain.distance_between(a, c) == 10
    assert chain.distance_between(c, b) == 10
    _assert_path_property(chain)


def test_add_sharing_down_station_splits_from_back(chain, a, b, c):
    """(A - B(20)) + (C - B(5)) => (A - C(15) - B(5))"""
    kind = chain.add(Section(c, b, 5))
    assert kind == SplitKind.BACK
    assert chain.ordered_stations() == (a, c, b)
    assert chain.distance_between(a, c) == 15
    assert chain.distance_between(c, b) == 5
    _assert_path_property(chain)


def test_add_front_then_back_split(chain, a, b, c, d):
    """(A - B(20)) + (A - C(10)) + (D - B(5)) => (A - C(10) - D(5) - B(5))"""
    chain.add(Section(a, c, 10))
    chain.add(Section(d, b, 5))
    assert chain.ordered_stations() == (a, c, d, b)
    assert chain.distance_between(a, c) == 10
    assert chain.distance_between(c, d) == 5
    assert chain.distance_between(d, b) == 5
    assert chain.distance_between(a, b) == 20
    _assert_path_property(chain)


def test_split_keeps_row_id_of_shrunk_section(a, b, c):
    row_id = uuid4()
    chain = Sections([Section(a, b, 20, id=row_id)])
    chain.add(Section(a, c, 10))
    shrunk = next(s for s in chain.sections if s.id == row_id)
    assert (shrunk.up_station, shrunk.down_station, shrunk.distance) == (c, b, 10)


def test_add_to_empty_chain(a, b):
    chain = Sections.empty()
    chain.add(Section(a, b, 7))
    assert chain.ordered_stations() == (a, b)


# ─── add: rejections ─────────────────────────────────────────────

def test_add_exact_duplicate_raises(chain, a, b):
    with pytest.raises(DuplicateSegmentError):
        chain.add(Section(a, b, 10))


def test_duplicate_is_also_a_stations_already_exist_error(chain, a, b):
    with pytest.raises(StationsAlreadyExistError):
        chain.add(Section(a, b, 10))


def test_add_reversed_existing_pair_raises(chain, a, b):
    with pytest.raises(StationsAlreadyExistError) as exc_info:
        chain.add(Section(b, a, 10))
    assert exc_info.value.code == "STATIONS_ALREADY_EXIST"


def test_add_shortcut_between_existing_stations_raises(a, b, c):
    chain = Sections.of(Section(a, b, 5), Section(b, c, 5))
    with pytest.raises(StationsAlreadyExistError):
        chain.add(Section(a, c, 3))
    assert len(chain) == 2


def test_add_disconnected_section_raises(chain, c, d):
    with pytest.raises(StationsNoExistError):
        chain.add(Section(c, d, 10))


def test_add_split_equal_to_existing_distance_raises(chain, a, c):
    with pytest.raises(InvalidDistanceError):
        chain.add(Section(a, c, 20))


def test_add_split_longer_than_existing_raises(chain, b, c):
    with pytest.raises(InvalidDistanceError):
        chain.add(Section(c, b, 25))


def test_rejected_add_leaves_chain_unchanged(chain, a, b, c):
    before = chain.sections
    with pytest.raises(InvalidDistanceError):
        chain.add(Section(a, c, 30))
    assert chain.sections == before
    assert chain.ordered_stations() == (a, b)


# ─── remove ──────────────────────────────────────────────────────

def test_remove_only_section_raises(chain, a):
    with pytest.raises(NotPossibleRemoveError):
        chain.remove(a)


def test_remove_station_not_on_line_raises(chain, a, b, c, d):
    chain.add(Section(b, c, 5))
    with pytest.raises(NotPossibleRemoveError):
        chain.remove(d)
    assert chain.ordered_stations() == (a, b, c)


def test_remove_head(chain, a, b, c):
    chain.add(Section(b, c, 5))
    assert chain.remove(a) == ChainPosition.HEAD
    assert chain.ordered_stations() == (b, c)


def test_remove_tail(chain, a, b, c):
    chain.add(Section(b, c, 5))
    assert chain.remove(c) == ChainPosition.TAIL
    assert chain.ordered_stations() == (a, b)
    assert chain.distance_between(a, b) == 20


def test_remove_interior_merges_neighbours(chain, a, b, c):
    chain.add(Section(a, c, 10))
    assert chain.remove(c) == ChainPosition.INTERIOR
    assert chain.ordered_stations() == (a, b)
    assert chain.distance_between(a, b) == 20


def test_remove_interior_of_four_station_chain(chain, a, b, c, d):
    """(A - C(10) - D(5) - B(5)) - C => (A - D(15) - B(5))"""
    chain.add(Section(a, c, 10))
    chain.add(Section(d, b, 5))
    chain.remove(c)
    assert chain.ordered_stations() == (a, d, b)
    assert chain.distance_between(a, d) == 15
    assert chain.distance_between(d, b) == 5
    _assert_path_property(chain)


def test_remove_interior_keeps_upstream_row_id(a, b, c):
    up_id, down_id = uuid4(), uuid4()
    chain = Sections([Section(a, b, 4, id=up_id), Section(b, c, 6, id=down_id)])
    chain.remove(b)
    (merged,) = chain.sections
    assert merged.id == up_id
    assert merged.distance == 10


def test_position_of(a, b, c):
    chain = Sections.of(Section(a, b, 5), Section(b, c, 5))
    assert chain.position_of(a) == ChainPosition.HEAD
    assert chain.position_of(b) == ChainPosition.INTERIOR
    assert chain.position_of(c) == ChainPosition.TAIL


def test_section_between_finds_either_direction(chain, a, b):
    assert chain.section_between(b, a).distance == 20

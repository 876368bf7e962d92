"""
Tests for bound predicates.

Critical: predicates decide alone whether a call must fault, so they
must agree with the reference on every shape and never wrap at MAX_OFFSET.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from oracle.core.bounds import (
    MAX_OFFSET,
    From,
    Full,
    Inclusive,
    Range,
    To,
    ToInclusive,
    insert_faults,
    is_char_boundary,
    remove_faults,
    split_off_faults,
    truncate_faults,
)
from oracle.core.faults import capture_fault
from oracle.generation.strategies import bounds, offsets, texts
from smartstr import MAX_OFFSET as TEXT_MAX_OFFSET
from smartstr import RefString

# "aЬ€😀": 1 + 2 + 3 + 4 bytes; boundaries at 0, 1, 3, 6, 10
MIXED = "aЬ€😀"


def test_max_offset_matches_text_types():
    """Oracle and text types must agree on the largest offset."""
    assert MAX_OFFSET == TEXT_MAX_OFFSET == 2 ** 64 - 1


def test_char_boundaries_of_mixed_widths():
    """Only offsets between encoded characters are boundaries."""
    boundaries = [i for i in range(12) if is_char_boundary(MIXED, i)]
    assert boundaries == [0, 1, 3, 6, 10]


def test_char_boundary_of_empty_content():
    assert is_char_boundary("", 0)
    assert not is_char_boundary("", 1)


@pytest.mark.parametrize(
    "shape, faults",
    [
        (Range(0, 10), False),
        (Range(1, 3), False),
        (Range(3, 1), True),
        (Range(0, 2), True),
        (Range(2, 3), True),
        (Range(0, 11), True),
        (From(6), False),
        (From(10), False),
        (From(4), True),
        (From(11), True),
        (To(3), False),
        (To(5), True),
        (To(11), True),
        (Full(), False),
        (Inclusive(0, 0), False),
        (Inclusive(1, 2), False),
        (Inclusive(1, 1), True),
        (Inclusive(2, 2), True),
        (Inclusive(3, 1), True),
        (Inclusive(6, 10), True),
        (ToInclusive(9), False),
        (ToInclusive(5), False),
        (ToInclusive(6), True),
        (ToInclusive(10), True),
    ],
)
def test_shape_predicates(shape, faults):
    """Every shape follows its fault table on mixed-width content."""
    assert shape.should_fault(MIXED) is faults


def test_absurd_range_end_faults():
    """An end far past the content faults."""
    assert Range(0, 13764126361151078400).should_fault("")


def test_to_inclusive_max_offset_faults_without_wrapping():
    """end + 1 at MAX_OFFSET must not wrap to 0 (which is always a boundary)."""
    for content in ("a", MIXED, "x" * 100):
        assert ToInclusive(MAX_OFFSET).should_fault(content)
        assert capture_fault(lambda: ToInclusive(MAX_OFFSET).index(RefString(content)))


def test_inclusive_max_offset_faults_without_wrapping():
    assert Inclusive(0, MAX_OFFSET).should_fault(MIXED)
    assert Inclusive(MAX_OFFSET, MAX_OFFSET).should_fault(MIXED)


def test_to_inclusive_inside_two_byte_char_faults():
    """'Ь' is two bytes: ..=0 ends at byte 1, inside the character."""
    assert ToInclusive(0).should_fault("Ь")
    assert capture_fault(lambda: ToInclusive(0).index(RefString("Ь")))


def test_point_predicates():
    """Truncate past the end is fine; remove at the end is not."""
    assert not truncate_faults(MIXED, 100)
    assert truncate_faults(MIXED, 2)
    assert not truncate_faults(MIXED, 3)

    assert remove_faults(MIXED, 10)
    assert remove_faults(MIXED, 4)
    assert not remove_faults(MIXED, 6)

    assert not insert_faults(MIXED, 10)
    assert insert_faults(MIXED, 11)
    assert insert_faults(MIXED, 7)

    assert not split_off_faults(MIXED, 10)
    assert split_off_faults(MIXED, 11)
    assert split_off_faults(MIXED, 2)


@given(texts(), bounds())
def test_slice_prediction_matches_reference(content, shape):
    """A predicted fault happens on the reference, and only then."""
    reference = RefString(content)
    assert shape.should_fault(content) == capture_fault(lambda: shape.index(reference))


@given(texts(), offsets())
def test_point_predictions_match_reference(content, offset):
    """Point predicates agree with the reference for every operation."""
    def attempt(operation):
        return capture_fault(lambda: operation(RefString(content)))

    assert truncate_faults(content, offset) == attempt(lambda r: r.truncate(offset))
    assert remove_faults(content, offset) == attempt(lambda r: r.remove(offset))
    assert insert_faults(content, offset) == attempt(lambda r: r.insert(offset, "x"))
    assert insert_faults(content, offset) == attempt(lambda r: r.insert_str(offset, "xy"))
    assert split_off_faults(content, offset) == attempt(lambda r: r.split_off(offset))


@given(st.text(max_size=20))
def test_boundary_agrees_with_reference(content):
    """Byte inspection and prefix decoding find the same boundaries."""
    reference = RefString(content)
    for i in range(len(reference) + 2):
        assert is_char_boundary(content, i) == reference.is_char_boundary(i)

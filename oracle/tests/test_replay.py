"""
Tests for dual execution.

Critical: recorded regressions must keep passing in every layout mode, and
a divergence must name the step, the action and the history behind it.
"""

import pytest

from oracle.core.actions import (
    Case,
    Clear,
    Empty,
    FromBorrowed,
    FromOwned,
    Insert,
    InsertStr,
    IntoReference,
    Pop,
    Push,
    PushStr,
    Remove,
    Slice,
    SplitOff,
    Truncate,
)
from oracle.core.bounds import MAX_OFFSET, Range, ToInclusive
from oracle.core.errors import Check, DivergenceError
from oracle.replay import check_invariants, execute, run_case
from smartstr import CompactString, PrefixedString, RefString

CHURN_TEXT = "a0 A຦aⷠ" + "0 \U0001f300Aa"
CHURN_ACTIONS = [
    Push(" "),
    Push("¡"),
    Pop(),
    Pop(),
    Push("¡"),
    Pop(),
    Push("\U00010000"),
    Push("\ue000"),
    Pop(),
    Insert(14, "A"),
]


# =============================================================================
# RECORDED REGRESSIONS
# =============================================================================

def test_insert_inside_char_after_churn(subject_type):
    """Boundary accounting survives multi-byte push/pop churn; offset 14 is inside the emoji."""
    result = execute(subject_type, FromOwned(CHURN_TEXT), CHURN_ACTIONS)
    assert result.applied == len(CHURN_ACTIONS)
    assert result.subject.as_str() == CHURN_TEXT + "\U00010000"


def test_absurd_range_end_faults_both_sides(subject_type):
    result = execute(subject_type, Empty(), [Slice(Range(0, 13764126361151078400))])
    assert result.applied == 1
    assert len(result.subject) == 0


def test_insert_at_end_of_21_bytes_stays_inline(subject_type):
    """A valid insert that still fits must not promote the subject."""
    text = "abcdefghijklm" + "\U0001f600\U0001f600"
    assert len(text.encode("utf-8")) == 21

    result = execute(subject_type, FromBorrowed(text), [Insert(21, " ")])
    assert result.subject.as_str() == text + " "
    assert result.subject.is_inline()


def test_insert_inside_four_byte_char_of_31_bytes(subject_type):
    """Offset 21 falls inside a 4-byte character; the insert faults on both sides."""
    text = "ኲΣ A𑒀a ®Σ a0🠀  aA®A"
    assert len(text.encode("utf-8")) == 31

    result = execute(subject_type, FromBorrowed(text), [Insert(21, " ")])
    assert result.subject.as_str() == text


def test_inclusive_slice_inside_two_byte_char(subject_type):
    result = execute(subject_type, Empty(), [Push("Ь"), Slice(ToInclusive(0))])
    assert result.subject.as_str() == "Ь"


def test_insert_str_at_exact_inline_capacity(subject_type):
    """A string exactly max_inline bytes long fits inline without a fault."""
    text = "\0" * subject_type.MODE.max_inline
    result = execute(subject_type, Empty(), [InsertStr(0, text)])
    assert result.subject.as_str() == text
    assert result.subject.is_inline()


def test_inclusive_slice_to_max_offset(subject_type):
    result = execute(subject_type, FromBorrowed("non-empty"), [Slice(ToInclusive(MAX_OFFSET))])
    assert result.subject.as_str() == "non-empty"


# =============================================================================
# CLEAN RUNS
# =============================================================================

def test_mixed_actions_across_threshold(subject_type):
    """Grow past the inline threshold, shrink back, and split."""
    actions = [
        PushStr("x" * 30),
        Truncate(5),
        Push("€"),
        Remove(0),
        SplitOff(2),
        IntoReference(),
        Clear(),
        Pop(),
    ]
    result = execute(subject_type, FromBorrowed("héllo"), actions)
    assert result.applied == len(actions)
    assert result.subject.as_str() == ""
    assert result.subject.is_inline()


def test_run_case_matches_execute(subject_type):
    case = Case(FromBorrowed("abc"), (Push("d"), Truncate(2)))
    assert run_case(subject_type, case).subject.as_str() == "ab"


def test_execute_accepts_any_iterable():
    result = execute(CompactString, Empty(), (a for a in [Push("a"), Push("b")]))
    assert result.applied == 2
    assert result.reference.as_str() == "ab"


# =============================================================================
# DIVERGENCE REPORTING
# =============================================================================

class StickyPop(CompactString):
    """pop() returns the last char without removing it."""
    __slots__ = ()

    def pop(self):
        text = self.as_str()
        return text[-1] if text else None


class NeverInline(CompactString):
    __slots__ = ()

    def is_inline(self):
        return False


class BrokenPush(PrefixedString):
    __slots__ = ()

    def push(self, ch):
        raise RuntimeError("push is broken")


class LengthOffByOne(CompactString):
    __slots__ = ()

    def __len__(self):
        return super().__len__() + 1


class ReversedAgainstStr(CompactString):
    """Orders backwards against plain str, correctly against its own type."""
    __slots__ = ()

    def __lt__(self, other):
        if isinstance(other, str):
            return self.as_bytes() > other.encode("utf-8")
        return super().__lt__(other)


class NeverEqualToSelfType(PrefixedString):
    __slots__ = ()

    def __eq__(self, other):
        if isinstance(other, PrefixedString):
            return False
        return super().__eq__(other)


def test_divergence_names_step_action_and_history():
    actions = [Push("a"), Push("b"), Pop(), Push("c")]

    with pytest.raises(DivergenceError) as exc_info:
        execute(StickyPop, Empty(), actions)

    err = exc_info.value
    assert err.check is Check.CONTENT
    assert err.step == 3
    assert err.action == Pop()
    assert err.history == tuple(actions[:3])
    assert "step 3" in str(err)


def test_construction_divergence_is_step_zero():
    with pytest.raises(DivergenceError) as exc_info:
        execute(NeverInline, Empty(), [Push("a")])

    err = exc_info.value
    assert err.check is Check.INLINE
    assert err.step == 0
    assert err.action is None
    assert err.history == ()
    assert "construction" in str(err)


def test_unpredicted_fault_is_divergence():
    """An exception nobody predicted becomes an unexpected-fault divergence."""
    with pytest.raises(DivergenceError) as exc_info:
        execute(BrokenPush, FromBorrowed("ab"), [Truncate(1), Push("x")])

    err = exc_info.value
    assert err.check is Check.UNEXPECTED_FAULT
    assert err.step == 2
    assert isinstance(err.__cause__, RuntimeError)
    assert "push is broken" in err.detail


def test_check_invariants_order():
    """Content is checked before anything else."""
    with pytest.raises(DivergenceError) as exc_info:
        check_invariants(RefString("ab"), CompactString("abc"))
    assert exc_info.value.check is Check.CONTENT
    assert exc_info.value.step is None


def test_check_invariants_clean_for_equal_values(subject_type):
    for text in ("", "ordering test", "z" * 40, "Σ" * 11):
        check_invariants(RefString(text), subject_type(text))


@pytest.mark.parametrize(
    "subject_cls, text, check",
    [
        (LengthOffByOne, "ab", Check.LENGTH),
        (ReversedAgainstStr, "zzz", Check.ORDERING),
        (NeverEqualToSelfType, "abc", Check.REDERIVED),
    ],
    ids=["length", "ordering", "rederived"],
)
def test_each_invariant_is_checked(subject_cls, text, check):
    """A subject breaking a single invariant is caught by exactly that check."""
    with pytest.raises(DivergenceError) as exc_info:
        check_invariants(RefString(text), subject_cls(text))
    assert exc_info.value.check is check


def test_broken_invariant_reported_at_step():
    """The failing check and step survive the trip through execute."""
    with pytest.raises(DivergenceError) as exc_info:
        execute(ReversedAgainstStr, FromBorrowed("ordering test"), [Push("s")])

    err = exc_info.value
    assert err.check is Check.ORDERING
    assert err.step == 1
    assert err.action == Push("s")

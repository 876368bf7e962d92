"""
Hypothesis strategies for cases, actions, bounds and their operands.

Operands lean towards the interesting region: characters of every UTF-8
width, texts around the inline thresholds, and offsets that are either
small (likely valid) or anywhere up to MAX_OFFSET (overflow-adjacent).
"""

from typing import Optional

from hypothesis import strategies as st

from .. import config
from ..core.actions import (
    ActionKind,
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
    Retain,
    Slice,
    SplitOff,
    Truncate,
)
from ..core.bounds import MAX_OFFSET, From, Full, Inclusive, Range, To, ToInclusive

# One, two, three and four byte characters that recur in regressions.
SEED_CHARS = "aA0 ¡ΣЬ຦ⷠ\U00010000\U0001f300"

SMALL_OFFSET_MAX = 48


def chars() -> st.SearchStrategy[str]:
    """Single Unicode scalar values (no surrogates)."""
    return st.one_of(
        st.sampled_from(SEED_CHARS),
        st.characters(exclude_categories=("Cs",)),
    )


def texts(max_size: int = 40) -> st.SearchStrategy[str]:
    return st.text(alphabet=chars(), max_size=max_size)


def offsets() -> st.SearchStrategy[int]:
    return st.one_of(
        st.integers(min_value=0, max_value=SMALL_OFFSET_MAX),
        st.integers(min_value=0, max_value=MAX_OFFSET),
        st.just(MAX_OFFSET),
    )


def bounds() -> st.SearchStrategy:
    return st.one_of(
        st.builds(Range, offsets(), offsets()),
        st.builds(From, offsets()),
        st.builds(To, offsets()),
        st.just(Full()),
        st.builds(Inclusive, offsets(), offsets()),
        st.builds(ToInclusive, offsets()),
    )


def constructors() -> st.SearchStrategy:
    return st.one_of(
        st.just(Empty()),
        st.builds(FromOwned, texts()),
        st.builds(FromBorrowed, texts()),
    )


ACTION_STRATEGIES = {
    ActionKind.SLICE: lambda: st.builds(Slice, bounds()),
    ActionKind.PUSH: lambda: st.builds(Push, chars()),
    ActionKind.PUSH_STR: lambda: st.builds(PushStr, texts()),
    ActionKind.TRUNCATE: lambda: st.builds(Truncate, offsets()),
    ActionKind.POP: lambda: st.just(Pop()),
    ActionKind.REMOVE: lambda: st.builds(Remove, offsets()),
    ActionKind.INSERT: lambda: st.builds(Insert, offsets(), chars()),
    ActionKind.INSERT_STR: lambda: st.builds(InsertStr, offsets(), texts()),
    ActionKind.SPLIT_OFF: lambda: st.builds(SplitOff, offsets()),
    ActionKind.CLEAR: lambda: st.just(Clear()),
    ActionKind.INTO_REFERENCE: lambda: st.just(IntoReference()),
    ActionKind.RETAIN: lambda: st.builds(Retain, texts(max_size=8)),
}


def actions() -> st.SearchStrategy:
    """Any implemented action; Drain and ReplaceRange are never drawn."""
    return st.one_of(*(make() for make in ACTION_STRATEGIES.values()))


def cases(max_actions: Optional[int] = None) -> st.SearchStrategy[Case]:
    limit = max_actions if max_actions is not None else config.max_actions()
    return st.builds(
        Case,
        constructors(),
        st.lists(actions(), max_size=limit).map(tuple),
    )

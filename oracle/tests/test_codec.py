"""
Tests for the case codec.

Critical: a recorded case must decode to exactly the actions that
produced it, and its serialization (and id) must never vary.
"""

import json

import pytest

from oracle.core.actions import (
    Case,
    Clear,
    Drain,
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
    ReplaceRange,
    Retain,
    Slice,
    SplitOff,
    Truncate,
)
from oracle.core.bounds import MAX_OFFSET, From, Full, Inclusive, Range, To, ToInclusive
from oracle.core.codec import (
    action_to_dict,
    case_from_dict,
    case_id,
    case_to_dict,
    dumps_case,
    loads_case,
)
from oracle.core.errors import CaseFormatError

EVERY_ACTION = (
    Slice(Range(0, 13764126361151078400)),
    Slice(From(1)),
    Slice(To(2)),
    Slice(Full()),
    Slice(Inclusive(0, 3)),
    Slice(ToInclusive(MAX_OFFSET)),
    Push("Ь"),
    PushStr("a\x00\U0001f300"),
    Truncate(4),
    Pop(),
    Remove(0),
    Insert(14, "A"),
    InsertStr(0, ""),
    SplitOff(MAX_OFFSET),
    Clear(),
    IntoReference(),
    Retain("aΣ"),
    Drain(Full()),
    ReplaceRange(To(1), "xy"),
)


def _doc(**overrides):
    doc = {
        "format": 1,
        "constructor": {"kind": "empty"},
        "actions": [],
    }
    doc.update(overrides)
    return doc


def test_action_encoding():
    assert action_to_dict(Insert(14, "A")) == {"kind": "insert", "offset": 14, "ch": "A"}
    assert action_to_dict(Slice(Inclusive(1, 2))) == {
        "kind": "slice",
        "bounds": {"shape": "inclusive", "start": 1, "end": 2},
    }
    assert action_to_dict(Pop()) == {"kind": "pop"}


def test_dumps_is_canonical():
    """Keys are sorted, no whitespace, non-ASCII kept as is."""
    text = dumps_case(Case(FromBorrowed("Σ"), (Push("a"),)), mode="compact")
    assert text == (
        '{"actions":[{"ch":"a","kind":"push"}],'
        '"constructor":{"kind":"from_borrowed","text":"Σ"},'
        '"format":1,"mode":"compact"}'
    )


def test_dumps_deterministic():
    case = Case(FromOwned("abc"), EVERY_ACTION)
    assert dumps_case(case) == dumps_case(Case(FromOwned("abc"), list(EVERY_ACTION)))


def test_case_id_is_stable_and_ignores_mode():
    case = Case(Empty(), (Push("a"),))
    cid = case_id(case)
    assert len(cid) == 16
    assert all(c in "0123456789abcdef" for c in cid)
    assert cid == case_id(Case(Empty(), [Push("a")]))
    assert cid != case_id(Case(Empty(), (Push("b"),)))
    assert "mode" not in case_to_dict(case)


def test_every_action_survives_round_trip():
    case = Case(FromOwned("ኲΣ A"), EVERY_ACTION)
    decoded, mode = loads_case(dumps_case(case, mode="prefixed"))
    assert decoded == case
    assert mode == "prefixed"


def test_mode_is_optional():
    case, mode = case_from_dict(_doc())
    assert case == Case(Empty())
    assert mode is None


@pytest.mark.parametrize(
    "doc",
    [
        [],
        _doc(format=2),
        _doc(actions={}),
        _doc(mode=3),
        _doc(constructor={"kind": "from_vec"}),
        _doc(constructor={"kind": "from_borrowed"}),
        _doc(actions=[{"kind": "drain_all"}]),
        _doc(actions=[{"kind": "truncate"}]),
        _doc(actions=[{"kind": "truncate", "offset": -1}]),
        _doc(actions=[{"kind": "truncate", "offset": MAX_OFFSET + 1}]),
        _doc(actions=[{"kind": "truncate", "offset": True}]),
        _doc(actions=[{"kind": "truncate", "offset": "3"}]),
        _doc(actions=[{"kind": "push", "ch": "ab"}]),
        _doc(actions=[{"kind": "push_str", "text": 5}]),
        _doc(actions=[{"kind": "push_str", "text": "a\ud800"}]),
        _doc(actions=[{"kind": "push", "ch": "\udfff"}]),
        _doc(constructor={"kind": "from_borrowed", "text": "\ud800"}),
        _doc(actions=[{"kind": "slice", "bounds": {"shape": "step", "start": 0}}]),
        _doc(actions=[{"kind": "slice", "bounds": [0, 1]}]),
        _doc(actions=["pop"]),
    ],
)
def test_malformed_documents_rejected(doc):
    with pytest.raises(CaseFormatError):
        case_from_dict(doc)


def test_invalid_json_rejected():
    with pytest.raises(CaseFormatError):
        loads_case("{not json")


def test_recorded_document_decodes():
    """A hand-written case file (as kept next to a bug report) decodes."""
    text = json.dumps({
        "format": 1,
        "mode": "prefixed",
        "constructor": {"kind": "from_borrowed", "text": "ኲΣ A𑒀a ®Σ a0🠀  aA®A"},
        "actions": [{"kind": "insert", "offset": 21, "ch": " "}],
    })
    case, mode = loads_case(text)
    assert mode == "prefixed"
    assert case.actions == (Insert(21, " "),)
    assert case.constructor == FromBorrowed("ኲΣ A𑒀a ®Σ a0🠀  aA®A")


def test_escaped_lone_surrogate_rejected():
    """JSON can spell a lone surrogate; the decoder must refuse it."""
    with pytest.raises(CaseFormatError):
        loads_case('{"actions":[],"constructor":{"kind":"from_borrowed","text":"\\ud800"},"format":1}')

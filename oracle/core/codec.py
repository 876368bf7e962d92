"""
Case codec: canonical JSON for cases, and stable case ids.

A recorded case must decode to exactly the actions that produced it, and
the same case must always serialize to the same bytes, so a case id can
name a regression file.

Document layout:
    {"actions": [{"kind": "insert", "offset": 14, "ch": "A"}, ...],
     "constructor": {"kind": "from_borrowed", "text": "..."},
     "format": 1,
     "mode": "prefixed"}          # optional
"""

import dataclasses
import hashlib
import json
from typing import Any, Dict, Optional, Tuple

from .actions import ACTION_TYPES, Action, ActionKind, Case, Constructor, Empty, FromBorrowed, FromOwned
from .bounds import BOUNDS_TYPES, MAX_OFFSET, Shape, TestBounds
from .errors import CaseFormatError

FORMAT_VERSION = 1

CONSTRUCTOR_TYPES = {
    "empty": Empty,
    "from_owned": FromOwned,
    "from_borrowed": FromBorrowed,
}
_CONSTRUCTOR_NAMES = {cls: name for name, cls in CONSTRUCTOR_TYPES.items()}

# Operand fields that hold a single character rather than free text.
_CHAR_FIELDS = frozenset({"ch"})
_OFFSET_FIELDS = frozenset({"offset", "start", "end"})


def canonical_json_bytes(obj: Any) -> bytes:
    """Sorted keys, no whitespace, UTF-8."""
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    return canonical_json_bytes(obj).decode("utf-8")


# =============================================================================
# ENCODE
# =============================================================================

def _operands(value: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in dataclasses.fields(value):
        operand = getattr(value, f.name)
        out[f.name] = bounds_to_dict(operand) if isinstance(operand, TestBounds) else operand
    return out


def bounds_to_dict(bounds: TestBounds) -> Dict[str, Any]:
    return {"shape": bounds.shape.value, **_operands(bounds)}


def action_to_dict(action: Action) -> Dict[str, Any]:
    return {"kind": action.kind.value, **_operands(action)}


def constructor_to_dict(constructor: Constructor) -> Dict[str, Any]:
    return {"kind": _CONSTRUCTOR_NAMES[type(constructor)], **_operands(constructor)}


def case_to_dict(case: Case, mode: Optional[str] = None) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "format": FORMAT_VERSION,
        "constructor": constructor_to_dict(case.constructor),
        "actions": [action_to_dict(a) for a in case.actions],
    }
    if mode is not None:
        doc["mode"] = mode
    return doc


def dumps_case(case: Case, mode: Optional[str] = None) -> str:
    return canonical_json_str(case_to_dict(case, mode))


def case_id(case: Case) -> str:
    """Stable 16-hex-digit id derived from the canonical case bytes (mode excluded)."""
    return hashlib.sha256(canonical_json_bytes(case_to_dict(case))).hexdigest()[:16]


# =============================================================================
# DECODE
# =============================================================================

def _expect_mapping(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise CaseFormatError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _is_utf8_encodable(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _operand(data: Dict[str, Any], name: str, what: str) -> Any:
    if name not in data:
        raise CaseFormatError(f"{what} is missing '{name}'")
    value = data[name]
    if name in _OFFSET_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_OFFSET:
            raise CaseFormatError(f"{what}.{name} must be an integer in 0..={MAX_OFFSET}")
    elif name == "bounds":
        value = bounds_from_dict(value)
    elif not isinstance(value, str):
        raise CaseFormatError(f"{what}.{name} must be a string")
    elif not _is_utf8_encodable(value):
        raise CaseFormatError(f"{what}.{name} is not valid UTF-8 text (lone surrogate?)")
    elif name in _CHAR_FIELDS and len(value) != 1:
        raise CaseFormatError(f"{what}.{name} must be a single character")
    return value


def _build(cls: type, data: Dict[str, Any], what: str) -> Any:
    kwargs = {f.name: _operand(data, f.name, what) for f in dataclasses.fields(cls)}
    return cls(**kwargs)


def bounds_from_dict(data: Any) -> TestBounds:
    data = _expect_mapping(data, "bounds")
    try:
        cls = BOUNDS_TYPES[Shape(data.get("shape"))]
    except ValueError:
        raise CaseFormatError(f"unknown bounds shape: {data.get('shape')!r}") from None
    return _build(cls, data, f"bounds[{cls.shape.value}]")


def action_from_dict(data: Any) -> Action:
    data = _expect_mapping(data, "action")
    try:
        cls = ACTION_TYPES[ActionKind(data.get("kind"))]
    except ValueError:
        raise CaseFormatError(f"unknown action kind: {data.get('kind')!r}") from None
    return _build(cls, data, f"action[{cls.kind.value}]")


def constructor_from_dict(data: Any) -> Constructor:
    data = _expect_mapping(data, "constructor")
    cls = CONSTRUCTOR_TYPES.get(data.get("kind"))
    if cls is None:
        raise CaseFormatError(f"unknown constructor kind: {data.get('kind')!r}")
    return _build(cls, data, f"constructor[{data['kind']}]")


def case_from_dict(data: Any) -> Tuple[Case, Optional[str]]:
    """
    Decode a case document.

    Returns:
        (case, mode) where mode is None if the document does not name one

    Raises:
        CaseFormatError: If the document is malformed
    """
    data = _expect_mapping(data, "case")
    if data.get("format") != FORMAT_VERSION:
        raise CaseFormatError(f"unsupported case format: {data.get('format')!r}")
    actions = data.get("actions", [])
    if not isinstance(actions, list):
        raise CaseFormatError("actions must be a list")
    mode = data.get("mode")
    if mode is not None and not isinstance(mode, str):
        raise CaseFormatError("mode must be a string")
    case = Case(
        constructor=constructor_from_dict(data.get("constructor")),
        actions=tuple(action_from_dict(a) for a in actions),
    )
    return case, mode


def loads_case(text: str) -> Tuple[Case, Optional[str]]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise CaseFormatError(f"case document is not valid JSON: {e}") from e
    return case_from_dict(data)

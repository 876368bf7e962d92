"""
Action model: the closed vocabulary of operations the oracle replays.

Every variant is an immutable record carrying exactly the operands needed
to replay it. Behavior lives in the reducer (see reducer.py); this module
is pure data plus constructors for the initial (reference, subject) pair.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple, Type

from smartstr import RefString, SmartString

from .bounds import TestBounds


class ActionKind(str, Enum):
    SLICE = "slice"
    PUSH = "push"
    PUSH_STR = "push_str"
    TRUNCATE = "truncate"
    POP = "pop"
    REMOVE = "remove"
    INSERT = "insert"
    INSERT_STR = "insert_str"
    SPLIT_OFF = "split_off"
    CLEAR = "clear"
    INTO_REFERENCE = "into_reference"
    RETAIN = "retain"
    DRAIN = "drain"
    REPLACE_RANGE = "replace_range"


# Kinds without fault prediction; generators never draw them.
UNIMPLEMENTED_KINDS = frozenset({ActionKind.DRAIN, ActionKind.REPLACE_RANGE})


class Action:
    """Base class for all action variants."""

    kind: ClassVar[ActionKind]


@dataclass(frozen=True)
class Slice(Action):
    bounds: TestBounds
    kind: ClassVar[ActionKind] = ActionKind.SLICE


@dataclass(frozen=True)
class Push(Action):
    ch: str
    kind: ClassVar[ActionKind] = ActionKind.PUSH


@dataclass(frozen=True)
class PushStr(Action):
    text: str
    kind: ClassVar[ActionKind] = ActionKind.PUSH_STR


@dataclass(frozen=True)
class Truncate(Action):
    offset: int
    kind: ClassVar[ActionKind] = ActionKind.TRUNCATE


@dataclass(frozen=True)
class Pop(Action):
    kind: ClassVar[ActionKind] = ActionKind.POP


@dataclass(frozen=True)
class Remove(Action):
    offset: int
    kind: ClassVar[ActionKind] = ActionKind.REMOVE


@dataclass(frozen=True)
class Insert(Action):
    offset: int
    ch: str
    kind: ClassVar[ActionKind] = ActionKind.INSERT


@dataclass(frozen=True)
class InsertStr(Action):
    offset: int
    text: str
    kind: ClassVar[ActionKind] = ActionKind.INSERT_STR


@dataclass(frozen=True)
class SplitOff(Action):
    offset: int
    kind: ClassVar[ActionKind] = ActionKind.SPLIT_OFF


@dataclass(frozen=True)
class Clear(Action):
    kind: ClassVar[ActionKind] = ActionKind.CLEAR


@dataclass(frozen=True)
class IntoReference(Action):
    kind: ClassVar[ActionKind] = ActionKind.INTO_REFERENCE


@dataclass(frozen=True)
class Retain(Action):
    """Keep every character that occurs in chars."""
    chars: str
    kind: ClassVar[ActionKind] = ActionKind.RETAIN


@dataclass(frozen=True)
class Drain(Action):
    bounds: TestBounds
    kind: ClassVar[ActionKind] = ActionKind.DRAIN


@dataclass(frozen=True)
class ReplaceRange(Action):
    bounds: TestBounds
    text: str
    kind: ClassVar[ActionKind] = ActionKind.REPLACE_RANGE


ACTION_TYPES = {
    cls.kind: cls
    for cls in (
        Slice, Push, PushStr, Truncate, Pop, Remove, Insert, InsertStr,
        SplitOff, Clear, IntoReference, Retain, Drain, ReplaceRange,
    )
}


# =============================================================================
# CONSTRUCTORS
# =============================================================================

class Constructor:
    """Builds the initial (reference, subject) pair."""

    def construct(self, subject_type: Type[SmartString]) -> Tuple[RefString, SmartString]:
        raise NotImplementedError


@dataclass(frozen=True)
class Empty(Constructor):
    def construct(self, subject_type: Type[SmartString]) -> Tuple[RefString, SmartString]:
        return RefString(), subject_type()


@dataclass(frozen=True)
class FromOwned(Constructor):
    """Subject built from an existing reference value."""
    text: str

    def construct(self, subject_type: Type[SmartString]) -> Tuple[RefString, SmartString]:
        return RefString(self.text), subject_type.from_reference(RefString(self.text))


@dataclass(frozen=True)
class FromBorrowed(Constructor):
    """Subject built from a plain str."""
    text: str

    def construct(self, subject_type: Type[SmartString]) -> Tuple[RefString, SmartString]:
        return RefString(self.text), subject_type(self.text)


@dataclass(frozen=True)
class Case:
    """A constructor plus the actions to replay after it."""
    constructor: Constructor
    actions: Tuple[Action, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", tuple(self.actions))

"""
Core oracle primitives.

This module provides the pieces every check is built from:
- Actions: Immutable operation records (and the constructors of a pair)
- Bounds: Fault predicates computed from reference content alone
- Faults: Fault-capture harness
- Reducer: Per-kind dispatch of actions to handlers
- Codec: Canonical case serialization
"""

from .actions import (
    ACTION_TYPES,
    UNIMPLEMENTED_KINDS,
    Action,
    ActionKind,
    Case,
    Clear,
    Constructor,
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
from .bounds import (
    MAX_OFFSET,
    From,
    Full,
    Inclusive,
    Range,
    TestBounds,
    To,
    ToInclusive,
    insert_faults,
    is_char_boundary,
    remove_faults,
    split_off_faults,
    truncate_faults,
)
from .codec import case_id, dumps_case, loads_case
from .errors import (
    CaseFormatError,
    Check,
    DivergenceError,
    InvalidActionError,
    OracleError,
    UnimplementedActionError,
)
from .faults import assert_faults, capture_fault
from .reducer import ActionReducer, TextPair, default_reducer

__all__ = [
    "ACTION_TYPES",
    "UNIMPLEMENTED_KINDS",
    "Action",
    "ActionKind",
    "Case",
    "Clear",
    "Constructor",
    "Drain",
    "Empty",
    "FromBorrowed",
    "FromOwned",
    "Insert",
    "InsertStr",
    "IntoReference",
    "Pop",
    "Push",
    "PushStr",
    "Remove",
    "ReplaceRange",
    "Retain",
    "Slice",
    "SplitOff",
    "Truncate",
    "MAX_OFFSET",
    "From",
    "Full",
    "Inclusive",
    "Range",
    "TestBounds",
    "To",
    "ToInclusive",
    "insert_faults",
    "is_char_boundary",
    "remove_faults",
    "split_off_faults",
    "truncate_faults",
    "case_id",
    "dumps_case",
    "loads_case",
    "CaseFormatError",
    "Check",
    "DivergenceError",
    "InvalidActionError",
    "OracleError",
    "UnimplementedActionError",
    "assert_faults",
    "capture_fault",
    "ActionReducer",
    "TextPair",
    "default_reducer",
]

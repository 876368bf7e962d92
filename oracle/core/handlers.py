"""
Action handlers.

Each handler asks the bound predicates whether the action must fault,
using the reference content only. Predicted faults go through the
fault-capture harness; everything else runs directly and the two sides'
return values are compared.
"""

from typing import Any, Callable, Optional, Tuple

from .actions import (
    Action,
    ActionKind,
    Clear,
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
from .bounds import insert_faults, remove_faults, split_off_faults, truncate_faults
from .errors import Check, DivergenceError, UnimplementedActionError
from .faults import assert_faults
from .reducer import TextPair


def register_handlers(reducer) -> None:
    reducer.register(ActionKind.SLICE, on_slice)
    reducer.register(ActionKind.PUSH, on_push)
    reducer.register(ActionKind.PUSH_STR, on_push_str)
    reducer.register(ActionKind.TRUNCATE, on_truncate)
    reducer.register(ActionKind.POP, on_pop)
    reducer.register(ActionKind.REMOVE, on_remove)
    reducer.register(ActionKind.INSERT, on_insert)
    reducer.register(ActionKind.INSERT_STR, on_insert_str)
    reducer.register(ActionKind.SPLIT_OFF, on_split_off)
    reducer.register(ActionKind.CLEAR, on_clear)
    reducer.register(ActionKind.INTO_REFERENCE, on_into_reference)
    reducer.register(ActionKind.RETAIN, on_retain)
    reducer.register(ActionKind.DRAIN, on_unimplemented)
    reducer.register(ActionKind.REPLACE_RANGE, on_unimplemented)


def _run(
    operation: str,
    predicted_fault: bool,
    reference_call: Callable[[], Any],
    subject_call: Callable[[], Any],
) -> Optional[Tuple[Any, Any]]:
    """Run both calls; None when the fault was predicted (and confirmed)."""
    if predicted_fault:
        assert_faults(operation, reference_call, subject_call)
        return None
    return reference_call(), subject_call()


def _expect_same(operation: str, reference_value: Any, subject_value: Any) -> None:
    if reference_value != subject_value:
        raise DivergenceError(
            Check.RESULT,
            f"{operation} returned {reference_value!r} from reference but {subject_value!r} from subject",
        )


def on_slice(pair: TextPair, action: Slice) -> None:
    bounds = action.bounds
    results = _run(
        f"slice {bounds!r}",
        bounds.should_fault(pair.reference.as_str()),
        lambda: bounds.index(pair.reference),
        lambda: bounds.index(pair.subject),
    )
    if results is not None:
        _expect_same(f"slice {bounds!r}", *results)


def on_push(pair: TextPair, action: Push) -> None:
    pair.reference.push(action.ch)
    pair.subject.push(action.ch)


def on_push_str(pair: TextPair, action: PushStr) -> None:
    pair.reference.push_str(action.text)
    pair.subject.push_str(action.text)


def on_truncate(pair: TextPair, action: Truncate) -> None:
    _run(
        f"truncate({action.offset})",
        truncate_faults(pair.reference.as_str(), action.offset),
        lambda: pair.reference.truncate(action.offset),
        lambda: pair.subject.truncate(action.offset),
    )


def on_pop(pair: TextPair, action: Pop) -> None:
    _expect_same("pop", pair.reference.pop(), pair.subject.pop())


def on_remove(pair: TextPair, action: Remove) -> None:
    operation = f"remove({action.offset})"
    results = _run(
        operation,
        remove_faults(pair.reference.as_str(), action.offset),
        lambda: pair.reference.remove(action.offset),
        lambda: pair.subject.remove(action.offset),
    )
    if results is not None:
        _expect_same(operation, *results)


def on_insert(pair: TextPair, action: Insert) -> None:
    _run(
        f"insert({action.offset}, {action.ch!r})",
        insert_faults(pair.reference.as_str(), action.offset),
        lambda: pair.reference.insert(action.offset, action.ch),
        lambda: pair.subject.insert(action.offset, action.ch),
    )


def on_insert_str(pair: TextPair, action: InsertStr) -> None:
    _run(
        f"insert_str({action.offset}, {action.text!r})",
        insert_faults(pair.reference.as_str(), action.offset),
        lambda: pair.reference.insert_str(action.offset, action.text),
        lambda: pair.subject.insert_str(action.offset, action.text),
    )


def on_split_off(pair: TextPair, action: SplitOff) -> None:
    operation = f"split_off({action.offset})"
    results = _run(
        operation,
        split_off_faults(pair.reference.as_str(), action.offset),
        lambda: pair.reference.split_off(action.offset),
        lambda: pair.subject.split_off(action.offset),
    )
    if results is not None:
        reference_tail, subject_tail = results
        _expect_same(operation, reference_tail.as_str(), subject_tail.as_str())


def on_clear(pair: TextPair, action: Clear) -> None:
    pair.reference.clear()
    pair.subject.clear()


def on_into_reference(pair: TextPair, action: IntoReference) -> None:
    _expect_same("into_reference", pair.reference, pair.subject.to_reference())


def on_retain(pair: TextPair, action: Retain) -> None:
    def keep(ch: str) -> bool:
        return ch in action.chars

    pair.reference.retain(keep)
    pair.subject.retain(keep)


def on_unimplemented(pair: TextPair, action: Action) -> None:
    raise UnimplementedActionError(
        f"{action.kind.value} is not supported: its fault prediction is not defined"
    )

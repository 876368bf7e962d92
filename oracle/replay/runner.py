"""
Dual executor: replay a case against reference and subject.

The pair is built once, checked, then every action is applied to both
sides and the invariants are checked again. The first disagreement
stops the case with a DivergenceError carrying the step index, the
offending action and the history that led to it.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Type

from smartstr import RefString, SmartString

from ..core.actions import Action, Case, Constructor
from ..core.codec import case_id
from ..core.errors import Check, DivergenceError, OracleError
from ..core.reducer import ActionReducer, TextPair, default_reducer
from ..logging_config import get_logger
from .invariants import check_invariants


@dataclass(frozen=True)
class ExecutionResult:
    """
    Result of a clean execution.

    Fields:
        reference: Final reference value
        subject: Final subject value
        applied: Number of actions applied
    """
    reference: RefString
    subject: SmartString
    applied: int


def execute(
    subject_type: Type[SmartString],
    constructor: Constructor,
    actions: Iterable[Action],
    reducer: Optional[ActionReducer] = None,
) -> ExecutionResult:
    """
    Build a pair with constructor and replay actions against it.

    Args:
        subject_type: Subject class; its MODE selects the layout under test
        constructor: Builds the initial (reference, subject) pair
        actions: Actions to apply, in order
        reducer: Handlers to apply actions with (None = default_reducer())

    Returns:
        ExecutionResult with final values and count

    Raises:
        DivergenceError: If reference and subject disagree at any step
        UnimplementedActionError: If an action has no fault prediction
        InvalidActionError: If an action has no handler
    """
    actions = tuple(actions)
    reducer = reducer or default_reducer()
    logger = get_logger(__name__, case_id=case_id(Case(constructor, actions)))

    reference, subject = constructor.construct(subject_type)
    pair = TextPair(reference=reference, subject=subject)
    try:
        check_invariants(pair.reference, pair.subject)
    except DivergenceError as e:
        raise e.at(0, None, ()) from None

    for step, action in enumerate(actions, start=1):
        history = actions[:step]
        try:
            reducer.apply(pair, action)
            check_invariants(pair.reference, pair.subject)
        except DivergenceError as e:
            logger.info("Divergence", extra={"step": step, "check": e.check.value})
            raise e.at(step, action, history) from None
        except OracleError:
            raise
        except Exception as e:
            logger.info("Unexpected fault", extra={"step": step, "error": type(e).__name__})
            raise DivergenceError(
                Check.UNEXPECTED_FAULT,
                f"{type(e).__name__}: {e}",
                step=step,
                action=action,
                history=history,
            ) from e
        logger.debug("Applied action", extra={"step": step, "kind": action.kind.value})

    logger.debug(
        "Case passed",
        extra={"mode": subject_type.MODE.name, "applied": len(actions), "length": len(pair.subject)},
    )
    return ExecutionResult(reference=pair.reference, subject=pair.subject, applied=len(actions))


def run_case(
    subject_type: Type[SmartString],
    case: Case,
    reducer: Optional[ActionReducer] = None,
) -> ExecutionResult:
    """execute() for a Case."""
    return execute(subject_type, case.constructor, case.actions, reducer)

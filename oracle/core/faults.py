"""
Fault-capture harness.

Runs a call that is predicted to fault, with fault diagnostics silenced,
and reports whether it actually did. Silencing goes through
smartstr.suppressed_diagnostics(), which restores the previous handler
on every exit path.

Not reentrant: a call running under capture_fault must not itself call
capture_fault on the same context.
"""

from typing import Any, Callable

from smartstr import suppressed_diagnostics

from .errors import Check, DivergenceError


def capture_fault(call: Callable[[], Any]) -> bool:
    """
    Run call with diagnostics suppressed.

    Returns:
        True if call raised, False if it returned normally
    """
    with suppressed_diagnostics():
        try:
            call()
        except Exception:
            return True
    return False


def assert_faults(
    operation: str,
    reference_call: Callable[[], Any],
    subject_call: Callable[[], Any],
) -> None:
    """
    Require both calls to fault.

    Raises:
        DivergenceError: If either side completed normally
    """
    survivors = [
        side
        for side, call in (("reference", reference_call), ("subject", subject_call))
        if not capture_fault(call)
    ]
    if survivors:
        raise DivergenceError(
            Check.FAULT,
            f"{operation} was predicted to fault but {' and '.join(survivors)} completed normally",
        )

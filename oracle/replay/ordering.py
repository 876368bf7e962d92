"""
Ordering oracle.

Ordering between two subject values must equal ordering between the
corresponding reference values. Ordering is defined by content only, so
it must hold whatever storage each side happens to use.
"""

from typing import Any, Type

from smartstr import RefString, SmartString

from ..core.errors import Check, DivergenceError


def ordering(left: Any, right: Any) -> int:
    """-1, 0 or 1 as left sorts before, equal to, or after right."""
    return (left > right) - (left < right)


def check_ordering(subject_type: Type[SmartString], left: str, right: str) -> None:
    """
    Raises:
        DivergenceError: If subject ordering differs from reference ordering
    """
    expected = ordering(RefString(left), RefString(right))
    subject_left, subject_right = subject_type(left), subject_type(right)
    actual = ordering(subject_left, subject_right)
    if expected != actual:
        raise DivergenceError(
            Check.ORDERING,
            f"reference ordering {expected} but subject ordering {actual} "
            f"for {subject_left!r} vs {subject_right!r}",
        )

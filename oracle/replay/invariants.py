"""
Invariant checker, run after construction and after every action.
"""

from smartstr import RefString, SmartString

from ..core.errors import Check, DivergenceError
from .ordering import ordering

# Fixed text both sides are compared against.
ORDERING_PROBE = "ordering test"


def check_invariants(reference: RefString, subject: SmartString) -> None:
    """
    Check, in order: content, length, inline classification, ordering
    against ORDERING_PROBE, and equality with a subject rebuilt from the
    reference content.

    Raises:
        DivergenceError: On the first invariant that does not hold
    """
    if reference.as_bytes() != subject.as_bytes():
        raise DivergenceError(
            Check.CONTENT,
            f"reference holds {reference.as_str()!r} but subject holds {subject.as_str()!r}",
        )

    if len(reference) != len(subject):
        raise DivergenceError(
            Check.LENGTH,
            f"reference length {len(reference)} but subject length {len(subject)}",
        )

    max_inline = type(subject).MODE.max_inline
    should_be_inline = len(subject) <= max_inline
    if subject.is_inline() != should_be_inline:
        raise DivergenceError(
            Check.INLINE,
            f"len {len(subject)} should be {'inline' if should_be_inline else 'boxed'} "
            f"(max_inline = {max_inline}) but was {'inline' if subject.is_inline() else 'boxed'}",
        )

    expected = ordering(reference, ORDERING_PROBE)
    actual = ordering(subject, ORDERING_PROBE)
    if expected != actual:
        raise DivergenceError(
            Check.ORDERING,
            f"reference orders {expected} against {ORDERING_PROBE!r} but subject orders {actual}",
        )

    rederived = type(subject)(reference.as_str())
    if ordering(subject, rederived) != 0:
        raise DivergenceError(
            Check.REDERIVED,
            f"{rederived!r} rebuilt from reference content does not equal live {subject!r}",
        )

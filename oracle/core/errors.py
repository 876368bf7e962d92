"""
Exception types for the differential oracle.
"""

from enum import Enum
from typing import Any, Optional, Sequence


class Check(str, Enum):
    """What a DivergenceError found to disagree."""
    CONTENT = "content"
    LENGTH = "length"
    INLINE = "inline"
    ORDERING = "ordering"
    REDERIVED = "rederived"
    RESULT = "result"
    FAULT = "fault"
    UNEXPECTED_FAULT = "unexpected_fault"


class OracleError(Exception):
    """Base class for oracle errors that are not divergences."""
    pass


class InvalidActionError(OracleError):
    """Raised when no handler is registered for an action kind."""
    pass


class UnimplementedActionError(OracleError, NotImplementedError):
    """Raised when applying an action whose fault prediction is not defined."""
    pass


class CaseFormatError(OracleError):
    """Raised when a case document cannot be decoded."""
    pass


class DivergenceError(AssertionError):
    """
    Raised when reference and subject disagree.

    Fields:
        check: Which check failed
        detail: Human-readable description of the disagreement
        step: Action index (1-based; 0 = right after construction), None if unknown
        action: Offending action, None for construction or standalone checks
        history: Actions applied up to and including the offending one
    """

    def __init__(
        self,
        check: Check,
        detail: str,
        step: Optional[int] = None,
        action: Any = None,
        history: Sequence[Any] = (),
    ) -> None:
        self.check = check
        self.detail = detail
        self.step = step
        self.action = action
        self.history = tuple(history)
        super().__init__(self._render())

    def at(self, step: int, action: Any, history: Sequence[Any]) -> "DivergenceError":
        """Copy with step context attached."""
        return DivergenceError(self.check, self.detail, step=step, action=action, history=history)

    def _render(self) -> str:
        where = "construction" if self.step == 0 else f"step {self.step}"
        lines = [f"[{self.check.value}] {self.detail}"]
        if self.step is not None:
            lines.append(f"  at {where}" + (f": {self.action!r}" if self.action is not None else ""))
        if self.history:
            lines.append("  history:")
            lines.extend(f"    {i}. {a!r}" for i, a in enumerate(self.history, start=1))
        return "\n".join(lines)

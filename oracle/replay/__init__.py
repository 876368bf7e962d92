"""
Replay system for differential checking.

Replay applies every action of a case to reference and subject and
checks the invariants after each step. Same case -> same outcome.
"""

from .invariants import ORDERING_PROBE, check_invariants
from .ordering import check_ordering, ordering
from .runner import ExecutionResult, execute, run_case

__all__ = [
    "ORDERING_PROBE",
    "check_invariants",
    "check_ordering",
    "ordering",
    "ExecutionResult",
    "execute",
    "run_case",
]

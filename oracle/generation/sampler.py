"""
Sampler: draw cases, run each through the dual executor, shrink failures.

Drives Hypothesis explicitly through find(): it draws up to `samples`
cases, stops at the first divergence, and shrinks it to a minimal
reproducing case, which is replayed once more to capture its error.
"""

from dataclasses import dataclass
from random import Random
from typing import Optional, Type

from hypothesis import HealthCheck, Phase, find, settings
from hypothesis.errors import NoSuchExample

from smartstr import SmartString

from .. import config
from ..core.actions import Case
from ..core.codec import case_id
from ..core.errors import DivergenceError, OracleError
from ..logging_config import get_logger
from ..replay.runner import run_case
from .strategies import cases

logger = get_logger(__name__)


@dataclass(frozen=True)
class SampleReport:
    """
    Outcome of sampling one layout mode.

    Fields:
        mode: Layout mode name
        executed: Cases executed, including shrink attempts
        case: Minimal diverging case (None if every case passed)
        failure: Divergence raised by that case
    """
    mode: str
    executed: int
    case: Optional[Case] = None
    failure: Optional[DivergenceError] = None

    @property
    def passed(self) -> bool:
        return self.failure is None


def sample(
    subject_type: Type[SmartString],
    samples: Optional[int] = None,
    seed: Optional[int] = None,
    max_actions: Optional[int] = None,
) -> SampleReport:
    """
    Run up to `samples` generated cases against subject_type.

    Args:
        subject_type: Subject class under test
        samples: Cases to draw (None = SSO_ORACLE_SAMPLES)
        seed: Seed for reproducible draws (None = SSO_ORACLE_SEED, else random)
        max_actions: Longest action sequence (None = SSO_ORACLE_MAX_ACTIONS)

    Returns:
        SampleReport, carrying the minimal case if one diverged
    """
    samples = samples or config.samples()
    seed = seed if seed is not None else config.seed()
    mode = subject_type.MODE.name
    executed = 0

    def diverges(case: Case) -> bool:
        nonlocal executed
        executed += 1
        try:
            run_case(subject_type, case)
        except DivergenceError:
            return True
        return False

    logger.info("Sampling", extra={"mode": mode, "samples": samples, "seed": seed})
    try:
        minimal = find(
            cases(max_actions),
            diverges,
            settings=settings(
                max_examples=samples,
                database=None,
                deadline=None,
                phases=[Phase.generate, Phase.shrink],
                suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
            ),
            random=Random(seed) if seed is not None else None,
        )
    except NoSuchExample:
        logger.info("No divergence", extra={"mode": mode, "executed": executed})
        return SampleReport(mode=mode, executed=executed)

    try:
        run_case(subject_type, minimal)
    except DivergenceError as e:
        get_logger(__name__, case_id=case_id(minimal)).warning(
            "Divergence found",
            extra={"mode": mode, "check": e.check.value, "step": e.step, "executed": executed},
        )
        return SampleReport(mode=mode, executed=executed, case=minimal, failure=e)
    raise OracleError(f"minimal case {case_id(minimal)} stopped diverging on replay")

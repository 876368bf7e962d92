"""
Environment configuration.

Environment Variables:
    SSO_ORACLE_SAMPLES: Cases drawn per layout mode by the sampler - default: 200
    SSO_ORACLE_MAX_ACTIONS: Longest generated action sequence - default: 64
    SSO_ORACLE_SEED: Fixed seed for the sampler - default: unset (random)
"""

import os
from typing import Optional

DEFAULT_SAMPLES = 200
DEFAULT_MAX_ACTIONS = 64


def env_int(key: str, default: Optional[int] = None) -> Optional[int]:
    """
    Read a positive integer from the environment.

    Unset, unparsable and non-positive values yield default.
    """
    val = os.getenv(key)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def samples() -> int:
    return env_int("SSO_ORACLE_SAMPLES", DEFAULT_SAMPLES)


def max_actions() -> int:
    return env_int("SSO_ORACLE_MAX_ACTIONS", DEFAULT_MAX_ACTIONS)


def seed() -> Optional[int]:
    return env_int("SSO_ORACLE_SEED")

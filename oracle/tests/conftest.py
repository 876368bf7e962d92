"""
Shared fixtures and Hypothesis profiles.

Select a profile with HYPOTHESIS_PROFILE (default, ci, dev).
"""

import os

import pytest
from hypothesis import HealthCheck, settings

from smartstr import CompactString, PrefixedString

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
)
settings.register_profile(
    "ci",
    max_examples=1000,
    deadline=None,
    print_blob=True,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture(params=[CompactString, PrefixedString], ids=lambda t: t.MODE.name)
def subject_type(request):
    """Every layout mode's subject class."""
    return request.param

"""
Random case generation (Hypothesis) and the sampling loop built on it.
"""

from .sampler import SampleReport, sample
from .strategies import actions, bounds, cases, chars, constructors, offsets, texts

__all__ = [
    "SampleReport",
    "sample",
    "actions",
    "bounds",
    "cases",
    "chars",
    "constructors",
    "offsets",
    "texts",
]

"""
SSO Differential Oracle

Model-based differential testing of a small-string-optimized text type
against a reference growable text, across every layout mode.
"""

__version__ = "0.1.0"

"""
Text types checked by the oracle.

- RefString: reference growable UTF-8 text (ground truth)
- SmartString: small-string-optimized text, one subclass per layout mode
- LayoutMode: inline capacity configuration (COMPACT, PREFIXED)
- diagnostics: fault reporting hook shared by both types
"""

from .diagnostics import (
    FaultReport,
    current_handler,
    fault_handler,
    ignore_fault,
    log_fault,
    suppressed_diagnostics,
)
from .modes import COMPACT, MAX_OFFSET, MODES, PREFIXED, LayoutMode
from .reference import RefString
from .smart import SUBJECT_TYPES, CompactString, PrefixedString, SmartString, subject_type

__version__ = "0.1.0"

__all__ = [
    "FaultReport",
    "current_handler",
    "fault_handler",
    "ignore_fault",
    "log_fault",
    "suppressed_diagnostics",
    "COMPACT",
    "PREFIXED",
    "MAX_OFFSET",
    "MODES",
    "LayoutMode",
    "RefString",
    "SmartString",
    "CompactString",
    "PrefixedString",
    "SUBJECT_TYPES",
    "subject_type",
]

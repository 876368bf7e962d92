"""
Layout modes for SmartString.

A mode fixes the inline capacity of a subject type. Sizes are expressed
for a 64-bit target: the inline buffer takes the space of a boxed string
(pointer, capacity, length) minus the mode's header.
"""

from dataclasses import dataclass
from typing import Dict

WORD_BYTES = 8
BOXED_STRING_BYTES = 3 * WORD_BYTES

# Largest byte offset a text type accepts.
MAX_OFFSET = 2 ** 64 - 1


@dataclass(frozen=True)
class LayoutMode:
    """
    Inline layout configuration.

    Fields:
        name: Mode name ("compact", "prefixed")
        header_bytes: Bytes reserved for the inline marker/length header
    """
    name: str
    header_bytes: int

    @property
    def max_inline(self) -> int:
        """Largest byte length stored without a heap buffer."""
        return BOXED_STRING_BYTES - self.header_bytes


# Compact packs the inline marker and length into one byte.
COMPACT = LayoutMode(name="compact", header_bytes=1)

# Prefixed keeps a separate length byte in front of the data.
PREFIXED = LayoutMode(name="prefixed", header_bytes=2)

MODES: Dict[str, LayoutMode] = {mode.name: mode for mode in (COMPACT, PREFIXED)}

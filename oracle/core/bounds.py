"""
Bound predicates: decide whether a slice or point operation must fault.

Predicates are computed from the reference content alone. They never ask
the subject, so a subject that faults (or fails to fault) where the
reference does not is always caught.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Protocol

# Offsets are unsigned 64-bit; an inclusive end at MAX_OFFSET has no end+1.
MAX_OFFSET = 2 ** 64 - 1


def is_char_boundary(content: str, index: int) -> bool:
    """
    True if byte offset index falls between UTF-8 encoded characters.

    0 and len are boundaries; anything past len is not.
    """
    data = content.encode("utf-8")
    if index == 0 or index == len(data):
        return True
    if index < 0 or index > len(data):
        return False
    return (data[index] & 0xC0) != 0x80


def _byte_len(content: str) -> int:
    return len(content.encode("utf-8"))


def _succ_is_boundary(content: str, end: int) -> bool:
    """is_char_boundary(content, end + 1) without stepping past MAX_OFFSET."""
    if end >= MAX_OFFSET:
        return False
    return is_char_boundary(content, end + 1)


# =============================================================================
# POINT OPERATIONS
# =============================================================================

def truncate_faults(content: str, index: int) -> bool:
    """Truncating past the end is a no-op; inside a character it faults."""
    return index <= _byte_len(content) and not is_char_boundary(content, index)


def remove_faults(content: str, index: int) -> bool:
    return index >= _byte_len(content) or not is_char_boundary(content, index)


def insert_faults(content: str, index: int) -> bool:
    """Shared by insert and insert_str."""
    return index > _byte_len(content) or not is_char_boundary(content, index)


def split_off_faults(content: str, index: int) -> bool:
    return not is_char_boundary(content, index)


# =============================================================================
# RANGE SHAPES
# =============================================================================

class Sliceable(Protocol):
    def __getitem__(self, key: slice) -> str: ...

    def slice_inclusive(self, start: Optional[int], end: int) -> str: ...


class Shape(str, Enum):
    RANGE = "range"
    FROM = "from"
    TO = "to"
    FULL = "full"
    INCLUSIVE = "inclusive"
    TO_INCLUSIVE = "to_inclusive"


class TestBounds:
    """
    A byte range over text content.

    should_fault(content) predicts a fault; index(text) performs the slice
    on a reference or subject value.
    """

    __test__ = False  # not a pytest class

    shape: ClassVar[Shape]

    def should_fault(self, content: str) -> bool:
        raise NotImplementedError

    def index(self, text: Sliceable) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Range(TestBounds):
    start: int
    end: int
    shape: ClassVar[Shape] = Shape.RANGE

    def should_fault(self, content: str) -> bool:
        length = _byte_len(content)
        return (
            self.start > self.end
            or self.start > length
            or self.end > length
            or not is_char_boundary(content, self.start)
            or not is_char_boundary(content, self.end)
        )

    def index(self, text: Sliceable) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True)
class From(TestBounds):
    start: int
    shape: ClassVar[Shape] = Shape.FROM

    def should_fault(self, content: str) -> bool:
        return self.start > _byte_len(content) or not is_char_boundary(content, self.start)

    def index(self, text: Sliceable) -> str:
        return text[self.start:]


@dataclass(frozen=True)
class To(TestBounds):
    end: int
    shape: ClassVar[Shape] = Shape.TO

    def should_fault(self, content: str) -> bool:
        return self.end > _byte_len(content) or not is_char_boundary(content, self.end)

    def index(self, text: Sliceable) -> str:
        return text[:self.end]


@dataclass(frozen=True)
class Full(TestBounds):
    shape: ClassVar[Shape] = Shape.FULL

    def should_fault(self, content: str) -> bool:
        return False

    def index(self, text: Sliceable) -> str:
        return text[:]


@dataclass(frozen=True)
class Inclusive(TestBounds):
    start: int
    end: int
    shape: ClassVar[Shape] = Shape.INCLUSIVE

    def should_fault(self, content: str) -> bool:
        length = _byte_len(content)
        return (
            self.start > self.end
            or self.start > length
            or self.end > length
            or not is_char_boundary(content, self.start)
            or not _succ_is_boundary(content, self.end)
        )

    def index(self, text: Sliceable) -> str:
        return text.slice_inclusive(self.start, self.end)


@dataclass(frozen=True)
class ToInclusive(TestBounds):
    end: int
    shape: ClassVar[Shape] = Shape.TO_INCLUSIVE

    def should_fault(self, content: str) -> bool:
        return self.end > _byte_len(content) or not _succ_is_boundary(content, self.end)

    def index(self, text: Sliceable) -> str:
        return text.slice_inclusive(None, self.end)


BOUNDS_TYPES = {cls.shape: cls for cls in (Range, From, To, Full, Inclusive, ToInclusive)}

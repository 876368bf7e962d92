"""
Byte storage for SmartString.

InlineBuffer is a fixed-capacity buffer that never grows; BoxedBuffer is a
growable heap buffer. Both expose the same small interface so SmartString
can swap one for the other on promotion and demotion.
"""

from typing import Union


class InlineBuffer:
    """
    Fixed-capacity byte storage.

    Writes that would exceed capacity raise OverflowError; callers
    promote to BoxedBuffer before they get that far.
    """

    __slots__ = ("_data", "_len")

    def __init__(self, capacity: int, data: bytes = b"") -> None:
        if len(data) > capacity:
            raise OverflowError(f"{len(data)} bytes do not fit inline capacity {capacity}")
        self._data = bytearray(capacity)
        self._data[: len(data)] = data
        self._len = len(data)

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._len

    def byte_at(self, index: int) -> int:
        return self._data[index]

    def as_bytes(self) -> bytes:
        return bytes(self._data[: self._len])

    def insert(self, index: int, payload: bytes) -> None:
        size = len(payload)
        if self._len + size > self.capacity:
            raise OverflowError("inline buffer is full")
        self._data[index + size : self._len + size] = self._data[index : self._len]
        self._data[index : index + size] = payload
        self._len += size

    def delete(self, start: int, end: int) -> None:
        size = end - start
        self._data[start : self._len - size] = self._data[end : self._len]
        self._len -= size
        # zero the vacated tail so stale bytes never leak back in
        self._data[self._len : self._len + size] = bytes(size)


class BoxedBuffer:
    """Growable heap byte storage."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)

    def __len__(self) -> int:
        return len(self._data)

    def byte_at(self, index: int) -> int:
        return self._data[index]

    def as_bytes(self) -> bytes:
        return bytes(self._data)

    def insert(self, index: int, payload: bytes) -> None:
        self._data[index:index] = payload

    def delete(self, start: int, end: int) -> None:
        del self._data[start:end]


Buffer = Union[InlineBuffer, BoxedBuffer]

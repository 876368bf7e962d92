"""
Reference growable text.

RefString is the ground truth the oracle trusts. It keeps a Python str and
addresses it by UTF-8 byte offsets, faulting wherever a growable UTF-8
string faults: offsets past the end, offsets inside a character, reversed
ranges and inclusive ranges ending at MAX_OFFSET.

Boundaries are found by decoding the byte prefix, never by inspecting
individual bytes.
"""

from functools import total_ordering
from typing import Callable, Optional, Union

from .diagnostics import fault
from .modes import MAX_OFFSET


def _check_offset(owner: object, operation: str, index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"byte offset must be an int, not {type(index).__name__}")
    if index < 0 or index > MAX_OFFSET:
        fault(owner, operation, f"byte offset {index} is outside 0..={MAX_OFFSET}")


def _check_text(owner: object, operation: str, text: str) -> str:
    if not isinstance(text, str):
        raise TypeError(f"expected str, not {type(text).__name__}")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        fault(owner, operation, f"{text!r} is not valid UTF-8", ValueError)
    return text


def _check_char(owner: object, operation: str, ch: str) -> str:
    _check_text(owner, operation, ch)
    if len(ch) != 1:
        fault(owner, operation, f"expected a single character, got {ch!r}", ValueError)
    return ch


@total_ordering
class RefString:
    """
    Reference text value.

    len() is the UTF-8 byte length. Slicing takes byte offsets:
        text[2:5], text[3:], text[:4], text[:]
        text.slice_inclusive(2, 4), text.slice_inclusive(None, 4)
    """

    __slots__ = ("_text",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, text: str = "") -> None:
        self._text = _check_text(self, "new", text)

    def _prefix(self, index: int) -> Optional[str]:
        """Decode the first index bytes; None if index is past the end or splits a character."""
        data = self._text.encode("utf-8")
        if index > len(data):
            return None
        try:
            return data[:index].decode("utf-8")
        except UnicodeDecodeError:
            return None

    def is_char_boundary(self, index: int) -> bool:
        return index >= 0 and self._prefix(index) is not None

    def as_str(self) -> str:
        return self._text

    def as_bytes(self) -> bytes:
        return self._text.encode("utf-8")

    def push(self, ch: str) -> None:
        self._text += _check_char(self, "push", ch)

    def push_str(self, text: str) -> None:
        self._text += _check_text(self, "push_str", text)

    def truncate(self, new_len: int) -> None:
        """Shorten to new_len bytes. No-op when new_len is past the end."""
        _check_offset(self, "truncate", new_len)
        if new_len > len(self):
            return
        prefix = self._prefix(new_len)
        if prefix is None:
            fault(self, "truncate", f"byte index {new_len} is not a char boundary")
        self._text = prefix

    def pop(self) -> Optional[str]:
        if not self._text:
            return None
        ch = self._text[-1]
        self._text = self._text[:-1]
        return ch

    def remove(self, index: int) -> str:
        _check_offset(self, "remove", index)
        if index >= len(self):
            fault(self, "remove", "cannot remove a char from the end of a string")
        prefix = self._prefix(index)
        if prefix is None:
            fault(self, "remove", f"byte index {index} is not a char boundary")
        ch = self._text[len(prefix)]
        self._text = prefix + self._text[len(prefix) + 1:]
        return ch

    def insert(self, index: int, ch: str) -> None:
        _check_char(self, "insert", ch)
        self._insert_text("insert", index, ch)

    def insert_str(self, index: int, text: str) -> None:
        _check_text(self, "insert_str", text)
        self._insert_text("insert_str", index, text)

    def _insert_text(self, operation: str, index: int, text: str) -> None:
        _check_offset(self, operation, index)
        prefix = self._prefix(index)
        if prefix is None:
            fault(self, operation, f"byte index {index} is not a char boundary")
        self._text = prefix + text + self._text[len(prefix):]

    def split_off(self, at: int) -> "RefString":
        """Split at byte offset at; self keeps [0, at) and the rest is returned."""
        _check_offset(self, "split_off", at)
        prefix = self._prefix(at)
        if prefix is None:
            fault(self, "split_off", f"byte index {at} is not a char boundary")
        tail = self._text[len(prefix):]
        self._text = prefix
        return RefString(tail)

    def clear(self) -> None:
        self._text = ""

    def retain(self, predicate: Callable[[str], bool]) -> None:
        self._text = "".join(ch for ch in self._text if predicate(ch))

    def __getitem__(self, key: slice) -> str:
        if not isinstance(key, slice) or key.step is not None:
            raise TypeError("RefString only supports byte slices without a step")
        start = 0 if key.start is None else key.start
        end = len(self) if key.stop is None else key.stop
        return self._slice("index", start, end)

    def slice_inclusive(self, start: Optional[int], end: int) -> str:
        """Slice [start, end] in bytes; start=None means from the beginning."""
        start = 0 if start is None else start
        _check_offset(self, "slice_inclusive", start)
        _check_offset(self, "slice_inclusive", end)
        if end == MAX_OFFSET:
            fault(self, "slice_inclusive", "attempted to index str up to maximum offset")
        if start > end:
            fault(self, "slice_inclusive", f"slice index starts at {start} but ends at {end}")
        return self._slice("slice_inclusive", start, end + 1)

    def _slice(self, operation: str, start: int, end: int) -> str:
        _check_offset(self, operation, start)
        _check_offset(self, operation, end)
        if start > end:
            fault(self, operation, f"slice index starts at {start} but ends at {end}")
        length = len(self)
        if end > length:
            fault(self, operation, f"byte index {end} is out of bounds of {length}-byte text")
        head = self._prefix(start)
        whole = self._prefix(end)
        if head is None or whole is None:
            fault(self, operation, f"byte range {start}..{end} does not lie on char boundaries")
        return whole[len(head):]

    def __len__(self) -> int:
        return len(self._text.encode("utf-8"))

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"RefString({self._text!r})"

    def _coerce(self, other: object) -> Union[str, None]:
        if isinstance(other, RefString):
            return other._text
        if isinstance(other, str):
            return other
        return None

    def __eq__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._text == value

    def __lt__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._text < value

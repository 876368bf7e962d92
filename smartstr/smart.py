"""
SmartString: UTF-8 text with small-string optimization.

Content of at most MODE.max_inline bytes lives in an InlineBuffer; longer
content is promoted to a BoxedBuffer. Shrinking operations demote back to
inline storage, so is_inline() is always len() <= MODE.max_inline.

Every operation validates its operands before touching storage. A faulting
call leaves the value (and its representation) unchanged.
"""

from functools import total_ordering
from typing import Callable, ClassVar, Dict, Optional, Type, TypeVar, Union

from .diagnostics import fault
from .modes import COMPACT, MAX_OFFSET, PREFIXED, LayoutMode
from .reference import RefString
from .storage import BoxedBuffer, Buffer, InlineBuffer

S = TypeVar("S", bound="SmartString")


def _utf8_width(lead: int) -> int:
    if lead < 0x80:
        return 1
    if lead < 0xE0:
        return 2
    if lead < 0xF0:
        return 3
    return 4


@total_ordering
class SmartString:
    """
    SSO text value. The layout mode is a class attribute; pick a mode by
    picking a subclass (CompactString, PrefixedString).

    Offsets are UTF-8 byte offsets, len() is the byte length.
    """

    MODE: ClassVar[LayoutMode] = COMPACT

    __slots__ = ("_buf",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, text: str = "") -> None:
        self._buf: Buffer = self._store(self._encode("new", text))

    @classmethod
    def from_reference(cls: Type[S], value: RefString) -> S:
        """Build from a reference value, taking its bytes directly."""
        subject = cls.__new__(cls)
        subject._buf = subject._store(value.as_bytes())
        return subject

    @classmethod
    def _from_utf8(cls: Type[S], data: bytes) -> S:
        subject = cls.__new__(cls)
        subject._buf = subject._store(data)
        return subject

    def _store(self, data: bytes) -> Buffer:
        if len(data) <= self.MODE.max_inline:
            return InlineBuffer(self.MODE.max_inline, data)
        return BoxedBuffer(data)

    def _encode(self, operation: str, text: str) -> bytes:
        if not isinstance(text, str):
            raise TypeError(f"expected str, not {type(text).__name__}")
        try:
            return text.encode("utf-8")
        except UnicodeEncodeError:
            fault(self, operation, f"{text!r} is not valid UTF-8", ValueError)

    def _encode_char(self, operation: str, ch: str) -> bytes:
        data = self._encode(operation, ch)
        if len(ch) != 1:
            fault(self, operation, f"expected a single character, got {ch!r}", ValueError)
        return data

    def _check_offset(self, operation: str, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"byte offset must be an int, not {type(index).__name__}")
        if index < 0 or index > MAX_OFFSET:
            fault(self, operation, f"byte offset {index} is outside 0..={MAX_OFFSET}")

    # -- representation -------------------------------------------------

    def is_inline(self) -> bool:
        return isinstance(self._buf, InlineBuffer)

    def _reserve(self, extra: int) -> None:
        """Promote to boxed storage if extra more bytes would not fit inline."""
        if self.is_inline() and len(self._buf) + extra > self.MODE.max_inline:
            self._buf = BoxedBuffer(self._buf.as_bytes())

    def _settle(self) -> None:
        """Demote to inline storage once content fits again."""
        if not self.is_inline() and len(self._buf) <= self.MODE.max_inline:
            self._buf = InlineBuffer(self.MODE.max_inline, self._buf.as_bytes())

    def is_char_boundary(self, index: int) -> bool:
        length = len(self._buf)
        if index == 0 or index == length:
            return True
        if index < 0 or index > length:
            return False
        return (self._buf.byte_at(index) & 0xC0) != 0x80

    def _require_boundary(self, operation: str, index: int) -> None:
        if not self.is_char_boundary(index):
            fault(self, operation, f"byte index {index} is not a char boundary")

    def _char_start_before(self, end: int) -> int:
        start = end - 1
        while (self._buf.byte_at(start) & 0xC0) == 0x80:
            start -= 1
        return start

    # -- mutation -------------------------------------------------------

    def push(self, ch: str) -> None:
        data = self._encode_char("push", ch)
        self._reserve(len(data))
        self._buf.insert(len(self._buf), data)

    def push_str(self, text: str) -> None:
        data = self._encode("push_str", text)
        self._reserve(len(data))
        self._buf.insert(len(self._buf), data)

    def truncate(self, new_len: int) -> None:
        """Shorten to new_len bytes. No-op when new_len is past the end."""
        self._check_offset("truncate", new_len)
        length = len(self._buf)
        if new_len >= length:
            return
        self._require_boundary("truncate", new_len)
        self._buf.delete(new_len, length)
        self._settle()

    def pop(self) -> Optional[str]:
        length = len(self._buf)
        if length == 0:
            return None
        start = self._char_start_before(length)
        ch = self._buf.as_bytes()[start:length].decode("utf-8")
        self._buf.delete(start, length)
        self._settle()
        return ch

    def remove(self, index: int) -> str:
        self._check_offset("remove", index)
        if index >= len(self._buf):
            fault(self, "remove", "cannot remove a char from the end of a string")
        self._require_boundary("remove", index)
        end = index + _utf8_width(self._buf.byte_at(index))
        ch = self._buf.as_bytes()[index:end].decode("utf-8")
        self._buf.delete(index, end)
        self._settle()
        return ch

    def insert(self, index: int, ch: str) -> None:
        data = self._encode_char("insert", ch)
        self._insert_bytes("insert", index, data)

    def insert_str(self, index: int, text: str) -> None:
        data = self._encode("insert_str", text)
        self._insert_bytes("insert_str", index, data)

    def _insert_bytes(self, operation: str, index: int, data: bytes) -> None:
        self._check_offset(operation, index)
        self._require_boundary(operation, index)
        # promote only once the offset is known to be valid
        self._reserve(len(data))
        self._buf.insert(index, data)

    def split_off(self: S, at: int) -> S:
        """Split at byte offset at; self keeps [0, at) and the rest is returned."""
        self._check_offset("split_off", at)
        self._require_boundary("split_off", at)
        length = len(self._buf)
        tail = self._buf.as_bytes()[at:length]
        self._buf.delete(at, length)
        self._settle()
        return type(self)._from_utf8(tail)

    def clear(self) -> None:
        self._buf = InlineBuffer(self.MODE.max_inline)

    def retain(self, predicate: Callable[[str], bool]) -> None:
        kept = "".join(ch for ch in self.as_str() if predicate(ch))
        self._buf = self._store(kept.encode("utf-8"))

    # -- access ---------------------------------------------------------

    def __getitem__(self, key: slice) -> str:
        if not isinstance(key, slice) or key.step is not None:
            raise TypeError("SmartString only supports byte slices without a step")
        start = 0 if key.start is None else key.start
        end = len(self._buf) if key.stop is None else key.stop
        return self._slice("index", start, end)

    def slice_inclusive(self, start: Optional[int], end: int) -> str:
        """Slice [start, end] in bytes; start=None means from the beginning."""
        start = 0 if start is None else start
        self._check_offset("slice_inclusive", start)
        self._check_offset("slice_inclusive", end)
        if end == MAX_OFFSET:
            fault(self, "slice_inclusive", "attempted to index str up to maximum offset")
        if start > end:
            fault(self, "slice_inclusive", f"slice index starts at {start} but ends at {end}")
        return self._slice("slice_inclusive", start, end + 1)

    def _slice(self, operation: str, start: int, end: int) -> str:
        self._check_offset(operation, start)
        self._check_offset(operation, end)
        if start > end:
            fault(self, operation, f"slice index starts at {start} but ends at {end}")
        if end > len(self._buf):
            fault(self, operation, f"byte index {end} is out of bounds of {len(self._buf)}-byte text")
        self._require_boundary(operation, start)
        self._require_boundary(operation, end)
        return self._buf.as_bytes()[start:end].decode("utf-8")

    def as_bytes(self) -> bytes:
        return self._buf.as_bytes()

    def as_str(self) -> str:
        return self._buf.as_bytes().decode("utf-8")

    def to_reference(self) -> RefString:
        return RefString(self.as_str())

    def __len__(self) -> int:
        return len(self._buf)

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        storage = "inline" if self.is_inline() else "boxed"
        return f"{type(self).__name__}({self.as_str()!r}, {storage})"

    # -- comparison (UTF-8 byte order equals code point order) ----------

    def _coerce(self, other: object) -> Union[bytes, None]:
        if isinstance(other, SmartString):
            return other.as_bytes()
        if isinstance(other, str):
            return other.encode("utf-8", "surrogatepass")
        return None

    def __eq__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self.as_bytes() == value

    def __lt__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self.as_bytes() < value


class CompactString(SmartString):
    __slots__ = ()
    MODE = COMPACT


class PrefixedString(SmartString):
    __slots__ = ()
    MODE = PREFIXED


SUBJECT_TYPES: Dict[str, Type[SmartString]] = {
    CompactString.MODE.name: CompactString,
    PrefixedString.MODE.name: PrefixedString,
}


def subject_type(mode_name: str) -> Type[SmartString]:
    """
    Look up the subject class for a layout mode name.

    Raises:
        KeyError: If mode_name is not a known mode
    """
    try:
        return SUBJECT_TYPES[mode_name]
    except KeyError:
        raise KeyError(f"unknown layout mode {mode_name!r}; expected one of {sorted(SUBJECT_TYPES)}") from None

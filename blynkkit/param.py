"""Null-separated parameter lists as carried in protocol messages."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

_INT_RE = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.ASCII | re.IGNORECASE,
)


def _atoi(text: str) -> int:
    """Parse a leading integer the way C's atoi does; 0 if there is none."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    """Parse a leading float the way C's atof does; 0.0 if there is none."""
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass(frozen=True)
class ParamValue:
    """One element of a parameter list; ``text`` is None when it does not exist."""

    text: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.text is not None

    def as_str(self) -> str | None:
        return self.text

    def as_int(self) -> int:
        return _atoi(self.text) if self.text is not None else 0

    def as_float(self) -> float:
        return _atof(self.text) if self.text is not None else 0.0

    def is_empty(self) -> bool:
        return not self.text

    def __str__(self) -> str:
        return self.text or ""


_MISSING = ParamValue(None)


class Param:
    """A growable buffer of null-terminated strings with an optional size limit.

    Additions that would exceed ``capacity`` are dropped, leaving the buffer unchanged.
    """

    def __init__(self, data: bytes | bytearray | str = b"", capacity: int | None = None) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buffer = bytearray(data)
        if capacity is not None and len(self._buffer) > capacity:
            raise ValueError("initial data exceeds capacity")
        self.capacity = capacity

    def _spans(self) -> Iterator[tuple[int, int]]:
        buf = self._buffer
        start, end = 0, len(buf)
        while start < end:
            nul = buf.find(0, start)
            stop = end if nul < 0 else nul
            yield start, stop
            start = stop + 1

    def _decode(self, start: int, stop: int) -> str:
        return self._buffer[start:stop].decode("utf-8", "surrogateescape")

    def __iter__(self) -> Iterator[ParamValue]:
        for start, stop in self._spans():
            yield ParamValue(self._decode(start, stop))

    def __len__(self) -> int:
        return sum(1 for _ in self._spans())

    def __getitem__(self, index: int | str) -> ParamValue:
        if isinstance(index, str):
            value = self.get(index)
            if not value.is_valid:
                raise KeyError(index)
            return value
        return list(self)[index]

    def get(self, key: str) -> ParamValue:
        """Return the value that follows ``key`` among the even-positioned keys."""
        items = iter(self)
        for item in items:
            value = next(items, _MISSING)
            if item.text == key:
                return value
        return _MISSING

    def as_str(self) -> str:
        return self._buffer.split(b"\0", 1)[0].decode("utf-8", "surrogateescape")

    def as_int(self) -> int:
        return _atoi(self.as_str())

    def as_float(self) -> float:
        return _atof(self.as_str())

    def is_empty(self) -> bool:
        return not self._buffer or self._buffer[0] == 0

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __repr__(self) -> str:
        return f"Param({self.to_bytes()!r}, capacity={self.capacity!r})"

    def clear(self) -> None:
        self._buffer.clear()

    def add_raw(self, data: bytes | bytearray | memoryview) -> None:
        data = bytes(data)
        if self.capacity is not None and len(self._buffer) + len(data) > self.capacity:
            return
        self._buffer.extend(data)

    def add(self, value: object) -> None:
        """Append one value as a null-terminated string."""
        if value is None:
            self.add_raw(b"\0")
        elif isinstance(value, ParamValue):
            self.add(value.text)
        elif isinstance(value, bool):
            self.add_raw(b"1\0" if value else b"0\0")
        elif isinstance(value, int):
            self.add_raw(f"{value}".encode("ascii") + b"\0")
        elif isinstance(value, float):
            self.add_raw(f"{value:2.7f}".encode("ascii") + b"\0")
        elif isinstance(value, str):
            self.add_raw(value.encode("utf-8", "surrogateescape") + b"\0")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self.add_raw(bytes(value) + b"\0")
        else:
            raise TypeError(f"cannot add value of type {type(value).__name__}")

    def add_multi(self, *args: object) -> None:
        for value in args:
            self.add(value)

    def add_key(self, key: str, value: object) -> None:
        self.add(key)
        self.add(value)

    def remove_key(self, key: str) -> None:
        """Remove every occurrence of ``key`` together with its value."""
        removed = True
        while removed:
            removed = False
            spans = list(self._spans())
            for pos in range(0, len(spans), 2):
                start, stop = spans[pos]
                if self._decode(start, stop) == key:
                    following = spans[pos + 2][0] if pos + 2 < len(spans) else len(self._buffer)
                    del self._buffer[start:following]
                    removed = True
                    break
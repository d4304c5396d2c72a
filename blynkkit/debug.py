"""Formatting helpers for diagnostic log lines."""

from __future__ import annotations

from typing import Iterable


def format_dump(prefix: str, data: bytes) -> str:
    """Render bytes with printable characters as-is and others as bracketed hex.

    Consecutive non-printable bytes share one bracket, separated by ``|``.
    Empty data yields an empty string.
    """
    if not data:
        return ""
    parts = [prefix]
    prev_printable = True
    for byte in bytes(data):
        if 32 < byte < 127:
            if not prev_printable:
                parts.append("]")
            parts.append(chr(byte))
            prev_printable = True
        else:
            parts.append("[" if prev_printable else "|")
            parts.append(f"{byte:02x}")
            prev_printable = False
    if not prev_printable:
        parts.append("]")
    return "".join(parts)


def format_log(elapsed_ms: int, *args: object) -> str:
    """Return a log line prefixed with the elapsed time in milliseconds."""
    return f"[{elapsed_ms}] " + "".join(str(arg) for arg in args)


def format_ip(octets: Iterable[int], reverse: bool = False) -> str:
    """Render an IPv4 address from its four octets, optionally in reverse order."""
    values = list(octets)
    if reverse:
        values.reverse()
    return ".".join(str(value) for value in values)
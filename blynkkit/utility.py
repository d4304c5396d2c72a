"""Small numeric and string helpers."""

from __future__ import annotations

import zlib


def _div(a, b):
    """Divide, truncating toward zero when both operands are integers."""
    if isinstance(a, int) and isinstance(b, int):
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b > 0) else -quotient
    return a / b


def math_map(x, in_min, in_max, out_min, out_max):
    """Map ``x`` linearly from one range onto another."""
    return _div((x - in_min) * (out_max - out_min), in_max - in_min) + out_min


def clamp(value, low, high):
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp_map(x, in_min, in_max, out_min, out_max):
    """Clamp ``x`` to the input range, then map it onto the output range."""
    return math_map(clamp(x, in_min, in_max), in_min, in_max, out_min, out_max)


class MovingAverage:
    """Exponential moving average over an approximate window of samples."""

    def __init__(self, window: int) -> None:
        if window <= 0:
            raise ValueError("window must be positive")
        self.window = window
        self.reset()

    def reset(self) -> None:
        self._first = True
        self._avg = 0.0

    def has_value(self) -> bool:
        return not self._first

    def value(self) -> float:
        return self._avg

    def push(self, value) -> float:
        if self._first:
            self._avg = float(value)
            self._first = False
        else:
            self._avg -= self._avg / self.window
            self._avg += float(value) / self.window
        return self._avg


def average_sample(avg, value, window: int):
    """Return ``avg`` updated with one sample; decays by one when the sample adds nothing."""
    avg -= _div(avg, window)
    add = _div(value, window)
    return avg + add if add > 0 else avg - 1


def rssi_to_quality(dbm: int) -> int:
    """Convert signal strength in dBm to a 0..100 quality figure."""
    if dbm <= -100:
        return 0
    if dbm >= -50:
        return 100
    return 2 * (dbm + 100)


def quality_to_rssi(quality: int) -> int:
    """Convert a 0..100 quality figure back to dBm."""
    if quality <= 0:
        return -100
    if quality >= 100:
        return -50
    return quality // 2 - 100


def crc32(data: bytes, previous: int = 0) -> int:
    """CRC-32 (reflected, polynomial 0xEDB88320), chainable through ``previous``."""
    return zlib.crc32(bytes(data), previous) & 0xFFFFFFFF


def str_match(pattern: str, text: str) -> bool:
    """Match ``text`` against a pattern with ``?`` and ``*`` wildcards."""
    n, m = len(text), len(pattern)
    if m == 0:
        return n == 0

    i = j = 0
    star_text = star_pat = -1
    while i < n:
        if j < m and (text[i] == pattern[j] or pattern[j] == "?"):
            i += 1
            j += 1
        elif j < m and pattern[j] == "*":
            star_text, star_pat = i, j
            j += 1
        elif star_pat != -1:
            j = star_pat + 1
            i = star_text + 1
            star_text += 1
        else:
            return False

    while j < m and pattern[j] == "*":
        j += 1
    return j == m
"""Millisecond-resolution callback timer with a fixed number of slots."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

RUN_FOREVER = 0
RUN_ONCE = 1
MAX_TIMERS = 16


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class _Call(Enum):
    DONT_RUN = 0
    RUN_ONLY = 1
    RUN_AND_DELETE = 2


@dataclass
class _Slot:
    delay: int = 0
    callback: Callable[..., Any] | None = None
    args: tuple = field(default_factory=tuple)
    max_runs: int = RUN_FOREVER
    num_runs: int = 0
    enabled: bool = False
    prev_millis: int = 0
    to_be_called: _Call = _Call.DONT_RUN

    @property
    def valid(self) -> bool:
        return self.callback is not None

    def reset(self, now: int) -> None:
        self.delay = 0
        self.callback = None
        self.args = ()
        self.max_runs = RUN_FOREVER
        self.num_runs = 0
        self.enabled = False
        self.prev_millis = now
        self.to_be_called = _Call.DONT_RUN


class SimpleTimer:
    """Calls functions periodically or a limited number of times.

    ``clock`` returns the current time in milliseconds; ``run`` must be called
    often for the timers to fire.
    """

    def __init__(self, max_timers: int = MAX_TIMERS, clock: Callable[[], int] | None = None) -> None:
        if max_timers <= 0:
            raise ValueError("max_timers must be positive")
        self._clock = clock or _monotonic_ms
        now = self._clock()
        self._slots = [_Slot(prev_millis=now) for _ in range(max_timers)]
        self._count = 0

    def _slot(self, timer_id: int) -> _Slot | None:
        if 0 <= timer_id < len(self._slots):
            return self._slots[timer_id]
        return None

    def setup_timer(self, delay: int, callback: Callable[..., Any], runs: int = RUN_FOREVER, *args: Any) -> int:
        """Register ``callback`` to run every ``delay`` ms, ``runs`` times (0 = forever).

        Returns the timer id.
        """
        if self._count >= len(self._slots):
            raise RuntimeError("no free timer slot")
        free_id, slot = next(
            ((timer_id, slot) for timer_id, slot in enumerate(self._slots) if not slot.valid),
            (None, None),
        )
        if slot is None:
            raise RuntimeError("no free timer slot")
        if not callable(callback):
            raise TypeError("callback must be callable")

        slot.delay = delay
        slot.callback = callback
        slot.args = args
        slot.max_runs = runs
        slot.num_runs = 0
        slot.enabled = True
        slot.prev_millis = self._clock()
        self._count += 1
        return free_id

    def run(self) -> None:
        """Fire every timer whose interval has elapsed."""
        now = self._clock()

        for slot in self._slots:
            slot.to_be_called = _Call.DONT_RUN
            if not slot.valid:
                continue
            elapsed = now - slot.prev_millis
            if elapsed < slot.delay:
                continue
            if slot.delay:
                slot.prev_millis += slot.delay * (elapsed // slot.delay)
            else:
                slot.prev_millis = now
            if not slot.enabled:
                continue
            if slot.max_runs == RUN_FOREVER:
                slot.to_be_called = _Call.RUN_ONLY
            elif slot.num_runs < slot.max_runs:
                slot.num_runs += 1
                if slot.num_runs >= slot.max_runs:
                    slot.to_be_called = _Call.RUN_AND_DELETE
                else:
                    slot.to_be_called = _Call.RUN_ONLY

        for timer_id, slot in enumerate(self._slots):
            if slot.to_be_called is _Call.DONT_RUN:
                continue
            slot.callback(*slot.args)
            if slot.to_be_called is _Call.RUN_AND_DELETE:
                self.delete_timer(timer_id)

    def change_interval(self, timer_id: int, delay: int) -> bool:
        """Set a new interval for a timer in use; False if the slot is empty."""
        slot = self._slot(timer_id)
        if slot is None or not slot.valid:
            return False
        slot.delay = delay
        slot.prev_millis = self._clock()
        return True

    def delete_timer(self, timer_id: int) -> None:
        slot = self._slot(timer_id)
        if slot is None or self._count == 0:
            return
        if slot.valid:
            slot.reset(self._clock())
            self._count -= 1

    def restart_timer(self, timer_id: int) -> None:
        slot = self._slot(timer_id)
        if slot is not None:
            slot.prev_millis = self._clock()

    def execute_now(self, timer_id: int) -> None:
        """Make the timer due on the next ``run``."""
        slot = self._slot(timer_id)
        if slot is not None:
            slot.prev_millis = self._clock() - slot.delay

    def is_enabled(self, timer_id: int) -> bool:
        slot = self._slot(timer_id)
        return slot is not None and slot.enabled

    def enable(self, timer_id: int) -> None:
        slot = self._slot(timer_id)
        if slot is not None:
            slot.enabled = True

    def disable(self, timer_id: int) -> None:
        slot = self._slot(timer_id)
        if slot is not None:
            slot.enabled = False

    def enable_all(self) -> None:
        """Enable every used timer that has not yet counted any limited run."""
        for slot in self._slots:
            if slot.valid and slot.num_runs == RUN_FOREVER:
                slot.enabled = True

    def disable_all(self) -> None:
        """Disable every used timer that has not yet counted any limited run."""
        for slot in self._slots:
            if slot.valid and slot.num_runs == RUN_FOREVER:
                slot.enabled = False

    def toggle(self, timer_id: int) -> None:
        slot = self._slot(timer_id)
        if slot is not None:
            slot.enabled = not slot.enabled

    def num_timers(self) -> int:
        return self._count
"""
Clocks reporting nanoseconds since Unix epoch.

SystemClock reads the wall clock once and then advances with the
high-resolution performance counter, so it never goes backwards on its own
and keeps full nanosecond resolution where the OS wall clock is coarse.
"""

import threading
import time

from nulid.core.errors import ClockError


class Clock:
    """Time source used by a Generator."""

    def now_nanos(self):
        raise NotImplementedError


class SystemClock(Clock):
    __slots__ = ("_base_wall", "_base_perf")

    def __init__(self):
        try:
            self._base_wall = time.time_ns()
            self._base_perf = time.perf_counter_ns()
        except OSError as exc:
            raise ClockError("System clock unavailable", cause=exc) from exc

    def now_nanos(self):
        try:
            elapsed = time.perf_counter_ns() - self._base_perf
        except OSError as exc:
            raise ClockError("Performance counter unavailable", cause=exc) from exc
        return self._base_wall + elapsed


class MockClock(Clock):
    """Manually driven clock for reproducible tests."""

    def __init__(self, nanos=0):
        self._lock = threading.Lock()
        self._nanos = nanos

    def now_nanos(self):
        with self._lock:
            return self._nanos

    def set(self, nanos):
        with self._lock:
            self._nanos = nanos

    def advance(self, nanos):
        with self._lock:
            self._nanos += nanos

    def regress(self, nanos):
        with self._lock:
            self._nanos = max(0, self._nanos - nanos)


_system_clock = None
_system_clock_lock = threading.Lock()


def get_system_clock():
    """Process-wide SystemClock, anchored on first use."""
    global _system_clock
    if _system_clock is None:
        with _system_clock_lock:
            if _system_clock is None:
                _system_clock = SystemClock()
    return _system_clock

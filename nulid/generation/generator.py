"""
Monotonic NULID generator.

Every value returned by one Generator is strictly greater than the previous
one, whatever the clock does:

- clock ahead of the last timestamp: new timestamp + fresh random tail
- same nanosecond or clock moved back: last value + 1 (carry may reach
  the timestamp field)
- last value == Nulid.MAX: GeneratorOverflowError, never a wrap-around
"""

import threading

from nulid.core.bits import MAX_TAIL, MAX_TIMESTAMP, TAIL_BITS, TIMESTAMP_BITS
from nulid.core.errors import (
    ClockUnavailableError,
    GeneratorOverflowError,
    GeneratorPoisonedError,
    NulidError,
    ValueOutOfRangeError,
)
from nulid.core.identifier import Nulid
from nulid.internal.logging import get_logger
from nulid.sources.clock import get_system_clock
from nulid.sources.node import NODE_RANDOM_BITS, NodeTag
from nulid.sources.rng import get_secure_rng


class Generator:
    """Thread-safe, strictly increasing NULID sequence."""

    def __init__(self, clock=None, rng=None, node=None, last=None):
        if node is not None and not isinstance(node, NodeTag):
            node = NodeTag(node)
        self._clock = clock or get_system_clock()
        self._rng = rng or get_secure_rng()
        self._node = node
        self._last = last
        self._poisoned = False
        self._lock = threading.Lock()
        self._log = get_logger().bind(component="generator")

    def generate(self):
        """Next identifier stamped with the clock's current time."""
        return self._next(self._read_clock)

    def generate_with_timestamp(self, timestamp_nanos):
        """Next identifier for a caller-supplied timestamp, same ordering rules."""
        if not isinstance(timestamp_nanos, int) or isinstance(timestamp_nanos, bool):
            raise TypeError(f"timestamp must be int, not {type(timestamp_nanos).__name__}")
        if timestamp_nanos < 0 or timestamp_nanos > MAX_TIMESTAMP:
            raise ValueOutOfRangeError("timestamp", timestamp_nanos, TIMESTAMP_BITS)
        return self._next(lambda: timestamp_nanos)

    def generate_many(self, count):
        """`count` identifiers in order.

        If a call fails partway the error propagates and the identifiers
        already drawn are lost: `last()` has moved past them and they are
        never reissued.
        """
        return [self.generate() for _ in range(count)]

    def last(self):
        with self._lock:
            return self._last

    def node_id(self):
        return self._node.value if self._node is not None else None

    @property
    def clock(self):
        return self._clock

    @property
    def poisoned(self):
        with self._lock:
            return self._poisoned

    def _next(self, read_timestamp):
        with self._lock:
            if self._poisoned:
                raise GeneratorPoisonedError()
            now = read_timestamp()
            try:
                return self._step(now)
            except NulidError:
                raise
            except Exception as exc:
                self._poisoned = True
                self._log.error("Generator poisoned", error=exc)
                raise GeneratorPoisonedError(cause=exc) from exc

    def _step(self, now):
        last = self._last
        if last is None or now > last.timestamp:
            candidate = Nulid.from_parts(now, self._draw_tail())
        else:
            if now < last.timestamp:
                self._log.debug("Clock regression", now=now, last=last.timestamp)
            try:
                candidate = last.increment()
            except GeneratorOverflowError:
                self._log.warn("Identifier space exhausted", last=str(last))
                raise
        self._last = candidate
        return candidate

    def _read_clock(self):
        try:
            now = self._clock.now_nanos()
        except Exception as exc:
            raise ClockUnavailableError("Clock unavailable", cause=exc) from exc
        if not isinstance(now, int) or isinstance(now, bool):
            raise ClockUnavailableError(f"Clock reading is not an integer: {now!r}", context={"now": now})
        if now < 0 or now > MAX_TIMESTAMP:
            raise ClockUnavailableError(f"Clock reading out of range: {now}", context={"now": now})
        return now

    def _draw_tail(self):
        if self._node is None:
            return self._rng.random_tail_bits(TAIL_BITS) & MAX_TAIL
        return self._node.merge(self._rng.random_tail_bits(NODE_RANDOM_BITS))

    def __repr__(self):
        return f"Generator(node={self.node_id()}, last={self._last!r})"

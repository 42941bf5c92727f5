import asyncio
import time
from enum import Enum

from nulid.core.errors import ClockError
from nulid.utils.timestamp import format_timestamp


class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"


class CheckResult:
    __slots__ = ("name", "status", "msg", "took_us")

    def __init__(self, name, status, msg="", took_us=0):
        self.name = name
        self.status = status
        self.msg = msg
        self.took_us = took_us

    def to_dict(self):
        return {"name": self.name,
                "status": self.status.value,
                "msg": self.msg,
                "took_us": self.took_us}


class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")

    def __init__(self, checks, uptime=0):
        self.checks = [result for result, _ in checks]
        self.status = _overall(checks)
        self.uptime = uptime
        self.timestamp = format_timestamp()

    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}


def _overall(checks):
    status = Status.OK
    for result, critical in checks:
        if result.status == Status.FAIL and critical:
            return Status.FAIL
        if result.status != Status.OK:
            status = Status.DEGRADED
    return status


class HealthChecker:
    """Runs registered async checks, caching the report for `ttl` seconds."""

    def __init__(self, ttl=1.0, timeout=5.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._timeout = timeout
        self._start_time = time.monotonic()

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    async def check(self):
        now = time.monotonic()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        checks = [(await self._run(name, check_fn), critical)
                  for name, (check_fn, critical) in self._checks.items()]
        self._cache = HealthReport(checks, now - self._start_time)
        self._cache_time = now
        return self._cache

    async def _run(self, name, check_fn):
        started = time.perf_counter_ns()
        try:
            result = await asyncio.wait_for(check_fn(), timeout=self._timeout)
        except asyncio.TimeoutError:
            result = CheckResult(name, Status.FAIL, "timeout")
        except Exception as exc:
            result = CheckResult(name, Status.FAIL, str(exc))
        result.took_us = (time.perf_counter_ns() - started) // 1000
        return result


# Checks
async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)


def create_generator_check(generator):
    """Fails when the generator is poisoned or its clock is unreadable.

    A clock behind the last emitted timestamp is only a degradation: the
    generator keeps counting up from its last value until time catches up.
    """
    async def check():
        if generator.poisoned:
            return CheckResult("generator", Status.FAIL, "poisoned")
        try:
            now = generator.clock.now_nanos()
        except ClockError as exc:
            return CheckResult("generator", Status.FAIL, str(exc))

        last = generator.last()
        if last is not None and now < last.timestamp:
            return CheckResult("generator", Status.DEGRADED, f"clock behind by {last.timestamp - now}ns")
        return CheckResult("generator", Status.OK, f"node={generator.node_id()}")
    return check


def create_drift_check(clock, threshold_ns=1_000_000_000):
    """Degraded when `clock` and the wall clock disagree by more than `threshold_ns`.

    SystemClock runs on perf_counter after its anchor, so a wall clock step
    (NTP, manual change) shows up here rather than in the identifiers.
    """
    async def check():
        try:
            drift = clock.now_nanos() - time.time_ns()
        except ClockError as exc:
            return CheckResult("clock", Status.FAIL, str(exc))
        if abs(drift) > threshold_ns:
            return CheckResult("clock", Status.DEGRADED, f"drift {drift}ns")
        return CheckResult("clock", Status.OK, f"drift {drift}ns")
    return check

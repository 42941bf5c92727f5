"""Nanosecond timestamp utilities."""

import time
from datetime import datetime, timedelta, timezone

NANOS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_nanos():
    """Current wall-clock time in nanoseconds since Unix epoch."""
    return time.time_ns()


def format_timestamp(epoch_ns=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_ns is None:
        epoch_ns = now_nanos()

    dt = _EPOCH + timedelta(microseconds=epoch_ns // 1000)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"


def format_nanos(epoch_ns):
    """Format timestamp as ISO 8601 keeping all nine fractional digits."""
    seconds, nanos = divmod(epoch_ns, NANOS_PER_SECOND)
    dt = _EPOCH + timedelta(seconds=seconds)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{nanos:09d}Z"

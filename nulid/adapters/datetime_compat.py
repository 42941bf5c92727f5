"""datetime interop. datetime keeps microseconds, so nanoseconds are truncated."""

from datetime import datetime, timedelta, timezone

from nulid.core.bits import MAX_TIMESTAMP, TIMESTAMP_BITS
from nulid.core.errors import ValueOutOfRangeError
from nulid.core.identifier import Nulid
from nulid.sources.rng import get_secure_rng

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_datetime(nulid):
    """Timezone-aware UTC datetime of the identifier's timestamp.

    Raises OverflowError past year 9999, the limit of datetime.
    """
    return _EPOCH + timedelta(microseconds=nulid.micros())


def datetime_to_nanos(dt):
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - _EPOCH
    nanos = (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000
    if nanos < 0 or nanos > MAX_TIMESTAMP:
        raise ValueOutOfRangeError("timestamp", nanos, TIMESTAMP_BITS)
    return nanos


def from_datetime(dt, rng=None):
    """Identifier at `dt` with a fresh random tail. Naive datetimes are read as UTC."""
    rng = rng or get_secure_rng()
    return Nulid.from_parts(datetime_to_nanos(dt), rng.random_tail_bits())

"""
NULID - Nanosecond-precision Universally Lexicographically sortable IDentifier.

128 bits: 68-bit nanosecond timestamp + 60-bit tail.
Binary form is 16 bytes big-endian, text form is 26 Crockford Base32 chars.
Integer, byte and string orderings all agree.
"""

from functools import total_ordering

from nulid.core import base32, bits
from nulid.core.errors import GeneratorOverflowError, ValueOutOfRangeError


@total_ordering
class Nulid:
    """Immutable 128-bit identifier."""

    __slots__ = ("_value",)

    TIMESTAMP_BITS = bits.TIMESTAMP_BITS
    TAIL_BITS = bits.TAIL_BITS

    MIN = None
    MAX = None
    NIL = None

    def __init__(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Nulid value must be int, not {type(value).__name__}")
        if value < 0 or value > bits.MAX_VALUE:
            raise ValueOutOfRangeError("value", value, bits.TOTAL_BITS)
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError("Nulid is immutable")

    def __delattr__(self, name):
        raise AttributeError("Nulid is immutable")

    # Construction

    @classmethod
    def from_parts(cls, timestamp_nanos, tail):
        """Build from a nanosecond timestamp and tail bits, rejecting oversized fields."""
        if timestamp_nanos < 0 or timestamp_nanos > bits.MAX_TIMESTAMP:
            raise ValueOutOfRangeError("timestamp", timestamp_nanos, bits.TIMESTAMP_BITS)
        if tail < 0 or tail > bits.MAX_TAIL:
            raise ValueOutOfRangeError("tail", tail, bits.TAIL_BITS)
        return cls(bits.pack(timestamp_nanos, tail))

    from_nanos = from_parts

    @classmethod
    def from_bytes(cls, data):
        return cls(bits.from_bytes(data))

    @classmethod
    def parse(cls, text):
        """Parse a 26-character string, case-insensitive."""
        return cls(base32.decode(text))

    from_str = parse

    @classmethod
    def new(cls):
        """Fresh identifier from the system clock and secure randomness.

        No monotonicity across calls; use a Generator for that.
        """
        from nulid.sources.clock import get_system_clock
        from nulid.sources.rng import get_secure_rng

        return cls.from_parts(get_system_clock().now_nanos(), get_secure_rng().random_tail_bits())

    # Parts

    @property
    def value(self):
        return self._value

    @property
    def timestamp(self):
        return self._value >> bits.TAIL_BITS

    @property
    def tail(self):
        return self._value & bits.MAX_TAIL

    def parts(self):
        return bits.unpack(self._value)

    def nanos(self):
        return self.timestamp

    # Coarser units truncate (floor division), they never round.
    def micros(self):
        return self.timestamp // 1_000

    def millis(self):
        return self.timestamp // 1_000_000

    def seconds(self):
        return self.timestamp // 1_000_000_000

    def subsec_nanos(self):
        return self.timestamp % 1_000_000_000

    def is_nil(self):
        return self._value == 0

    def increment(self):
        """Next identifier in order; the carry may run into the timestamp."""
        if self._value == bits.MAX_VALUE:
            raise GeneratorOverflowError(context={"last": str(self)})
        return Nulid(self._value + 1)

    # Conversions

    def to_bytes(self):
        return bits.to_bytes(self._value)

    def hex(self):
        return f"{self._value:032X}"

    def __bytes__(self):
        return self.to_bytes()

    def __int__(self):
        return self._value

    def __str__(self):
        return base32.encode(self._value)

    def __repr__(self):
        return f"Nulid('{self}')"

    # Ordering

    def __eq__(self, other):
        if not isinstance(other, Nulid):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other):
        if not isinstance(other, Nulid):
            return NotImplemented
        return self._value < other._value

    def __hash__(self):
        return hash(self._value)

    def __reduce__(self):
        return (Nulid, (self._value,))


Nulid.MIN = Nulid(0)
Nulid.MAX = Nulid(bits.MAX_VALUE)
Nulid.NIL = Nulid.MIN

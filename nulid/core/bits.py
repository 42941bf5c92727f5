"""
Bit layout of the 128-bit identifier.

Format: 68 bits timestamp (ns since Unix epoch) + 60 bits tail.
Binary form is 16 bytes, big-endian, so byte order sorts like the integer.
"""

from nulid.core.errors import InvalidBytesLengthError

TIMESTAMP_BITS = 68
TAIL_BITS = 60
TOTAL_BITS = TIMESTAMP_BITS + TAIL_BITS
BYTES_LENGTH = TOTAL_BITS // 8

MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1
MAX_TAIL = (1 << TAIL_BITS) - 1
MAX_VALUE = (1 << TOTAL_BITS) - 1


def pack(timestamp, tail):
    """Combine timestamp and tail; inputs wider than their field are truncated."""
    return ((timestamp & MAX_TIMESTAMP) << TAIL_BITS) | (tail & MAX_TAIL)


def unpack(value):
    """Split a 128-bit value into (timestamp, tail)."""
    value &= MAX_VALUE
    return value >> TAIL_BITS, value & MAX_TAIL


def to_bytes(value):
    return (value & MAX_VALUE).to_bytes(BYTES_LENGTH, byteorder="big")


def from_bytes(data):
    if len(data) != BYTES_LENGTH:
        raise InvalidBytesLengthError(BYTES_LENGTH, len(data))
    return int.from_bytes(data, byteorder="big")

"""
Crockford Base32 codec for 128-bit values.

26 symbols x 5 bits = 130 bits, so the leading symbol carries two unused
high bits. They are always zero on encode and masked away on decode.
Symbols are in ascending ASCII order, which keeps string order equal to
integer order.
"""

from nulid.core.bits import MAX_VALUE
from nulid.core.errors import InvalidCharError, InvalidLengthError

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ENCODED_LENGTH = 26

_ALPHABET_BYTES = ALPHABET.encode("ascii")
_DECODE = {}
for _index, _symbol in enumerate(ALPHABET):
    _DECODE[_symbol] = _index
    _DECODE[_symbol.lower()] = _index
del _index, _symbol


def encode_into(value, buf):
    """Write the 26 ASCII symbols of `value` into `buf` without allocating."""
    if len(buf) < ENCODED_LENGTH:
        raise ValueError(f"buffer must hold {ENCODED_LENGTH} bytes, got {len(buf)}")
    value &= MAX_VALUE
    for position in range(ENCODED_LENGTH - 1, -1, -1):
        buf[position] = _ALPHABET_BYTES[value & 0x1F]
        value >>= 5
    return buf


def encode(value):
    """Encode a 128-bit value as a 26-character uppercase string."""
    return encode_into(value, bytearray(ENCODED_LENGTH)).decode("ascii")


def decode(text):
    """Decode 26 Crockford symbols (any case) back to the 128-bit value."""
    if len(text) != ENCODED_LENGTH:
        raise InvalidLengthError(ENCODED_LENGTH, len(text))

    value = 0
    for position, char in enumerate(text):
        symbol = _DECODE.get(char)
        if symbol is None:
            raise InvalidCharError(char, position)
        value = (value << 5) | symbol

    # Mask, never reject, the two spare bits of the leading symbol.
    return value & MAX_VALUE


def is_valid(text):
    if len(text) != ENCODED_LENGTH:
        return False
    return all(char in _DECODE for char in text)

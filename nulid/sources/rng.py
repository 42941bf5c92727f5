"""Random tail sources."""

import random
import secrets
import threading

from nulid.core.bits import TAIL_BITS


class Rng:
    """Supplier of random tail bits."""

    def random_tail_bits(self, bits=TAIL_BITS):
        raise NotImplementedError


class SecureRng(Rng):
    """CSPRNG bits, drawn from the OS in blocks to amortize syscalls."""

    def __init__(self, buffer_size=4096):
        self._lock = threading.Lock()
        self._buffer_size = buffer_size
        self._buffer = b""
        self._offset = 0

    def random_tail_bits(self, bits=TAIL_BITS):
        with self._lock:
            if self._offset + 8 > len(self._buffer):
                self._buffer = secrets.token_bytes(self._buffer_size)
                self._offset = 0
            chunk = self._buffer[self._offset:self._offset + 8]
            self._offset += 8
        return int.from_bytes(chunk, byteorder="big") >> (64 - bits)


class SeededRng(Rng):
    """Reproducible sequence for a given seed."""

    def __init__(self, seed):
        self._lock = threading.Lock()
        self._random = random.Random(seed)

    def random_tail_bits(self, bits=TAIL_BITS):
        with self._lock:
            return self._random.getrandbits(bits)


class SequentialRng(Rng):
    """Counts 0, 1, 2, ... for readable debugging output."""

    def __init__(self, start=0):
        self._lock = threading.Lock()
        self._next = start

    def random_tail_bits(self, bits=TAIL_BITS):
        with self._lock:
            value = self._next
            self._next += 1
        return value & ((1 << bits) - 1)


_secure_rng = None
_secure_rng_lock = threading.Lock()


def get_secure_rng():
    global _secure_rng
    if _secure_rng is None:
        with _secure_rng_lock:
            if _secure_rng is None:
                _secure_rng = SecureRng()
    return _secure_rng

"""Nanosecond-precision, lexicographically sortable 128-bit identifiers."""

from nulid.core.base32 import ALPHABET, ENCODED_LENGTH
from nulid.core.errors import (
    ClockError,
    ClockUnavailableError,
    DecodeError,
    GenerationError,
    GeneratorOverflowError,
    GeneratorPoisonedError,
    InvalidBytesLengthError,
    InvalidCharError,
    InvalidLengthError,
    NulidError,
    ValueOutOfRangeError,
)
from nulid.core.identifier import Nulid
from nulid.generation.generator import Generator
from nulid.sources.clock import Clock, MockClock, SystemClock, get_system_clock
from nulid.sources.node import NodeTag
from nulid.sources.rng import Rng, SecureRng, SeededRng, SequentialRng

__version__ = "0.1.0"

__all__ = [
    "ALPHABET",
    "ENCODED_LENGTH",
    "Clock",
    "ClockError",
    "ClockUnavailableError",
    "DecodeError",
    "GenerationError",
    "Generator",
    "GeneratorOverflowError",
    "GeneratorPoisonedError",
    "InvalidBytesLengthError",
    "InvalidCharError",
    "InvalidLengthError",
    "MockClock",
    "NodeTag",
    "Nulid",
    "NulidError",
    "Rng",
    "SecureRng",
    "SeededRng",
    "SequentialRng",
    "SystemClock",
    "ValueOutOfRangeError",
    "get_system_clock",
]

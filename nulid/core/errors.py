"""Error taxonomy for decoding and generation."""

from nulid.utils.timestamp import format_timestamp


class NulidError(Exception):
    """Base error with context and creation timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.message = message
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause


class DecodeError(NulidError, ValueError):
    """Text or byte input that does not describe an identifier."""


class InvalidLengthError(DecodeError):
    """Encoded string has the wrong number of characters."""

    def __init__(self, expected, found, **kwargs):
        self.expected = expected
        self.found = found
        context = kwargs.pop("context", {})
        context.update(expected=expected, found=found)
        super().__init__(
            f"Invalid length: expected {expected} characters, found {found}",
            context=context,
            **kwargs,
        )


class InvalidCharError(DecodeError):
    """Encoded string contains a symbol outside the alphabet."""

    def __init__(self, char, position, **kwargs):
        self.char = char
        self.position = position
        context = kwargs.pop("context", {})
        context.update(char=char, position=position)
        super().__init__(f"Invalid character '{char}' at position {position}", context=context, **kwargs)


class InvalidBytesLengthError(DecodeError):
    """Binary form is not exactly 16 bytes."""

    def __init__(self, expected, found, **kwargs):
        self.expected = expected
        self.found = found
        context = kwargs.pop("context", {})
        context.update(expected=expected, found=found)
        super().__init__(f"Invalid byte length: expected {expected} bytes, found {found}", context=context, **kwargs)


class ValueOutOfRangeError(NulidError, ValueError):
    """A field or raw value does not fit its bit width."""

    def __init__(self, field, value, bits, **kwargs):
        self.field = field
        self.value = value
        self.bits = bits
        context = kwargs.pop("context", {})
        context.update(field=field, bits=bits)
        super().__init__(f"{field} out of range: {value} does not fit in {bits} bits", context=context, **kwargs)


class ClockError(NulidError):
    """Raised by a clock that cannot report the current time."""


class GenerationError(NulidError):
    """Base for failures of a single generate() call."""


class ClockUnavailableError(GenerationError):
    """The generator's clock failed."""


class GeneratorOverflowError(GenerationError):
    """The 128-bit space is exhausted; incrementing would wrap."""

    def __init__(self, message="Randomness overflow: cannot increment further", **kwargs):
        super().__init__(message, **kwargs)


class GeneratorPoisonedError(GenerationError):
    """A previous call failed mid-update; the generator refuses further use."""

    def __init__(self, message="Generator state poisoned by an earlier failure", **kwargs):
        super().__init__(message, **kwargs)

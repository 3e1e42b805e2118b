class HomomorphicError(Exception):
    """Base class for every error raised by the arithmetic and encryption layers."""


class FormatError(HomomorphicError, ValueError):
    """Text could not be parsed as a decimal integer."""


class DomainError(HomomorphicError, ValueError):
    """An operand lies outside the range an operation is defined on."""


class NoInverseError(HomomorphicError, ArithmeticError):
    """A modular inverse was requested for a pair that is not coprime."""


class KeyGenError(HomomorphicError, ValueError):
    """A cryptosystem could not derive a valid key pair from its inputs."""


class ArithmeticOverflowError(HomomorphicError, OverflowError):
    """A result does not fit in the supported integer width."""

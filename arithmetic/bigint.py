from functools import total_ordering
from typing import Union
import re

from arithmetic.errors import ArithmeticOverflowError, FormatError

BIT_WIDTH = 256  # signed, two's-complement range
MIN_VALUE = -(1 << (BIT_WIDTH - 1))
MAX_VALUE = (1 << (BIT_WIDTH - 1)) - 1

_DECIMAL = re.compile(r"-?[0-9]+")

Operand = Union["BigSignedInt", int]


@total_ordering
class BigSignedInt:
    """
    Fixed-width signed integer with exact arithmetic.

    Values live in [MIN_VALUE, MAX_VALUE]. Every operation returns a new
    instance and raises ArithmeticOverflowError instead of wrapping when a
    result leaves that range.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Operand = 0):
        if isinstance(value, BigSignedInt):
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"BigSignedInt expects an int, got {type(value).__name__}")
        if not MIN_VALUE <= value <= MAX_VALUE:
            raise ArithmeticOverflowError(
                f"value needs {value.bit_length() + 1} bits, width is {BIT_WIDTH}"
            )
        self._value = value

    @classmethod
    def from_string(cls, text: str) -> "BigSignedInt":
        """Parse canonical decimal text: an optional '-' followed by digits."""
        if not isinstance(text, str) or not _DECIMAL.fullmatch(text):
            raise FormatError(f"not a decimal integer: {text!r}")
        digits = text.lstrip("-")
        value = 0
        for ch in digits:
            value = value * 10 + (ord(ch) - ord("0"))
            if value > -MIN_VALUE:
                raise ArithmeticOverflowError(f"{text} does not fit in {BIT_WIDTH} bits")
        return cls(-value if text.startswith("-") else value)

    fromString = from_string

    @classmethod
    def coerce(cls, value: Union["BigSignedInt", int, str]) -> "BigSignedInt":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        return cls(value)

    def to_string(self) -> str:
        if self._value == 0:
            return "0"
        magnitude = abs(self._value)
        digits = []
        while magnitude > 0:
            magnitude, digit = divmod(magnitude, 10)
            digits.append(chr(ord("0") + digit))
        if self._value < 0:
            digits.append("-")
        return "".join(reversed(digits))

    toString = to_string

    def is_negative(self) -> bool:
        return self._value < 0

    def bit_length(self) -> int:
        return self._value.bit_length()

    @staticmethod
    def _raw(other) -> int:
        if isinstance(other, BigSignedInt):
            return other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return NotImplemented

    def __add__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        return BigSignedInt(self._value + rhs)

    __radd__ = __add__

    def __sub__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        return BigSignedInt(self._value - rhs)

    def __rsub__(self, other):
        lhs = self._raw(other)
        if lhs is NotImplemented:
            return lhs
        return BigSignedInt(lhs - self._value)

    def __mul__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        return BigSignedInt(self._value * rhs)

    __rmul__ = __mul__

    def __floordiv__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        return BigSignedInt(self._value // rhs)

    def __rfloordiv__(self, other):
        lhs = self._raw(other)
        if lhs is NotImplemented:
            return lhs
        return BigSignedInt(lhs // self._value)

    def __mod__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        return BigSignedInt(self._value % rhs)

    def __rmod__(self, other):
        lhs = self._raw(other)
        if lhs is NotImplemented:
            return lhs
        return BigSignedInt(lhs % self._value)

    def __divmod__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        q, r = divmod(self._value, rhs)
        return BigSignedInt(q), BigSignedInt(r)

    def __rdivmod__(self, other):
        lhs = self._raw(other)
        if lhs is NotImplemented:
            return lhs
        q, r = divmod(lhs, self._value)
        return BigSignedInt(q), BigSignedInt(r)

    def __neg__(self):
        return BigSignedInt(-self._value)

    def __pos__(self):
        return self

    def __abs__(self):
        return BigSignedInt(abs(self._value))

    def __eq__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        return self._value == rhs

    def __lt__(self, other):
        rhs = self._raw(other)
        if rhs is NotImplemented:
            return rhs
        return self._value < rhs

    def __hash__(self):
        return hash(self._value)

    def __int__(self):
        return self._value

    __index__ = __int__

    def __bool__(self):
        return self._value != 0

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"BigSignedInt({self.to_string()})"

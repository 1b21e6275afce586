"""Arbitrary-precision signed integers.

``BigInt`` is a sign-magnitude value over the limb arithmetic in
``magnitude``.  Each instance owns its limb list outright; nothing is
shared between two values, so an in-place operation on one can never
be observed through another.

Two calling forms exist for every arithmetic operation:

* compound (``x += y``, ``x.add(y)``) mutates the receiver and returns it;
* pure (``x + y``, ``add(x, y)``) copies the left operand first and
  leaves both operands untouched.

Division truncates toward zero and the remainder takes the sign of the
dividend, so ``(a / b) * b + a % b == a`` for every nonzero ``b``.
"""
from __future__ import annotations

import re
import sys
from typing import TextIO, Union

import magnitude
from errors import InvalidFormat

_LITERAL = re.compile(r"(-?)([0-9]+)")

Operand = Union["BigInt", int]


class BigInt:
    """A signed integer of unbounded magnitude."""

    __hash__ = None  # mutable

    def __init__(self, value: BigInt | int | str = 0) -> None:
        self._limbs: list[int] = [0]
        self._negative = False
        if isinstance(value, BigInt):
            self._limbs = list(value._limbs)
            self._negative = value._negative
        elif isinstance(value, int):
            self._negative = value < 0
            self._limbs = magnitude.from_int(-value if value < 0 else value)
        elif isinstance(value, str):
            self.read(value)
        else:
            raise TypeError(
                f"cannot build BigInt from {type(value).__name__}"
            )

    @classmethod
    def parse(cls, text: str) -> BigInt:
        """Parse an optional '-' followed by decimal digits."""
        return cls(text)

    @classmethod
    def _from_magnitude(cls, limbs: list[int], negative: bool) -> BigInt:
        value = cls.__new__(cls)
        value._limbs = limbs
        value._negative = negative and not magnitude.is_zero(limbs)
        assert value._is_canonical()
        return value

    # -- representation -----------------------------------------------------

    @property
    def limbs(self) -> tuple[int, ...]:
        """Little-endian base 10**9 limbs of the magnitude."""
        return tuple(self._limbs)

    @property
    def negative(self) -> bool:
        return self._negative

    def is_zero(self) -> bool:
        return magnitude.is_zero(self._limbs)

    def copy(self) -> BigInt:
        return BigInt(self)

    def _is_canonical(self) -> bool:
        if not magnitude.is_canonical(self._limbs):
            return False
        return not (self._negative and self.is_zero())

    def _settle_sign(self) -> BigInt:
        if self.is_zero():
            self._negative = False
        assert self._is_canonical()
        return self

    # -- text I/O -----------------------------------------------------------

    def read(self, text: str) -> BigInt:
        """Replace this value with the integer spelled by ``text``.

        The empty string reads as zero.  On ``InvalidFormat`` the value
        is left as it was.

        Branches: PARSE-ZERO, PARSE-INVALID
        """
        if text == "":                                            # PARSE-ZERO
            self._limbs, self._negative = [0], False
            return self
        match = _LITERAL.fullmatch(text)
        if match is None:                                         # PARSE-INVALID
            raise InvalidFormat(text)
        self._limbs = magnitude.from_digits(match.group(2))
        self._negative = match.group(1) == "-"
        return self._settle_sign()

    def print(self, stream: TextIO | None = None) -> None:
        write_bigint(sys.stdout if stream is None else stream, self)

    def __str__(self) -> str:
        return format_bigint(self)

    def __repr__(self) -> str:
        return f"BigInt('{self}')"

    def __int__(self) -> int:
        value = magnitude.to_int(self._limbs)
        return -value if self._negative else value

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -- compound operations ------------------------------------------------

    def _accumulate(self, other: BigInt, subtract: bool) -> BigInt:
        """Add or subtract ``other`` in place.

        Both directions meet in the same two magnitude paths: matching
        effective signs add, opposing ones subtract and flip the sign
        if the subtrahend turned out larger.

        Branches: ADD-SAME-SIGN, SUB-UNDERFLOW
        """
        # a copy keeps x.add(x) from reading limbs it is writing
        limbs = list(other._limbs) if other is self else other._limbs
        same_sign = self._negative == other._negative
        if same_sign != subtract:                                 # ADD-SAME-SIGN
            magnitude.add_into(self._limbs, limbs)
        elif magnitude.subtract_into(self._limbs, limbs):         # SUB-UNDERFLOW
            self._negative = not self._negative
        return self._settle_sign()

    def add(self, other: Operand) -> BigInt:
        return self._accumulate(_coerce_or_raise(other), subtract=False)

    def minus(self, other: Operand) -> BigInt:
        return self._accumulate(_coerce_or_raise(other), subtract=True)

    def multiply(self, other: Operand) -> BigInt:
        other = _coerce_or_raise(other)
        self._limbs = magnitude.multiply(self._limbs, other._limbs)
        self._negative = self._negative != other._negative
        return self._settle_sign()

    def divide(self, other: Operand) -> BigInt:
        """Truncating division in place; raises before touching ``self``."""
        other = _coerce_or_raise(other)
        result = magnitude.divide(self._limbs, other._limbs)
        self._limbs = result.quotient
        self._negative = self._negative != other._negative        # DIV-SIGN
        return self._settle_sign()

    def remainder(self, other: Operand) -> BigInt:
        other = _coerce_or_raise(other)
        result = magnitude.divide(self._limbs, other._limbs)
        self._limbs = result.remainder
        return self._settle_sign()

    def __iadd__(self, other: Operand) -> BigInt:
        return self.add(other)

    def __isub__(self, other: Operand) -> BigInt:
        return self.minus(other)

    def __imul__(self, other: Operand) -> BigInt:
        return self.multiply(other)

    def __itruediv__(self, other: Operand) -> BigInt:
        return self.divide(other)

    def __imod__(self, other: Operand) -> BigInt:
        return self.remainder(other)

    # -- pure operations ----------------------------------------------------

    def __add__(self, other: Operand) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt(self).add(other)

    def __radd__(self, other: int) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.add(self)

    def __sub__(self, other: Operand) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt(self).minus(other)

    def __rsub__(self, other: int) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.minus(self)

    def __mul__(self, other: Operand) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt(self).multiply(other)

    def __rmul__(self, other: int) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.multiply(self)

    def __truediv__(self, other: Operand) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt(self).divide(other)

    def __rtruediv__(self, other: int) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.divide(self)

    def __mod__(self, other: Operand) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt(self).remainder(other)

    def __rmod__(self, other: int) -> BigInt:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.remainder(self)

    def __neg__(self) -> BigInt:
        return BigInt._from_magnitude(list(self._limbs), not self._negative)

    def __pos__(self) -> BigInt:
        return BigInt(self)

    def __abs__(self) -> BigInt:
        return BigInt._from_magnitude(list(self._limbs), False)

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return compare(self, other) == 0

    def __ne__(self, other: object) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return compare(self, other) != 0

    def __lt__(self, other: Operand) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: Operand) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: Operand) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: Operand) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return compare(self, other) >= 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _coerce(value: object) -> BigInt | None:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int):
        return BigInt(value)
    return None


def _coerce_or_raise(value: object) -> BigInt:
    coerced = _coerce(value)
    if coerced is None:
        raise TypeError(
            f"unsupported operand type for BigInt: {type(value).__name__}"
        )
    return coerced


# ---------------------------------------------------------------------------
# Free functions
# ---------------------------------------------------------------------------

def parse(text: str) -> BigInt:
    return BigInt.parse(text)


def format_bigint(value: BigInt) -> str:
    """Decimal text with a '-' only for negative nonzero values."""
    digits = magnitude.to_digits(value._limbs)
    if value._negative and not value.is_zero():
        return "-" + digits
    return digits


def compare(x: BigInt, y: BigInt) -> int:
    """Three-way signed comparison returning -1, 0 or 1.

    Branches: CMP-SIGN, CMP-BOTH-NEGATIVE
    """
    if x._negative != y._negative:                                # CMP-SIGN
        return -1 if x._negative else 1
    result = magnitude.compare_magnitude(x._limbs, y._limbs)
    if x._negative:                                               # CMP-BOTH-NEGATIVE
        return -result
    return result


def add(a: Operand, b: Operand) -> BigInt:
    return BigInt(a).add(b)


def minus(a: Operand, b: Operand) -> BigInt:
    return BigInt(a).minus(b)


subtract = minus


def multiply(a: Operand, b: Operand) -> BigInt:
    return BigInt(a).multiply(b)


def divide(a: Operand, b: Operand) -> BigInt:
    return BigInt(a).divide(b)


def divmod_trunc(a: Operand, b: Operand) -> tuple[BigInt, BigInt]:
    """Truncating quotient and remainder from a single long division."""
    a, b = _coerce_or_raise(a), _coerce_or_raise(b)
    result = magnitude.divide(a._limbs, b._limbs)
    quotient = BigInt._from_magnitude(result.quotient, a._negative != b._negative)
    remainder = BigInt._from_magnitude(result.remainder, a._negative)
    return quotient, remainder


# ---------------------------------------------------------------------------
# Stream adapters
# ---------------------------------------------------------------------------

def read_bigint(stream: TextIO) -> BigInt:
    """Read the next whitespace-delimited integer from a text stream."""
    chars: list[str] = []
    while True:
        ch = stream.read(1)
        if not ch:
            break
        if ch.isspace():
            if chars:
                break
            continue
        chars.append(ch)
    if not chars:
        raise EOFError("no integer left in stream")
    return BigInt.parse("".join(chars))


def write_bigint(stream: TextIO, value: BigInt) -> None:
    stream.write(format_bigint(value))

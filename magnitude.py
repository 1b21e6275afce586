"""Limb arithmetic on non-negative magnitudes.

A magnitude is a little-endian ``list[int]`` of base ``RADIX`` limbs:
``limbs[0]`` is the least-significant group of nine decimal digits.
Canonical magnitudes are never empty and carry no most-significant zero
limbs, except for zero itself which is ``[0]``.

Functions ending in ``_into`` mutate their first argument in place.
Every other function returns a freshly allocated list and leaves its
arguments untouched.

Decision branches are annotated with their branch-IDs (see contract.py
BranchSpec) so white-box tests can trace coverage back to the contract.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from errors import DivisionByZero

LIMB_DIGITS = 9
RADIX = 10 ** LIMB_DIGITS
HALF_RADIX = RADIX // 2


@dataclass
class DivisionResult:
    """Quotient and remainder magnitudes of one division step."""

    quotient: list[int]
    remainder: list[int]


# ---------------------------------------------------------------------------
# Representation
# ---------------------------------------------------------------------------

def normalize(limbs: list[int]) -> list[int]:
    """Drop most-significant zero limbs, keeping at least one limb."""
    while len(limbs) > 1 and limbs[-1] == 0:
        limbs.pop()
    return limbs


def is_zero(limbs: Sequence[int]) -> bool:
    return len(limbs) == 1 and limbs[0] == 0


def is_canonical(limbs: Sequence[int]) -> bool:
    if not limbs:
        return False
    if len(limbs) > 1 and limbs[-1] == 0:
        return False
    return all(0 <= limb < RADIX for limb in limbs)


def from_int(value: int) -> list[int]:
    """Split a non-negative host integer into limbs."""
    assert value >= 0, "magnitude must be non-negative"
    limbs: list[int] = []
    while value > 0:
        value, limb = divmod(value, RADIX)
        limbs.append(limb)
    return limbs or [0]


def to_int(limbs: Sequence[int]) -> int:
    value = 0
    for limb in reversed(limbs):
        value = value * RADIX + limb
    return value


def from_digits(digits: str) -> list[int]:
    """Pack an ASCII digit string into limbs, least-significant group first.

    The most-significant group may be shorter than ``LIMB_DIGITS``.
    """
    limbs = [
        int(digits[max(0, end - LIMB_DIGITS):end])
        for end in range(len(digits), 0, -LIMB_DIGITS)
    ]
    return normalize(limbs or [0])


def to_digits(limbs: Sequence[int]) -> str:
    """Render limbs as decimal text without a sign or leading zeros."""
    head = str(limbs[-1])
    tail = "".join(f"{limb:0{LIMB_DIGITS}d}" for limb in reversed(limbs[:-1]))
    return head + tail


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def compare_magnitude(a: Sequence[int], b: Sequence[int]) -> int:
    """Three-way compare of two canonical magnitudes.

    Branches: CMP-LENGTH, CMP-LIMB
    """
    if len(a) != len(b):                                          # CMP-LENGTH
        return 1 if len(a) > len(b) else -1
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:                                                # CMP-LIMB
            return 1 if x > y else -1
    return 0


# ---------------------------------------------------------------------------
# Addition and subtraction
# ---------------------------------------------------------------------------

def add_into(a: list[int], b: Sequence[int]) -> list[int]:
    """Add ``b`` to ``a`` limb by limb.

    Branches: ADD-CARRY-OUT
    """
    size_a, size_b = len(a), len(b)
    carry = 0
    for i in range(max(size_a, size_b)):
        total = (a[i] if i < size_a else 0) + (b[i] if i < size_b else 0) + carry
        carry, limb = divmod(total, RADIX)
        if i < size_a:
            a[i] = limb
        else:
            a.append(limb)
    if carry:                                                     # ADD-CARRY-OUT
        a.append(carry)
    return a


def subtract_into(a: list[int], b: Sequence[int], shift_b: bool = False) -> bool:
    """Replace ``a`` with ``|a - b|`` and report whether ``b`` was larger.

    With ``shift_b`` the subtrahend is ``b * RADIX``; the shift is applied
    while indexing, never materialized.  When the final borrow is set the
    wrapped limbs are turned into ``b - a`` by taking the nines'
    complement of every limb and adding one.  The caller owns the sign.

    Branches: SUB-NO-BORROW, SUB-UNDERFLOW, SUB-SHIFTED
    """
    offset = 1 if shift_b else 0                                  # SUB-SHIFTED
    size_a, size_b = len(a), len(b) + offset
    borrow = 0
    for i in range(max(size_a, size_b)):
        x = a[i] if i < size_a else 0
        y = b[i - offset] if offset <= i < size_b else 0
        diff = x - y - borrow
        if diff < 0:
            diff += RADIX
            borrow = 1
        else:
            borrow = 0
        if i < size_a:
            a[i] = diff
        else:
            a.append(diff)

    if borrow:                                                    # SUB-UNDERFLOW
        for i, limb in enumerate(a):
            a[i] = RADIX - 1 - limb
        for i, limb in enumerate(a):
            if limb < RADIX - 1:
                a[i] = limb + 1
                break
            a[i] = 0

    normalize(a)                                                  # SUB-NO-BORROW
    return bool(borrow)


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def multiply(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Schoolbook product of two magnitudes.

    Branches: MUL-ZERO, MUL-CARRY
    """
    if is_zero(a) or is_zero(b):                                  # MUL-ZERO
        return [0]

    size_b = len(b)
    result = [0] * (len(a) + size_b + 1)
    for i, x in enumerate(a):
        carry = 0
        for j, y in enumerate(b):
            acc = result[i + j] + carry + x * y
            carry, result[i + j] = divmod(acc, RADIX)
        result[i + size_b] = carry                                # MUL-CARRY
    return normalize(result)


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

def divide(dividend: Sequence[int], divisor: Sequence[int]) -> DivisionResult:
    """Long division of two magnitudes.

    The divisor is scaled so its top limb is at least ``HALF_RADIX``,
    which keeps every trial quotient digit within two of the true digit.
    The dividend is scaled by the same factor, so the quotient is
    unchanged and only the remainder has to be scaled back.

    Branches: DIV-ZERO-DIVISOR, DIV-ZERO-DIVIDEND, DIV-SMALLER,
              DIV-NORMALIZE
    """
    if is_zero(divisor):                                          # DIV-ZERO-DIVISOR
        raise DivisionByZero()
    if is_zero(dividend):                                         # DIV-ZERO-DIVIDEND
        return DivisionResult(quotient=[0], remainder=[0])
    if compare_magnitude(dividend, divisor) < 0:                  # DIV-SMALLER
        return DivisionResult(quotient=[0], remainder=list(dividend))

    scale = 1
    if divisor[-1] < HALF_RADIX:                                  # DIV-NORMALIZE
        scale = RADIX // (divisor[-1] + 1)
        dividend = multiply(dividend, [scale])
        divisor = multiply(divisor, [scale])
    assert divisor[-1] >= HALF_RADIX, "divisor not normalized"

    result = _divide_normalized(list(dividend), list(divisor))
    if scale != 1:
        unscaled = _divide_by_limb(result.remainder, scale)
        assert is_zero(unscaled.remainder), "scaled remainder not exact"
        result.remainder = unscaled.quotient
    return result


def _divide_normalized(dividend: list[int], divisor: list[int]) -> DivisionResult:
    """Divide by a normalized divisor, peeling off one quotient limb at a time.

    ``dividend`` is consumed as the working remainder.

    Branches: DIV-SPLIT
    """
    if compare_magnitude(dividend, divisor) < 0:
        return DivisionResult(quotient=[0], remainder=dividend)
    if len(dividend) <= len(divisor) + 1:
        return _divide_step(dividend, divisor)

    # DIV-SPLIT: divide the top len(divisor) + 1 limbs, write the step's
    # remainder back over them and move down one limb.  Only the first
    # step can yield a two-limb quotient; later tops are < divisor * RADIX.
    size = len(divisor)
    quotient = [0] * (len(dividend) - size + 1)
    for shift in range(len(dividend) - size - 1, -1, -1):
        step = _divide_step(normalize(dividend[shift:]), divisor)
        for i, limb in enumerate(step.quotient):
            quotient[shift + i] += limb
        del dividend[shift:]
        dividend.extend(step.remainder)
        assert len(dividend) <= shift + size, "step remainder too long"
    return DivisionResult(
        quotient=normalize(quotient),
        remainder=normalize(dividend),
    )


def _divide_step(numerator: list[int], denominator: list[int]) -> DivisionResult:
    """Divide when the numerator has at most one limb more than the denominator.

    Branches: DIV-SINGLE-LIMB, DIV-EQUAL-LENGTH, DIV-SHIFTED-SUBTRACT,
              DIV-TRIAL-CORRECTION
    """
    assert len(numerator) <= len(denominator) + 1
    if compare_magnitude(numerator, denominator) < 0:
        return DivisionResult(quotient=[0], remainder=list(numerator))

    if len(denominator) == 1:                                     # DIV-SINGLE-LIMB
        return _divide_by_limb(numerator, denominator[0])

    if len(numerator) == len(denominator):                        # DIV-EQUAL-LENGTH
        # numerator < RADIX ** n <= 2 * denominator, so the quotient is 1
        remainder = list(numerator)
        subtract_into(remainder, denominator)
        return DivisionResult(quotient=[1], remainder=remainder)

    if compare_magnitude(numerator[1:], denominator) >= 0:        # DIV-SHIFTED-SUBTRACT
        # numerator >= denominator * RADIX: take that chunk off first so
        # the trial digit below fits in one limb.
        reduced = list(numerator)
        underflow = subtract_into(reduced, denominator, shift_b=True)
        assert not underflow
        result = _divide_step(reduced, denominator)
        add_into(result.quotient, [0, 1])
        return result

    top = numerator[-1] * RADIX + numerator[-2]
    q_hat = min(top // denominator[-1], RADIX - 1)
    trial = multiply(denominator, [q_hat])
    while compare_magnitude(trial, numerator) > 0:                # DIV-TRIAL-CORRECTION
        q_hat -= 1
        subtract_into(trial, denominator)
    remainder = list(numerator)
    subtract_into(remainder, trial)
    return DivisionResult(quotient=[q_hat], remainder=remainder)


def _divide_by_limb(limbs: Sequence[int], divisor: int) -> DivisionResult:
    """Short division by a single limb, most-significant limb first."""
    assert 0 < divisor < RADIX
    quotient = [0] * len(limbs)
    carry = 0
    for i in range(len(limbs) - 1, -1, -1):
        current = carry * RADIX + limbs[i]
        quotient[i], carry = divmod(current, divisor)
    return DivisionResult(quotient=normalize(quotient), remainder=[carry])

"""Formal contract for the big-integer engine.

Each operation is specified as a collection of:
- postconditions: what the output must satisfy, checked against the
  host ``int`` as an oracle
- error conditions: what inputs must cause specific exceptions
- algebraic properties: mathematical relationships that must hold

The contract is machine-readable.  Validation tools iterate over it to
drive conformance tests and search for counterexamples.

Layers
------
OperationSpec    per-operation contract (post/error/properties)
BranchSpec       every decision point that white-box tests must cover
BigIntContract   the full contract for the engine
build_contract() constructs the contract
boundary_values() operands that sit on or next to limb boundaries
"""
from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from typing import Callable

import magnitude
from bigint import BigInt, divmod_trunc
from errors import DivisionByZero, InvalidFormat
from magnitude import HALF_RADIX, RADIX


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free BigInt operands the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    apply: Callable[[BigInt, BigInt], object]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the engine that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class BigIntContract:
    """Complete contract for the engine."""

    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]
    parse_error: ErrorCondition
    invalid_literals: tuple[str, ...]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    def branch_ids(self) -> set[str]:
        return {b.id for b in self.branches}


# ---------------------------------------------------------------------------
# Helpers used inside the contract predicates
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity; the engine truncates
    toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    return a - b * truncdiv(a, b)


def is_canonical(value: BigInt) -> bool:
    """Limbs in range, no leading zero limbs, no negative zero."""
    limbs = value.limbs
    if not magnitude.is_canonical(limbs):
        return False
    return not (value.negative and magnitude.is_zero(limbs))


def boundary_values() -> list[int]:
    """Operands on and around limb boundaries, both signs."""
    magnitudes = [
        0, 1, 2, 3, 7,
        HALF_RADIX - 1, HALF_RADIX, HALF_RADIX + 1,
        RADIX - 1, RADIX, RADIX + 1,
        2 * RADIX - 1,
        RADIX ** 2 - 1, RADIX ** 2, RADIX ** 2 + 1,
        HALF_RADIX * RADIX, HALF_RADIX * RADIX + RADIX - 1,
        10 ** 20,
        999_999_999_999_999_999,
        RADIX ** 3 - 1, RADIX ** 3 + 1,
        123_456_789_012_345_678_901_234_567_890,
    ]
    values: list[int] = []
    for m in magnitudes:
        values.append(m)
        if m:
            values.append(-m)
    return values


_DECIMAL = re.compile(r"-?[0-9]+")

_INVALID_LITERALS = (
    "-", "+1", "--1", "1-", " 1", "1 ", "1_000", "12a", "0x10",
    "1.5", "1e9", "١٢",
)


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract() -> BigIntContract:
    """Construct the full engine contract."""

    def _binary_post(name: str, oracle: Callable[[int, int], int]) -> list[Postcondition]:
        return [
            Postcondition(
                "result_canonical",
                "Result satisfies the representation invariants",
                lambda a, b, result: is_canonical(result),
            ),
            Postcondition(
                "result_correct",
                f"Result equals the exact {name}",
                lambda a, b, result: int(result) == oracle(int(a), int(b)),
            ),
        ]

    _div_by_zero = ErrorCondition(
        "div_by_zero_error",
        "DivisionByZero when the divisor is zero",
        lambda a, b: b.is_zero(),
        DivisionByZero,
    )

    # ------------------------------------------------------------------ add
    add_spec = OperationSpec(
        name="add",
        apply=operator.add,
        postconditions=_binary_post("sum", operator.add),
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a + b == b + a", 2,
                lambda a, b: a + b == b + a,
            ),
            AlgebraicProperty(
                "identity", "a + 0 == a", 1,
                lambda a: a + BigInt(0) == a,
            ),
            AlgebraicProperty(
                "inverse", "a + (-a) is canonical zero", 1,
                lambda a: str(a + (-a)) == "0" and not (a + (-a)).negative,
            ),
            AlgebraicProperty(
                "associativity", "(a + b) + c == a + (b + c)", 3,
                lambda a, b, c: (a + b) + c == a + (b + c),
            ),
        ],
    )

    # ------------------------------------------------------------------ sub
    sub_spec = OperationSpec(
        name="sub",
        apply=operator.sub,
        postconditions=_binary_post("difference", operator.sub),
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "antisymmetry", "a - b == -(b - a)", 2,
                lambda a, b: a - b == -(b - a),
            ),
            AlgebraicProperty(
                "add_inverse", "(a - b) + b == a", 2,
                lambda a, b: (a - b) + b == a,
            ),
            AlgebraicProperty(
                "self_inverse", "a - a == 0", 1,
                lambda a: (a - a).is_zero() and not (a - a).negative,
            ),
        ],
    )

    # ------------------------------------------------------------------ mul
    mul_spec = OperationSpec(
        name="mul",
        apply=operator.mul,
        postconditions=_binary_post("product", operator.mul),
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a * b == b * a", 2,
                lambda a, b: a * b == b * a,
            ),
            AlgebraicProperty(
                "identity", "a * 1 == a", 1,
                lambda a: a * BigInt(1) == a,
            ),
            AlgebraicProperty(
                "zero", "a * 0 == 0", 1,
                lambda a: (a * BigInt(0)).is_zero(),
            ),
            AlgebraicProperty(
                "negation", "(-a) * b == -(a * b)", 2,
                lambda a, b: (-a) * b == -(a * b),
            ),
        ],
    )

    # ------------------------------------------------------------------ div
    div_spec = OperationSpec(
        name="div",
        apply=operator.truediv,
        postconditions=_binary_post("truncating quotient", truncdiv),
        error_conditions=[_div_by_zero],
        properties=[
            AlgebraicProperty(
                "identity", "a / 1 == a", 1,
                lambda a: a / BigInt(1) == a,
            ),
            AlgebraicProperty(
                "self", "a / a == 1 for a != 0", 1,
                lambda a: a.is_zero() or a / a == BigInt(1),
            ),
            AlgebraicProperty(
                "division_law",
                "(a / b) * b + a % b == a and |a % b| < |b| for b != 0", 2,
                lambda a, b: b.is_zero() or (
                    (a / b) * b + a % b == a and abs(a % b) < abs(b)
                ),
            ),
            AlgebraicProperty(
                "divmod_agrees", "divmod_trunc(a, b) == (a / b, a % b)", 2,
                lambda a, b: b.is_zero() or divmod_trunc(a, b) == (a / b, a % b),
            ),
        ],
    )

    # ------------------------------------------------------------------ mod
    mod_spec = OperationSpec(
        name="mod",
        apply=operator.mod,
        postconditions=_binary_post("truncating remainder", truncmod),
        error_conditions=[_div_by_zero],
        properties=[
            AlgebraicProperty(
                "sign_follows_dividend",
                "a % b is zero or has the sign of a", 2,
                lambda a, b: b.is_zero() or (a % b).is_zero()
                or (a % b).negative == a.negative,
            ),
        ],
    )

    # -------------------------------------------------------------- compare
    cmp_spec = OperationSpec(
        name="compare",
        apply=lambda a, b: (a > b) - (a < b),
        postconditions=[
            Postcondition(
                "result_correct",
                "Ordering agrees with host integers",
                lambda a, b, result: result == (
                    (int(a) > int(b)) - (int(a) < int(b))
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "trichotomy", "exactly one of a < b, a == b, a > b", 2,
                lambda a, b: [a < b, a == b, a > b].count(True) == 1,
            ),
            AlgebraicProperty(
                "derived_relations", "<=, >=, != agree with <, >, ==", 2,
                lambda a, b: (
                    (a <= b) == (a < b or a == b)
                    and (a >= b) == (a > b or a == b)
                    and (a != b) == (not a == b)
                ),
            ),
        ],
    )

    # --------------------------------------------------------------- format
    fmt_spec = OperationSpec(
        name="format",
        apply=lambda a, _: str(a),
        postconditions=[
            Postcondition(
                "result_correct",
                "Text equals the host integer's decimal text",
                lambda a, b, result: result == str(int(a)),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip", "parse(str(a)) == a", 1,
                lambda a: BigInt.parse(str(a)) == a,
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Representation
        BranchSpec("PARSE-ZERO", "Empty text reads as zero",
                   "text == ''", "parse"),
        BranchSpec("PARSE-INVALID", "Malformed text rejected",
                   "not fullmatch('-?[0-9]+')", "parse"),
        # Add / subtract
        BranchSpec("ADD-SAME-SIGN", "Magnitudes added",
                   "(x.negative == y.negative) != subtract", "accumulate"),
        BranchSpec("ADD-CARRY-OUT", "Final carry appends a limb",
                   "carry != 0 after the last limb", "add_into"),
        BranchSpec("SUB-NO-BORROW", "Minuend magnitude not smaller",
                   "borrow == 0 after the last limb", "subtract_into"),
        BranchSpec("SUB-UNDERFLOW", "Nines' complement fix-up and sign flip",
                   "borrow == 1 after the last limb", "subtract_into"),
        BranchSpec("SUB-SHIFTED", "Subtrahend shifted up one limb",
                   "shift_b", "subtract_into"),
        # Compare
        BranchSpec("CMP-SIGN", "Signs differ", "x.negative != y.negative",
                   "compare"),
        BranchSpec("CMP-BOTH-NEGATIVE", "Magnitude order inverted",
                   "x.negative and y.negative", "compare"),
        BranchSpec("CMP-LENGTH", "Limb counts differ", "len(a) != len(b)",
                   "compare_magnitude"),
        BranchSpec("CMP-LIMB", "First differing limb decides",
                   "a[i] != b[i]", "compare_magnitude"),
        # Multiply
        BranchSpec("MUL-ZERO", "Zero operand short-circuits",
                   "is_zero(a) or is_zero(b)", "multiply"),
        BranchSpec("MUL-CARRY", "Row carry deposited above the row",
                   "carry != 0 after a row", "multiply"),
        # Divide
        BranchSpec("DIV-ZERO-DIVISOR", "DivisionByZero raised",
                   "is_zero(divisor)", "divide"),
        BranchSpec("DIV-ZERO-DIVIDEND", "Zero dividend short-circuits",
                   "is_zero(dividend)", "divide"),
        BranchSpec("DIV-SMALLER", "Dividend below divisor, quotient 0",
                   "dividend < divisor", "divide"),
        BranchSpec("DIV-NORMALIZE", "Both operands scaled",
                   "divisor[-1] < HALF_RADIX", "divide"),
        BranchSpec("DIV-SPLIT", "Dividend split by limb count",
                   "len(dividend) > len(divisor) + 1", "divide_normalized"),
        BranchSpec("DIV-SINGLE-LIMB", "Short division",
                   "len(divisor) == 1", "divide_step"),
        BranchSpec("DIV-EQUAL-LENGTH", "Quotient is exactly 1",
                   "len(numerator) == len(denominator)", "divide_step"),
        BranchSpec("DIV-SHIFTED-SUBTRACT", "denominator * RADIX pre-subtracted",
                   "numerator >= denominator * RADIX", "divide_step"),
        BranchSpec("DIV-TRIAL-CORRECTION", "Trial digit decremented",
                   "denominator * q_hat > numerator", "divide_step"),
        BranchSpec("DIV-SIGN", "Quotient sign is the XOR of operand signs",
                   "x.negative != y.negative", "divide"),
    ]

    parse_error = ErrorCondition(
        "invalid_format_error",
        "InvalidFormat for non-empty text that is not '-?[0-9]+'",
        lambda text: text != "" and _DECIMAL.fullmatch(text) is None,
        InvalidFormat,
    )

    return BigIntContract(
        operations={
            "add": add_spec,
            "sub": sub_spec,
            "mul": mul_spec,
            "div": div_spec,
            "mod": mod_spec,
            "compare": cmp_spec,
            "format": fmt_spec,
        },
        branches=branches,
        parse_error=parse_error,
        invalid_literals=_INVALID_LITERALS,
    )

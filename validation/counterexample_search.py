"""Counterexample search - discovers gaps in the engine or its tests.

This module runs independently of the test suite.  It systematically
searches the limb-boundary operand corpus for:

1. Postcondition violations: inputs where the engine's result does not
   match the host ``int`` oracle or breaks a representation invariant.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception), including malformed literals.
3. Property violations: algebraic relationships that fail for some
   input combination.
4. Mutated operands: pure operations that changed an input.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import itertools
import sys
from dataclasses import dataclass, field

from bigint import BigInt
from contract import BigIntContract, boundary_values, build_contract


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found - all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    contract: BigIntContract,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every operand pair in the corpus."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in contract.operations.items():
        for x, y in itertools.product(values, repeat=2):
            a, b = BigInt(x), BigInt(y)
            checks += 1
            if any(ec.trigger(a, b) for ec in op_spec.error_conditions):
                continue

            try:
                result = op_spec.apply(a, b)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=(x, y),
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            if int(a) != x or int(b) != y:
                cxs.append(Counterexample(
                    category="mutated_operand",
                    operation=op_name,
                    inputs=(x, y),
                    expected=f"operands ({x}, {y})",
                    actual=f"operands ({int(a)}, {int(b)})",
                    description="Pure operation mutated an operand",
                ))

            for post in op_spec.postconditions:
                if not post.check(a, b, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=(x, y),
                        expected=post.description,
                        actual=f"result={result}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    contract: BigIntContract,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition triggers the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    cases: list[tuple[str, object, tuple, object]] = []
    for op_name, op_spec in contract.operations.items():
        for ec in op_spec.error_conditions:
            for x, y in itertools.product(values, repeat=2):
                a, b = BigInt(x), BigInt(y)
                if ec.trigger(a, b):
                    cases.append((op_name, ec, (x, y),
                                  lambda op=op_spec.apply, a=a, b=b: op(a, b)))

    ec = contract.parse_error
    for text in contract.invalid_literals:
        if ec.trigger(text):
            cases.append(("parse", ec, (text,),
                          lambda text=text: BigInt.parse(text)))

    for op_name, ec, inputs, call in cases:
        checks += 1
        try:
            result = call()
            cxs.append(Counterexample(
                category="missing_error",
                operation=op_name,
                inputs=inputs,
                expected=f"{ec.exception.__name__}",
                actual=f"result={result}",
                description=(
                    f"Error condition '{ec.name}' should have "
                    f"triggered but didn't"
                ),
            ))
        except ec.exception:
            pass  # expected
        except Exception as e:
            cxs.append(Counterexample(
                category="wrong_error",
                operation=op_name,
                inputs=inputs,
                expected=f"{ec.exception.__name__}",
                actual=f"{type(e).__name__}: {e}",
                description=(
                    f"Wrong exception type for '{ec.name}'"
                ),
            ))

    return cxs, checks


def search_property_violations(
    contract: BigIntContract,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over the corpus.

    Ternary properties run over every third value to keep the cube small.
    """
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in contract.all_properties:
        domain = values[::3] if prop.arity == 3 else values
        for combo in itertools.product(domain, repeat=prop.arity):
            checks += 1
            operands = [BigInt(v) for v in combo]
            if not prop.check(*operands):
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=combo,
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(values: list[int] | None = None) -> SearchReport:
    """Run the complete counterexample search over ``values``."""
    if values is None:
        values = boundary_values()
    contract = build_contract()
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(contract, values)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    report = run_search()
    print(report.summary())
    if not report.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()

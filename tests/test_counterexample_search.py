"""Tests for the counterexample search runner."""

from __future__ import annotations

from dataclasses import replace

from bigint import BigInt
from contract import BigIntContract, boundary_values, build_contract
from validation.counterexample_search import (
    Counterexample,
    SearchReport,
    run_search,
    search_error_condition_violations,
    search_postcondition_violations,
)


def _with_operation(contract: BigIntContract, name: str, **changes) -> BigIntContract:
    operations = dict(contract.operations)
    operations[name] = replace(operations[name], **changes)
    return replace(contract, operations=operations)


class TestSearchReport:

    def test_empty_report_passes(self):
        report = SearchReport()
        assert report.passed
        assert "No counterexamples found" in report.summary()

    def test_report_with_counterexample_fails(self):
        report = SearchReport(checks_run=1)
        report.counterexamples.append(Counterexample(
            category="postcondition_violation",
            operation="add",
            inputs=(1, 2),
            expected="3",
            actual="result=4",
            description="Postcondition 'result_correct' violated",
        ))
        assert not report.passed
        summary = report.summary()
        assert "Counterexamples found: 1" in summary
        assert "postcondition_violation / add" in summary


class TestRunSearch:

    def test_small_corpus_passes(self):
        report = run_search([0, 1, -1, 999_999_999, -(10**9), 10**18 + 1])
        assert report.passed, report.summary()
        assert report.checks_run > 0

    def test_full_boundary_corpus_passes(self):
        report = run_search(boundary_values())
        assert report.passed, report.summary()


class TestBrokenOperations:
    """The search must flag a faulty operation, not just pass a good one."""

    def test_wrong_result_found(self):
        broken = _with_operation(build_contract(), "add", apply=lambda a, b: a - b)
        cxs, checks = search_postcondition_violations(broken, [1, 2])
        assert checks > 0
        assert any(
            cx.category == "postcondition_violation" and cx.operation == "add"
            for cx in cxs
        )

    def test_mutated_operand_found(self):
        broken = _with_operation(build_contract(), "add", apply=lambda a, b: a.add(b))
        cxs, _ = search_postcondition_violations(broken, [1, 2])
        assert any(cx.category == "mutated_operand" for cx in cxs)

    def test_missing_error_found(self):
        broken = _with_operation(
            build_contract(), "div", apply=lambda a, b: BigInt(0),
        )
        cxs, _ = search_error_condition_violations(broken, [0, 5])
        assert any(
            cx.category == "missing_error" and cx.operation == "div"
            for cx in cxs
        )

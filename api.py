"""FastAPI endpoints exposing the big-integer engine.

Routes
------
POST   /bigint/divmod      Truncating quotient and remainder
POST   /bigint/compare     Three-way comparison
POST   /bigint/normalize   Canonical decimal text of one operand
POST   /bigint/{op}        add | sub | mul | div | mod
"""

from __future__ import annotations

import operator

from fastapi import APIRouter, HTTPException

from bigint import BigInt, compare, divmod_trunc
from errors import DivisionByZero, InvalidFormat
from models import (
    CompareResult,
    DivModResult,
    NormalizeResult,
    OperandPair,
    OperationKind,
    OperationResult,
    ServiceLimits,
    SingleOperand,
)

router = APIRouter(prefix="/bigint", tags=["bigint"])

# The limits are injected by the app factory (see app.py).
_limits: ServiceLimits | None = None

_OPERATORS = {
    OperationKind.ADD: operator.add,
    OperationKind.SUB: operator.sub,
    OperationKind.MUL: operator.mul,
    OperationKind.DIV: operator.truediv,
    OperationKind.MOD: operator.mod,
}


def set_limits(limits: ServiceLimits) -> None:
    """Inject the operand limits. Called once at app startup."""
    global _limits
    _limits = limits


def get_limits() -> ServiceLimits:
    assert _limits is not None, "Limits not initialized"
    return _limits


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _operand(text: str) -> BigInt:
    limits = get_limits()
    if not limits.allows(text):
        raise HTTPException(
            status_code=413,
            detail=f"Operand exceeds {limits.max_digits} digits",
        )
    try:
        return BigInt.parse(text)
    except InvalidFormat as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _division_by_zero(e: DivisionByZero) -> HTTPException:
    return HTTPException(status_code=400, detail=str(e))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/divmod", response_model=DivModResult)
def divmod_operands(payload: OperandPair) -> DivModResult:
    """Truncating quotient and remainder of a / b."""
    a, b = _operand(payload.a), _operand(payload.b)
    try:
        quotient, remainder = divmod_trunc(a, b)
    except DivisionByZero as e:
        raise _division_by_zero(e) from e
    return DivModResult(quotient=str(quotient), remainder=str(remainder))


@router.post("/compare", response_model=CompareResult)
def compare_operands(payload: OperandPair) -> CompareResult:
    a, b = _operand(payload.a), _operand(payload.b)
    return CompareResult(result=compare(a, b))


@router.post("/normalize", response_model=NormalizeResult)
def normalize_operand(payload: SingleOperand) -> NormalizeResult:
    """Canonical text: no leading zeros, no negative zero."""
    return NormalizeResult(value=str(_operand(payload.value)))


@router.post("/{op}", response_model=OperationResult)
def apply_operation(op: OperationKind, payload: OperandPair) -> OperationResult:
    """Apply a binary operation to two decimal operands."""
    a, b = _operand(payload.a), _operand(payload.b)
    try:
        result = _OPERATORS[op](a, b)
    except DivisionByZero as e:
        raise _division_by_zero(e) from e
    return OperationResult(op=op, a=str(a), b=str(b), result=str(result))

"""Request and response models for the big-integer service.

Operands travel as decimal strings so that values of any magnitude
survive JSON untouched.  Every model validates its text with the same
pattern the engine's parser accepts (minus the empty string).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, field_validator

DECIMAL_PATTERN = r"^-?[0-9]+$"


# ---------------------------------------------------------------------------
# Service limits
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ServiceLimits:
    """Upper bound on the number of digits accepted per operand."""

    max_digits: int

    def __post_init__(self) -> None:
        if self.max_digits < 1:
            raise ValueError(f"max_digits ({self.max_digits}) must be >= 1")

    def allows(self, text: str) -> bool:
        return len(text.lstrip("-")) <= self.max_digits


# Multiplication is schoolbook: squaring a 20 000-digit operand costs
# seconds of CPU per request.
DEFAULT_LIMITS = ServiceLimits(max_digits=20_000)
UNLIMITED = ServiceLimits(max_digits=2**63 - 1)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class OperationKind(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"


class OperandPair(BaseModel):
    """Two decimal operands for a binary operation."""

    a: str = Field(..., pattern=DECIMAL_PATTERN, description="Left operand")
    b: str = Field(..., pattern=DECIMAL_PATTERN, description="Right operand")


class SingleOperand(BaseModel):
    value: str = Field(..., pattern=DECIMAL_PATTERN)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class OperationResult(BaseModel):
    """Canonical operands and result of a binary operation."""

    op: OperationKind
    a: str
    b: str
    result: str


class DivModResult(BaseModel):
    quotient: str
    remainder: str


class CompareResult(BaseModel):
    result: int

    @field_validator("result")
    @classmethod
    def sign_only(cls, v: int) -> int:
        if v not in (-1, 0, 1):
            raise ValueError(f"compare result must be -1, 0 or 1, got {v}")
        return v


class NormalizeResult(BaseModel):
    value: str

"""Exceptions raised by the big-integer engine."""

from __future__ import annotations


class BigIntError(Exception):
    """Base class for every error the engine reports to callers."""


class InvalidFormat(BigIntError, ValueError):
    """Raised when text is not an optional '-' followed by decimal digits."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid integer literal: {text!r}")


class DivisionByZero(BigIntError, ZeroDivisionError):
    """Raised when the divisor of a division or remainder is zero."""

    def __init__(self) -> None:
        super().__init__("division by zero")

"""Errors raised by the sizing engine and the plan store."""

from typing import Optional


class InvalidInputError(ValueError):
    """A precondition on caller-supplied input is violated."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DegenerateComputationError(ArithmeticError):
    """Inputs passed validation but the sizing formula is undefined for them."""

"""Error types raised by chain construction and evaluation."""

from __future__ import annotations

from typing import Any


class ChainError(Exception):
    """Base class for every error raised by the chained package."""


class ChainConsumedError(ChainError):
    """Error raised when a consumed chain is used again.

    A chain is consumed once it has been evaluated or handed over to a
    composition call. The attempted operation is kept for debugging.
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        self.operation = operation
        super().__init__(message or f"Cannot {operation}: chain was already consumed")


class ChainTypeError(ChainError, TypeError):
    """Error raised when a transform cannot be appended to a chain.

    Raised at construction time, never during evaluation.
    """

    def __init__(self, message: str, expected: Any = None, actual: Any = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class ChainSyntaxError(ChainError, ValueError):
    """Error raised when shorthand tokens do not form a valid chain."""


class CastError(ChainError):
    """Error raised by a cast step when the value fails validation.

    This error preserves the raw value for debugging purposes.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"CastError({super().__repr__()}, raw_value={self.raw_value!r})"

"""
Graph- and operand-related exceptions for tapegrad.

This module defines the error taxonomy raised by the differentiation core.
The graph and tape layer has no recoverable error states of its own; errors
surface at the boundary where operands enter an operation (shape and operand
type validation) and when configuring the package.

Every exception derives from `TapegradError` and, where it makes sense, from
the built-in exception a caller would naturally catch (`ValueError`,
`TypeError`), so generic handlers keep working.
"""

from __future__ import annotations

from typing import Any, Sequence


class TapegradError(Exception):
    """Base class for all tapegrad errors."""


class ShapeMismatchError(TapegradError, ValueError):
    """
    Raised when operand shapes are incompatible for the requested operation.

    Shape validation happens before any node is recorded, so a rejected
    operation leaves every existing tape untouched.

    Attributes
    ----------
    op : str
        The name of the operation that was attempted (e.g., "add", "matmul").
    shapes : tuple[tuple[int, ...], ...]
        The offending operand shapes, in operand order.
    """

    def __init__(
        self, op: str, *shapes: Sequence[int], detail: str | None = None
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        op : str
            The operation name.
        *shapes : Sequence[int]
            The operand shapes involved in the failed operation.
        detail : str | None, optional
            Extra explanation appended to the message.
        """
        self.op = op
        self.shapes = tuple(tuple(s) for s in shapes)
        rendered = " vs ".join(str(s) for s in self.shapes)
        message = f"Shape mismatch in {op}: {rendered}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnsupportedOperandError(TapegradError, TypeError):
    """
    Raised when an operand cannot participate in a tensor operation.

    Operands must be tensor values (`Variable` / `Constant`), real scalars, or
    array-like numeric data.

    Attributes
    ----------
    op : str
        The operation that received the operand.
    operand : Any
        The rejected operand.
    """

    def __init__(self, op: str, operand: Any) -> None:
        super().__init__(
            f"Unsupported operand type for {op}: {type(operand).__name__!r}"
        )
        self.op = op
        self.operand = operand


class ConfigurationError(TapegradError, ValueError):
    """Raised when a setting is unknown or holds an invalid value."""

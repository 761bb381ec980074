"""Exceptions raised by the expression evaluator.

Every error carries a human-readable message whose leading phrase identifies
its kind ("Division by zero", "Unknown function 'x'. ...", ...). The classes
also derive from the matching built-in so callers can catch ValueError or
ZeroDivisionError without knowing about treecalc.
"""

from __future__ import annotations


class CalculatorError(Exception):
    """Base class for all evaluator errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParseError(CalculatorError, ValueError):
    """Malformed input: bad token sequence, unbalanced parentheses, etc."""


class InvalidNumberError(ParseError):
    """A digit/dot run that is not a valid double."""

    def __init__(self, text: str = "") -> None:
        super().__init__("Invalid number")
        self.text = text


class UnknownFunctionError(ParseError):
    """An identifier that is not a constant, memory slot or known function."""

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        super().__init__(
            f"Unknown function '{name}'. Available functions: {', '.join(available)}"
        )
        self.name = name


class DomainError(CalculatorError, ValueError):
    """Function argument outside the function's domain."""


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Right operand of '/' or '%' is exactly zero."""


class MemoryIndexError(CalculatorError, IndexError):
    """Memory slot index outside 0..9."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Memory slot must be between 0 and 9, got {index}")
        self.index = index

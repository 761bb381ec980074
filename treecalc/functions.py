"""Named functions, constants and binary arithmetic for the evaluator.

All arithmetic is IEEE-754 binary64. Values are pushed through NumPy float64
with floating-point warnings silenced, so overflow yields inf and invalid
operations yield NaN instead of Python's OverflowError/ValueError. Results
are handed back as plain Python floats.

The only checks performed are the explicit ones: zero divisors and the
function domain checks listed in FUNCTIONS.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from treecalc.errors import DivisionByZeroError, DomainError


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
    "phi": (1.0 + math.sqrt(5.0)) / 2.0,  # golden ratio
    "tau": 2.0 * math.pi,
    "sqrt2": math.sqrt(2.0),
    "sqrt3": math.sqrt(3.0),
}


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------

def _round_half_away(x: np.float64) -> np.float64:
    """Round to nearest integer, ties away from zero (np.round ties to even)."""
    a = np.abs(x)
    r = np.floor(a)
    if a - r >= 0.5:
        r += 1.0
    return np.copysign(r, x)


def _unit_interval(name: str) -> Callable[[float], Optional[str]]:
    def check(x: float) -> Optional[str]:
        if x < -1.0 or x > 1.0:
            return f"{name} requires argument between -1 and 1"
        return None
    return check


def _positive(name: str) -> Callable[[float], Optional[str]]:
    def check(x: float) -> Optional[str]:
        if x <= 0.0:
            return f"{name} requires positive argument"
        return None
    return check


def _non_negative(name: str) -> Callable[[float], Optional[str]]:
    def check(x: float) -> Optional[str]:
        if x < 0.0:
            return f"{name} requires non-negative argument"
        return None
    return check


@dataclass(frozen=True)
class Function:
    """A one-argument function with an optional domain check.

    ``domain`` returns an error message for arguments it rejects. NaN passes
    every check (all comparisons are false) and propagates.
    """

    name: str
    impl: Callable[[np.float64], np.float64]
    domain: Optional[Callable[[float], Optional[str]]] = None

    def __call__(self, x: float) -> float:
        if self.domain is not None:
            message = self.domain(x)
            if message:
                raise DomainError(message)
        with np.errstate(all="ignore"):
            return float(self.impl(np.float64(x)))


FUNCTIONS: dict[str, Function] = {
    f.name: f
    for f in (
        Function("sin", np.sin),
        Function("cos", np.cos),
        Function("tan", np.tan),
        Function("asin", np.arcsin, _unit_interval("asin")),
        Function("acos", np.arccos, _unit_interval("acos")),
        Function("atan", np.arctan),
        Function("ln", np.log, _positive("ln")),
        Function("log2", np.log2, _positive("log2")),
        Function("log10", np.log10, _positive("log10")),
        Function("exp", np.exp),
        Function("sqrt", np.sqrt, _non_negative("sqrt")),
        Function("round", _round_half_away),
        Function("floor", np.floor),
        Function("ceil", np.ceil),
        Function("abs", np.abs),
    )
}

FUNCTION_NAMES: tuple[str, ...] = tuple(FUNCTIONS)


# ---------------------------------------------------------------------------
# Binary operators
# ---------------------------------------------------------------------------

def _divide(a: np.float64, b: np.float64) -> np.float64:
    if b == 0.0:
        raise DivisionByZeroError("Division by zero")
    return a / b


def _modulo(a: np.float64, b: np.float64) -> np.float64:
    # Truncated remainder: the result takes the dividend's sign
    if b == 0.0:
        raise DivisionByZeroError("Modulo by zero")
    return np.fmod(a, b)


BINARY_OPS: dict[str, Callable[[np.float64, np.float64], np.float64]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": _divide,
    "%": _modulo,
    "**": np.power,
}


def apply_binary(op: str, left: float, right: float) -> float:
    """Apply a binary operator with IEEE-754 semantics."""
    with np.errstate(all="ignore"):
        return float(BINARY_OPS[op](np.float64(left), np.float64(right)))

"""Calculator state and the recursive-descent evaluator.

Grammar, lowest precedence first. Parsing and evaluation happen in the same
pass; no syntax tree is built.

    expression     := addition
    addition       := multiplication (('+'|'-') multiplication)*
    multiplication := unary (('*'|'/'|'%') unary)*
    unary          := ('+'|'-') unary | power
    power          := factor ('**' unary)?
    factor         := NUMBER | '(' addition ')' | FUNCTION '(' addition ')'
                    | MEMORY | CONSTANT | '_'

Unary minus binds looser than '**', so -2**2 is -(2**2) = -4. The exponent
is itself a unary expression, which makes '**' right-associative
(2**3**2 = 512) and allows 2**-1.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from treecalc.errors import MemoryIndexError, ParseError, UnknownFunctionError
from treecalc.functions import CONSTANTS, FUNCTION_NAMES, FUNCTIONS, apply_binary
from treecalc.models import Command, CommandKind, Token, TokenKind
from treecalc.tokenizer import tokenize

MEMORY_SLOTS = 10

EXIT_WORDS = ("q", "quit", "exit")
HELP_WORDS = ("?", "help")
CLEAR_WORD = "clear"

_STORE_RE = re.compile(r"m([0-9])")
_CLEAR_SLOT_RE = re.compile(r"c([0-9])")


def format_result(value: float) -> str:
    """Render a result the way the REPL prints it.

    Whole numbers drop the fractional part (14, not 14.0); everything else
    uses the shortest round-tripping digits, always in positional notation
    (0.0000001, not 1e-07).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0.0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


class _Parser:
    """Evaluates one token list against a calculator's memory and `_`."""

    def __init__(self, tokens: list[Token], calc: Calculator) -> None:
        self.tokens = tokens
        self.pos = 0
        self.calc = calc

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.kind != TokenKind.EOF:
            self.pos += 1
        return tok

    def expect_rparen(self) -> None:
        if self.current.kind != TokenKind.RPAREN:
            raise ParseError("Expected closing parenthesis")
        self.advance()

    def parse(self) -> float:
        result = self.addition()
        if self.current.kind != TokenKind.EOF:
            raise ParseError("Unexpected tokens at end of expression")
        return result

    def addition(self) -> float:
        left = self.multiplication()
        while self.current.is_operator("+") or self.current.is_operator("-"):
            op = self.advance().value
            right = self.multiplication()
            left = apply_binary(op, left, right)
        return left

    def multiplication(self) -> float:
        left = self.unary()
        while any(self.current.is_operator(op) for op in "*/%"):
            op = self.advance().value
            right = self.unary()
            left = apply_binary(op, left, right)
        return left

    def unary(self) -> float:
        # Prefix signs are counted, not recursed into
        negate = False
        while self.current.is_operator("-") or self.current.is_operator("+"):
            if self.advance().value == "-":
                negate = not negate
        value = self.power()
        return -value if negate else value

    def power(self) -> float:
        base = self.factor()
        if self.current.kind == TokenKind.POWER:
            self.advance()
            exponent = self.unary()
            return apply_binary("**", base, exponent)
        return base

    def factor(self) -> float:
        tok = self.current

        if tok.kind == TokenKind.EOF:
            raise ParseError("Unexpected end of expression")

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return tok.value

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            result = self.addition()
            self.expect_rparen()
            return result

        if tok.kind == TokenKind.FUNCTION:
            return self.call(tok.value)

        if tok.kind == TokenKind.MEMORY:
            self.advance()
            return self.calc.recall(tok.value)

        if tok.kind == TokenKind.CONSTANT:
            self.advance()
            return CONSTANTS[tok.value]

        if tok.kind == TokenKind.LAST_RESULT:
            self.advance()
            return self.calc.last_result

        raise ParseError(
            "Expected number, function, constant, memory location, _, "
            "or opening parenthesis"
        )

    def call(self, name: str) -> float:
        self.advance()
        func = FUNCTIONS.get(name)
        if func is None:
            raise UnknownFunctionError(name, FUNCTION_NAMES)
        if self.current.kind != TokenKind.LPAREN:
            raise ParseError(f"Function '{name}' requires parentheses: {name}(...)")
        self.advance()
        arg = self.addition()
        self.expect_rparen()
        return func(arg)


class Calculator:
    """Evaluator session state: ten memory slots and the last result.

    Example:
        >>> calc = Calculator()
        >>> calc.evaluate("2 + 3 * 4")
        14.0
        >>> calc.evaluate("_ / 2")
        7.0
    """

    def __init__(self) -> None:
        self.memory: list[float] = [0.0] * MEMORY_SLOTS
        self.last_result: float = 0.0

    # -- Evaluation ---------------------------------------------------------

    def evaluate(self, text: str) -> float:
        """Evaluate one expression and remember it as the last result.

        Raises:
            CalculatorError: on any tokenize, parse or arithmetic error. The
                last result is left unchanged.
        """
        try:
            result = _Parser(tokenize(text), self).parse()
        except RecursionError:
            raise ParseError("Expression nested too deeply") from None
        self.last_result = result
        return result

    # -- Memory -------------------------------------------------------------

    @staticmethod
    def _check_slot(index: int) -> int:
        if not 0 <= index < MEMORY_SLOTS:
            raise MemoryIndexError(index)
        return index

    def recall(self, index: int) -> float:
        return self.memory[self._check_slot(index)]

    def memory_store(self, index: int) -> float:
        """Copy the last result into slot `index` and return it."""
        self.memory[self._check_slot(index)] = self.last_result
        return self.last_result

    def memory_clear(self, index: int) -> None:
        self.memory[self._check_slot(index)] = 0.0

    def clear_result(self) -> None:
        self.last_result = 0.0

    # -- Line commands ------------------------------------------------------

    @staticmethod
    def classify_line(line: str) -> Command:
        """Decide what a whole input line means.

        Only a line consisting of exactly `m0`..`m9` stores into memory; the
        same name inside an expression recalls the slot instead.
        """
        text = line.strip()
        if not text:
            return Command(CommandKind.EMPTY)
        if text in EXIT_WORDS:
            return Command(CommandKind.EXIT)
        if text in HELP_WORDS:
            return Command(CommandKind.HELP)
        if text == CLEAR_WORD:
            return Command(CommandKind.CLEAR_RESULT)
        m = _STORE_RE.fullmatch(text)
        if m:
            return Command(CommandKind.STORE, slot=int(m.group(1)))
        m = _CLEAR_SLOT_RE.fullmatch(text)
        if m:
            return Command(CommandKind.CLEAR_MEMORY, slot=int(m.group(1)))
        return Command(CommandKind.EVALUATE, text=text)

    def execute(self, command: Command) -> str:
        """Carry out a non-help, non-empty command; return the line to print.

        Raises:
            CalculatorError: when an EVALUATE command fails.
        """
        kind = command.kind
        if kind == CommandKind.EXIT:
            return "Goodbye!"
        if kind == CommandKind.CLEAR_RESULT:
            self.clear_result()
            return "Cleared last result"
        if kind == CommandKind.STORE:
            value = self.memory_store(command.slot)
            return f"Saved {format_result(value)} to m{command.slot}"
        if kind == CommandKind.CLEAR_MEMORY:
            self.memory_clear(command.slot)
            return f"Cleared m{command.slot}"
        if kind == CommandKind.EVALUATE:
            return format_result(self.evaluate(command.text))
        raise ValueError(f"Command {kind.value!r} has no direct result")

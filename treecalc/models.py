"""Data models for treecalc.

TokenKind, Token, CommandKind, Command, RootInfo: the typed structures that
flow through tokenizer → calculator → REPL, plus the tree's root snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class TokenKind(str, Enum):
    """Lexical classes produced by the tokenizer."""

    NUMBER = "number"
    OPERATOR = "operator"
    POWER = "power"
    LPAREN = "lparen"
    RPAREN = "rparen"
    FUNCTION = "function"
    MEMORY = "memory"
    CONSTANT = "constant"
    LAST_RESULT = "last_result"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A single token.

    ``value`` depends on the kind: the float for NUMBER, the operator
    character for OPERATOR, the name for FUNCTION/CONSTANT, the slot index
    for MEMORY, and None otherwise.
    """

    kind: TokenKind
    value: Union[float, int, str, None] = None

    def is_operator(self, op: str) -> bool:
        return self.kind == TokenKind.OPERATOR and self.value == op


EOF_TOKEN = Token(TokenKind.EOF)


class CommandKind(str, Enum):
    """Whole-line commands recognized by the REPL."""

    EXIT = "exit"
    HELP = "help"
    CLEAR_RESULT = "clear"
    STORE = "store"
    CLEAR_MEMORY = "clear_memory"
    EMPTY = "empty"
    EVALUATE = "evaluate"


@dataclass(frozen=True)
class Command:
    """A classified input line.

    ``slot`` is set for STORE and CLEAR_MEMORY, ``text`` for EVALUATE.
    """

    kind: CommandKind
    slot: Optional[int] = None
    text: str = ""


@dataclass
class RootInfo:
    """Snapshot of an AVL tree's root node."""

    value: Any
    height: int
    balance: int
    left: Any = None
    right: Any = None

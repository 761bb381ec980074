"""Single-pass tokenizer for calculator input.

One forward scan with one character of lookahead. Identifiers are classified
here (constant, memory slot, or function name); whether a function name is
actually known is the parser's business.
"""

from __future__ import annotations

import re

from treecalc.errors import InvalidNumberError
from treecalc.functions import CONSTANTS
from treecalc.models import EOF_TOKEN, Token, TokenKind

_WHITESPACE = " \t\r\n\f\v"
_DIGITS = "0123456789"
_OPERATORS = "+-/%"
_SINGLE_CHAR = {
    "(": Token(TokenKind.LPAREN),
    ")": Token(TokenKind.RPAREN),
    "_": Token(TokenKind.LAST_RESULT),
    "^": Token(TokenKind.POWER),
}

_MEMORY_RE = re.compile(r"m([0-9])")


def _is_ascii_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def classify_identifier(word: str) -> Token:
    """Turn an identifier into a CONSTANT, MEMORY or FUNCTION token."""
    if word in CONSTANTS:
        return Token(TokenKind.CONSTANT, word)
    m = _MEMORY_RE.fullmatch(word)
    if m:
        return Token(TokenKind.MEMORY, int(m.group(1)))
    return Token(TokenKind.FUNCTION, word)


def tokenize(text: str) -> list[Token]:
    """Split one line into tokens, ending with an EOF sentinel.

    Characters that start no token are skipped silently.

    Raises:
        InvalidNumberError: a digit/dot run is not a valid number ("1.2.3").
    """
    tokens: list[Token] = []
    i, n = 0, len(text)

    while i < n:
        ch = text[i]

        if ch in _WHITESPACE:
            i += 1
            continue

        if ch in _DIGITS or ch == ".":
            j = i
            while j < n and (text[j] in _DIGITS or text[j] == "."):
                j += 1
            literal = text[i:j]
            try:
                value = float(literal)
            except ValueError:
                raise InvalidNumberError(literal) from None
            tokens.append(Token(TokenKind.NUMBER, value))
            i = j
            continue

        if ch in _OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, ch))
            i += 1
            continue

        if ch == "*":
            if i + 1 < n and text[i + 1] == "*":
                tokens.append(Token(TokenKind.POWER))
                i += 2
            else:
                tokens.append(Token(TokenKind.OPERATOR, "*"))
                i += 1
            continue

        if ch in _SINGLE_CHAR:
            tokens.append(_SINGLE_CHAR[ch])
            i += 1
            continue

        if _is_ascii_alpha(ch):
            j = i + 1
            while j < n and _is_ascii_alnum(text[j]):
                j += 1
            tokens.append(classify_identifier(text[i:j]))
            i = j
            continue

        # Unknown character
        i += 1

    tokens.append(EOF_TOKEN)
    return tokens

"""Tokenizer for the shell's command language."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable


class TokenType(IntEnum):
    """Kinds of token produced by the lexer."""

    HEREDOC = 0
    APPEND = 1
    WORD = 2
    PIP = 3
    AND = 4
    OR = 5
    LPAR = 6
    RPAR = 7
    OUT = 8
    IN = 9
    END = 10


@dataclass(frozen=True)
class Token:
    """A single lexical token: its kind and the text it was made from."""

    type: TokenType
    value: str


_BLANK_CHARS = " \t\n\v\f\r"
_BLANK = re.compile("[" + re.escape(_BLANK_CHARS) + "]*")

_OPERATORS = {
    "<<": TokenType.HEREDOC,
    ">>": TokenType.APPEND,
    "&&": TokenType.AND,
    "||": TokenType.OR,
    ">": TokenType.OUT,
    "<": TokenType.IN,
    "|": TokenType.PIP,
    "(": TokenType.LPAR,
    ")": TokenType.RPAR,
}

# A word runs until an operator character, a plain space or "&&".
# Quoted sections are taken whole; an unclosed quote runs to the end.
_SCANNER = re.compile(
    r"(?P<op><<|>>|&&|\|\||[<>|()])"
    r"|(?P<word>(?:\"[^\"]*\"?|'[^']*'?|(?!&&)[^|<>() \"'])+)"
)


def tokenize(line: str | None) -> list[Token]:
    """Split a command line into tokens."""
    result: list[Token] = []
    if not line:
        return result
    pos = 0
    while True:
        pos = _BLANK.match(line, pos).end()
        if pos >= len(line):
            break
        match = _SCANNER.match(line, pos)
        if match is None:  # pragma: no cover - every character starts a token
            break
        op = match.group("op")
        if op is not None:
            result.append(Token(_OPERATORS[op], op))
        else:
            result.append(Token(TokenType.WORD, match.group("word")))
        pos = match.end()
    return result


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens one per line as '<type number> -> <value>'."""
    return "".join(f"{int(item.type)} -> {item.value}\n" for item in tokens)


def is_redirect(token_type: TokenType) -> bool:
    """True for <, >, >> and <<."""
    return token_type in (
        TokenType.IN,
        TokenType.OUT,
        TokenType.APPEND,
        TokenType.HEREDOC,
    )


def is_operator(token_type: TokenType) -> bool:
    """True for ||, && and |."""
    return token_type in (TokenType.OR, TokenType.AND, TokenType.PIP)


def is_subshell(token_type: TokenType) -> bool:
    """True for either parenthesis."""
    return token_type in (TokenType.LPAR, TokenType.RPAR)


def is_quoted(char: str) -> bool:
    """True if the character is a single or double quote."""
    return char in ('"', "'") and len(char) == 1


def is_blank(text: str) -> bool:
    """True if the text holds nothing but whitespace."""
    return all(char in _BLANK_CHARS for char in text)
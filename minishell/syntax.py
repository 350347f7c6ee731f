"""Syntax validation of token streams."""

from __future__ import annotations

from typing import Sequence

from minishell.lexer import Token, TokenType, is_operator, is_redirect


class ShellSyntaxError(Exception):
    """Raised when a command line is not well formed."""

    def __init__(self, token: Token | None = None):
        self.token = token
        self.near = token.value if token is not None else "newline"
        super().__init__(
            f"minishell: syntax error near unexpected token `{self.near}'"
        )


def has_unclosed_quote(text: str) -> bool:
    """True if a single or double quote in the text is left open."""
    single_open = False
    double_open = False
    for char in text:
        if char == "'" and not double_open:
            single_open = not single_open
        elif char == '"' and not single_open:
            double_open = not double_open
    return single_open or double_open


def syntax_check(tokens: Sequence[Token]) -> Sequence[Token]:
    """Validate a whole command line and return its tokens.

    A closing parenthesis before any opening one is rejected first.
    """
    for token in tokens:
        if token.type is TokenType.LPAR:
            break
        if token.type is TokenType.RPAR:
            raise ShellSyntaxError(token)
    return validate(tokens)


def validate(tokens: Sequence[Token]) -> Sequence[Token]:
    """Check token order, parentheses and quoting; return the tokens."""
    _validate_range(tokens, 0, len(tokens))
    return tokens


def _next(index: int, end: int) -> int | None:
    return index + 1 if index + 1 < end else None


def _prev(index: int) -> int | None:
    # Looking back is never limited to the current group.
    return index - 1 if index > 0 else None


def _validate_range(tokens: Sequence[Token], start: int, end: int) -> None:
    if start >= end:
        return
    cur: int | None = start
    while cur is not None:
        token = tokens[cur]
        if token.type is TokenType.LPAR:
            cur = _check_subshell(tokens, cur, end)
            continue
        _check_errors(tokens, cur, end)
        if token.type is TokenType.WORD and has_unclosed_quote(token.value):
            raise ShellSyntaxError(None)
        cur = _next(cur, end)
    _check_end(tokens, end)


def _check_end(tokens: Sequence[Token], end: int) -> None:
    last = tokens[end - 1]
    if is_redirect(last.type) or is_operator(last.type):
        raise ShellSyntaxError(last)


def _check_subshell(tokens: Sequence[Token], index: int, end: int) -> int | None:
    """Validate a parenthesised group; return the index just after it."""
    depth = 0
    first: int | None = None
    cur: int | None = index
    while cur is not None:
        kind = tokens[cur].type
        if kind is TokenType.LPAR:
            if depth == 0:
                first = _next(cur, end)
            depth += 1
        elif kind is TokenType.RPAR:
            depth -= 1
            after = _next(cur, end)
            if after is not None and tokens[after].type is TokenType.LPAR:
                raise ShellSyntaxError(tokens[cur])
            if depth == 0:
                if first is not None:
                    _validate_range(tokens, first, cur + 1)
                return after
        cur = _next(cur, end)
    if depth > 0:
        raise ShellSyntaxError(None)
    return None


def _check_errors(tokens: Sequence[Token], index: int, end: int) -> None:
    token = tokens[index]
    nxt = _next(index, end)
    prv = _prev(index)
    next_tok = tokens[nxt] if nxt is not None else None
    prev_tok = tokens[prv] if prv is not None else None

    if is_operator(token.type) and (
        next_tok is None
        or is_operator(next_tok.type)
        or next_tok.type is TokenType.RPAR
    ):
        raise ShellSyntaxError(next_tok if next_tok is not None else token)

    if (
        token.type is TokenType.WORD
        and prev_tok is not None
        and prev_tok.type is TokenType.RPAR
    ):
        raise ShellSyntaxError(token)

    if (
        token.type is TokenType.WORD
        and next_tok is not None
        and next_tok.type is TokenType.LPAR
    ):
        after = _next(nxt, end)
        raise ShellSyntaxError(tokens[after] if after is not None else next_tok)

    if is_redirect(token.type) and (
        next_tok is None or next_tok.type is not TokenType.WORD
    ):
        raise ShellSyntaxError(next_tok)

    _check_placement(tokens, index, end, token, prev_tok, nxt)


def _check_placement(
    tokens: Sequence[Token],
    index: int,
    end: int,
    token: Token,
    prev_tok: Token | None,
    nxt: int | None,
) -> None:
    if is_redirect(token.type) and prev_tok is not None and prev_tok.type is TokenType.RPAR:
        after = _next(nxt, end) if nxt is not None else None
        if after is not None and tokens[after].type is TokenType.WORD:
            raise ShellSyntaxError(tokens[after])
    if (
        prev_tok is not None
        and prev_tok.type is TokenType.LPAR
        and token.type is TokenType.RPAR
    ):
        raise ShellSyntaxError(token)
    if prev_tok is None and (
        is_operator(token.type) or token.type is TokenType.RPAR
    ):
        raise ShellSyntaxError(token)
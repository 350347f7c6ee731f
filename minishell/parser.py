"""Recursive-descent parser building a syntax tree from tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator

from minishell.lexer import Token, TokenType, is_redirect


class NodeType(Enum):
    """Kinds of node in the syntax tree."""

    CMD = 0
    PIP = 1
    AND = 2
    OR = 3
    SUB = 4


class RedirType(Enum):
    """Kinds of redirection."""

    IN = 0
    OUT = 1
    HEREDOC = 2
    APPEND = 3


@dataclass
class Redirect:
    """One redirection attached to a command or a subshell."""

    type: RedirType
    filename: str


@dataclass
class Node:
    """A node of the syntax tree.

    Commands carry their words in ``cmd``; operators use ``left`` and
    ``right``; a subshell keeps its body in ``left``.
    """

    type: NodeType
    cmd: list[str] = field(default_factory=list)
    redirs: list[Redirect] = field(default_factory=list)
    left: Node | None = None
    right: Node | None = None


_REDIR_KIND = {
    TokenType.IN: RedirType.IN,
    TokenType.OUT: RedirType.OUT,
    TokenType.HEREDOC: RedirType.HEREDOC,
}


class _Parser:
    def __init__(self, tokens: Iterable[Token]):
        self._tokens = list(tokens)
        self._pos = 0

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at(self, kind: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type is kind

    def _advance(self) -> Token | None:
        token = self._peek()
        if token is not None:
            self._pos += 1
        return token

    def tree(self) -> Node | None:
        if self._peek() is None:
            return None
        return self._chain(TokenType.OR, NodeType.OR, self._and_list)

    def _and_list(self) -> Node:
        return self._chain(TokenType.AND, NodeType.AND, self._pipeline)

    def _pipeline(self) -> Node:
        return self._chain(TokenType.PIP, NodeType.PIP, self._factor)

    def _chain(
        self,
        kind: TokenType,
        node_type: NodeType,
        operand: Callable[[], Node | None],
    ) -> Node | None:
        left = operand()
        while self._at(kind):
            self._advance()
            right = operand()
            left = Node(node_type, left=left, right=right)
        return left

    def _factor(self) -> Node | None:
        if not self._at(TokenType.LPAR):
            return self._command()
        self._advance()
        body = self.tree()
        if self._at(TokenType.RPAR):
            self._advance()
        node = Node(NodeType.SUB, left=body)
        while (token := self._peek()) is not None and is_redirect(token.type):
            self._advance()
            self._redirect_target(node, token.type)
        return node

    def _command(self) -> Node:
        node = Node(NodeType.CMD, cmd=self._words())
        while (token := self._peek()) is not None and is_redirect(token.type):
            self._advance()
            self._redirect_target(node, token.type)
            node.cmd.extend(self._words())
        return node

    def _redirect_target(self, node: Node, kind: TokenType) -> None:
        target = self._advance()
        if target is not None:
            node.redirs.append(
                Redirect(_REDIR_KIND.get(kind, RedirType.APPEND), target.value)
            )

    def _words(self) -> list[str]:
        words = []
        while self._at(TokenType.WORD):
            words.append(self._advance().value)
        return words


def parse(tokens: Iterable[Token]) -> Node | None:
    """Build a syntax tree from tokens; None when there are none.

    ``||`` binds loosest, then ``&&``, then ``|``; all are left-associative.
    """
    return _Parser(tokens).tree()


_NODE_LABEL = {
    NodeType.PIP: "PIPE",
    NodeType.AND: "AND",
    NodeType.OR: "OR",
    NodeType.SUB: "SUBSHELL",
}

_REDIR_FORMAT = {
    RedirType.IN: "REDIR_IN  < {}",
    RedirType.OUT: "REDIR_OUT > {}",
    RedirType.APPEND: "REDIR_APPEND >> {}",
    RedirType.HEREDOC: "HEREDOC << {}",
}


def _redirect_lines(redirs: list[Redirect], depth: int) -> Iterator[str]:
    indent = "  " * depth
    for redir in redirs:
        yield indent + _REDIR_FORMAT[redir.type].format(redir.filename)


def _ast_lines(node: Node | None, depth: int) -> Iterator[str]:
    if node is None:
        return
    indent = "  " * depth
    if node.type is NodeType.CMD:
        yield indent + "COMMAND:" + "".join(f" {word}" for word in node.cmd)
        yield from _redirect_lines(node.redirs, depth + 1)
    else:
        yield indent + _NODE_LABEL[node.type]
        if node.type is NodeType.SUB:
            yield from _redirect_lines(node.redirs, depth + 1)
    yield from _ast_lines(node.left, depth + 1)
    yield from _ast_lines(node.right, depth + 1)


def format_ast(node: Node | None) -> str:
    """Render a tree as indented text, one node or redirection per line."""
    return "".join(line + "\n" for line in _ast_lines(node, 0))
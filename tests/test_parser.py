from minishell.lexer import tokenize
from minishell.parser import (
    Node,
    NodeType,
    RedirType,
    Redirect,
    format_ast,
    parse,
)


def tree(line):
    return parse(tokenize(line))


def test_empty_input_gives_no_tree():
    assert parse([]) is None


def test_simple_command():
    node = tree("ls -l")
    assert node == Node(NodeType.CMD, cmd=["ls", "-l"])


def test_pipe_is_left_associative():
    node = tree("a | b | c")
    assert node.type is NodeType.PIP
    assert node.right.cmd == ["c"]
    assert node.left.type is NodeType.PIP
    assert node.left.left.cmd == ["a"]
    assert node.left.right.cmd == ["b"]


def test_and_binds_tighter_than_or():
    node = tree("a && b || c")
    assert node.type is NodeType.OR
    assert node.left.type is NodeType.AND
    assert node.right.cmd == ["c"]

    node = tree("a || b && c")
    assert node.type is NodeType.OR
    assert node.left.cmd == ["a"]
    assert node.right.type is NodeType.AND
    assert [node.right.left.cmd, node.right.right.cmd] == [["b"], ["c"]]


def test_pipe_binds_tighter_than_and():
    node = tree("a | b && c")
    assert node.type is NodeType.AND
    assert node.left.type is NodeType.PIP


def test_redirections_keep_order_and_kind():
    node = tree("cat < in > out >> app << eof")
    assert node.cmd == ["cat"]
    assert node.redirs == [
        Redirect(RedirType.IN, "in"),
        Redirect(RedirType.OUT, "out"),
        Redirect(RedirType.APPEND, "app"),
        Redirect(RedirType.HEREDOC, "eof"),
    ]


def test_words_after_redirection_join_the_command():
    node = tree("echo a > f b c")
    assert node.cmd == ["echo", "a", "b", "c"]
    assert node.redirs == [Redirect(RedirType.OUT, "f")]


def test_redirection_only_command():
    node = tree("> out")
    assert node.type is NodeType.CMD
    assert node.cmd == []
    assert node.redirs == [Redirect(RedirType.OUT, "out")]


def test_redirection_without_target_is_dropped():
    node = tree("cat <")
    assert node.cmd == ["cat"]
    assert node.redirs == []


def test_subshell_with_redirection():
    node = tree("(a | b) > out")
    assert node.type is NodeType.SUB
    assert node.right is None
    assert node.left.type is NodeType.PIP
    assert node.redirs == [Redirect(RedirType.OUT, "out")]


def test_subshell_inside_chain():
    node = tree("(a) && b")
    assert node.type is NodeType.AND
    assert node.left.type is NodeType.SUB
    assert node.left.left.cmd == ["a"]
    assert node.right.cmd == ["b"]


def test_format_ast_worked_example():
    text = format_ast(tree("ls | wc > out"))
    assert text == (
        "PIPE\n"
        "  COMMAND: ls\n"
        "  COMMAND: wc\n"
        "    REDIR_OUT > out\n"
    )


def test_format_ast_subshell():
    text = format_ast(tree("(echo hi) >> log"))
    assert text.splitlines() == [
        "SUBSHELL",
        "  REDIR_APPEND >> log",
        "  COMMAND: echo hi",
    ]


def test_format_ast_of_nothing():
    assert format_ast(None) == ""


def test_format_ast_redirect_labels():
    lines = format_ast(tree("x < a << b")).splitlines()
    assert lines[1] == "  REDIR_IN  < a"
    assert lines[2] == "  HEREDOC << b"
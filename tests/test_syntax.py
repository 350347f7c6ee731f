import pytest

from minishell.lexer import tokenize
from minishell.syntax import (
    ShellSyntaxError,
    has_unclosed_quote,
    syntax_check,
    validate,
)


def near(line):
    with pytest.raises(ShellSyntaxError) as info:
        syntax_check(tokenize(line))
    return info.value.near


@pytest.mark.parametrize(
    "line",
    [
        "ls -l | grep x && echo ok || echo no",
        "(ls && pwd) > out",
        "(a | (b && c)) || d",
        'echo "a | b"',
        "cat << EOF > out",
    ],
)
def test_valid_lines_return_tokens(line):
    tokens = tokenize(line)
    assert syntax_check(tokens) is tokens


def test_empty_token_list_is_valid():
    assert validate([]) == []


@pytest.mark.parametrize(
    "line, token",
    [
        ("| ls", "|"),
        ("ls |", "|"),
        ("ls &&", "&&"),
        ("ls | | wc", "|"),
        ("ls > |", "|"),
        ("ls && )", ")"),
        ("()", ")"),
        ("(ls)(pwd)", ")"),
        ("echo (ls)", "ls"),
        ("(ls) wc", "wc"),
        ("(ls) > out wc", "wc"),
        ("(ls |)", ")"),
    ],
)
def test_errors_name_the_offending_token(line, token):
    assert near(line) == token


@pytest.mark.parametrize("line", ["ls >", "(ls", 'echo "abc', "cat <<"])
def test_errors_near_newline(line):
    expected = "|" if False else "newline"
    if line == "cat <<":
        # A trailing redirect has no following token.
        assert near(line) == expected
    else:
        assert near(line) == expected


def test_error_message_text():
    with pytest.raises(ShellSyntaxError) as info:
        syntax_check(tokenize("| ls"))
    assert str(info.value) == "minishell: syntax error near unexpected token `|'"
    assert info.value.token == tokenize("|")[0]


def test_newline_error_has_no_token():
    with pytest.raises(ShellSyntaxError) as info:
        validate(tokenize("ls >"))
    assert info.value.token is None
    assert str(info.value).endswith("`newline'")


def test_stray_close_before_open_rejected_by_syntax_check():
    with pytest.raises(ShellSyntaxError) as info:
        syntax_check(tokenize("ls ) (pwd)"))
    assert info.value.near == ")"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("ab", False),
        ('"a', True),
        ("'", True),
        ("'a\"b'", False),
        ("\"a'b\"", False),
        ("''\"\"", False),
    ],
)
def test_has_unclosed_quote(text, expected):
    assert has_unclosed_quote(text) is expected
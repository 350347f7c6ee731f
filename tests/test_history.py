import io

import pytest

from minishell.history import History, is_history_command


def test_add_then_lines_round_trip(tmp_path):
    history = History(tmp_path / "history.txt")
    for line in ["ls -l", "pwd", "echo $HOME"]:
        history.add(line)
    assert history.lines() == ["ls -l", "pwd", "echo $HOME"]


def test_lines_creates_missing_file(tmp_path):
    path = tmp_path / "history.txt"
    assert History(path).lines() == []
    assert path.exists()


def test_add_appends_to_existing(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text("old\n", encoding="utf-8")
    History(path).add("new")
    assert path.read_text(encoding="utf-8") == "old\nnew\n"


def test_show_numbers_lines(tmp_path):
    history = History(tmp_path / "history.txt")
    history.add("ls")
    history.add("pwd")
    out = io.StringIO()
    history.show(out)
    assert out.getvalue() == "1 ls\n2 pwd\n"


def test_show_empty_history(tmp_path):
    out = io.StringIO()
    History(tmp_path / "history.txt").show(out)
    assert out.getvalue() == ""


@pytest.mark.parametrize(
    "text, expected",
    [
        ("history", True),
        ("  history  ", True),
        ("\thistory\n", True),
        ("", True),
        ("historyx", False),
        ("history x", False),
        ("ls", False),
        (None, False),
    ],
)
def test_is_history_command(text, expected):
    assert is_history_command(text) is expected
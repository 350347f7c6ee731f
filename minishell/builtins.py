"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import re
import sys
from enum import IntEnum
from typing import Sequence, TextIO

from minishell.environment import Environment

_SPACE = " \t\n\v\f\r"
_QUOTES = "\"'"
_UNQUOTED = re.compile(r"[^\"']*")


class Builtin(IntEnum):
    """Kinds of built-in command."""

    NONE = 0
    ECHO = 1
    CD = 2
    PWD = 3
    EXPORT = 4
    UNSET = 5
    ENV = 6
    EXIT = 7


# Checked in this order; a command name matches when it starts with the prefix.
_PREFIXES = (
    ("echo", Builtin.ECHO),
    ("cd", Builtin.CD),
    ("pwd", Builtin.PWD),
    ("export", Builtin.EXPORT),
    ("unset", Builtin.UNSET),
    ("env", Builtin.ENV),
    ("exit", Builtin.EXIT),
)


def builtin_kind(cmd: Sequence[str] | None) -> Builtin:
    """Which built-in the command's first word names, or Builtin.NONE."""
    if not cmd or not cmd[0]:
        return Builtin.NONE
    name = cmd[0]
    return next(
        (kind for prefix, kind in _PREFIXES if name.startswith(prefix)),
        Builtin.NONE,
    )


def run_builtin(
    cmd: Sequence[str],
    env: Environment,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run a built-in command; 1 when a handler ran, 0 otherwise."""
    kind = builtin_kind(cmd)
    if kind is Builtin.ECHO:
        return int(exec_echo(cmd[0], env, out))
    if kind is Builtin.CD:
        return int(exec_cd(cmd[1] if len(cmd) > 1 else None, env, err))
    if kind is Builtin.PWD:
        return int(exec_pwd(cmd[0], out, err))
    if kind is Builtin.ENV:
        return int(exec_env(cmd[0], env, out, err))
    return 0


def exec_cd(
    arg: str | None, env: Environment, err: TextIO | None = None
) -> bool:
    """Change directory; with no argument go to HOME if the shell has one."""
    if err is None:
        err = sys.stderr
    target = _UNQUOTED.match((arg or "").lstrip(_QUOTES)).group()
    if not target:
        if env.lookup("HOME") is not None:
            home = os.environ.get("HOME")
            if home:
                try:
                    os.chdir(home)
                except OSError:
                    pass
        return True
    try:
        os.chdir(target)
    except OSError:
        err.write(f"cd: no such file or directory: {target}\n")
    return True


def _after_echo(text: str | None) -> str | None:
    if text is None:
        return None
    text = text.lstrip(_SPACE)
    if not text.startswith("echo"):
        return None
    return text[len("echo"):].lstrip(_SPACE)


def exec_echo(text: str | None, env: Environment, out: TextIO | None = None) -> bool:
    """Print the value of every ``$NAME`` in an echo line.

    Unless the arguments start with ``-n``, a newline follows every
    expansion and one more ends the output.
    """
    if out is None:
        out = sys.stdout
    rest = _after_echo(text)
    if rest is None:
        return True
    new_line = not rest.startswith("-n")
    dollars = (index for index, char in enumerate(rest) if char == "$")
    for index in dollars:
        value = env.lookup(rest[index + 1:])
        if value is not None:
            out.write(value)
        if new_line:
            out.write("\n")
    if new_line:
        out.write("\n")
    return True


def exec_env(
    text: str,
    env: Environment,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> bool:
    """Print the environment, one entry per line; no arguments allowed."""
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr
    out.write(f"{text}\n")
    rest = text[3:]
    out.write(f"{rest}\n")
    if rest.lstrip(_SPACE):
        err.write("env: too many arguments\n")
        return True
    for entry in env:
        out.write(f"{entry}\n")
    return True


def exec_pwd(
    text: str | None, out: TextIO | None = None, err: TextIO | None = None
) -> bool:
    """Print the working directory; False if arguments follow the name."""
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr
    if text is None:
        return False
    if text[3:].lstrip(_QUOTES):
        return False
    try:
        cwd = os.getcwd()
    except OSError:
        err.write("minishell: pwd error")
        return True
    out.write(f"{cwd}\n")
    return True
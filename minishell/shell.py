"""The interactive read-execute loop."""

from __future__ import annotations

import os
import signal
import sys
from typing import Iterable, Iterator, Sequence, TextIO

from minishell.environment import Environment
from minishell.executor import Executor, RedirectionError
from minishell.lexer import tokenize
from minishell.parser import parse
from minishell.syntax import ShellSyntaxError, syntax_check

PROMPT = "minishell$ "


class Shell:
    """A shell session: environment, last status and an executor."""

    def __init__(
        self,
        envp: Sequence[str] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        if envp is None:
            envp = [f"{key}={value}" for key, value in os.environ.items()]
        self.env = Environment.from_envp(envp)
        self.status = 0
        self._stdout = stdout
        self._stderr = stderr
        self.executor = Executor(self.env, None, stdout, stderr)

    @property
    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def _err(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def run_line(self, line: str) -> int:
        """Run one command line and return the resulting status.

        Empty lines and lines with syntax errors leave the status as it was.
        """
        if not line:
            return self.status
        tokens = tokenize(line)
        try:
            syntax_check(tokens)
        except ShellSyntaxError as exc:
            self._err.write(f"{exc}\n")
            return self.status
        self.status = self.executor.run(parse(tokens))
        return self.status

    def loop(self, lines: Iterable[str]) -> int:
        """Run lines until they run out; return the shell's exit code."""
        for line in lines:
            try:
                self.run_line(line.removesuffix("\n"))
            except RedirectionError as exc:
                self._err.write(f"{exc}\n")
                return 1
            except KeyboardInterrupt:
                self._out.write("\n")
                self.status = 1
        return 0


def _prompt_lines(shell: Shell) -> Iterator[str]:
    while True:
        try:
            yield input(PROMPT)
        except KeyboardInterrupt:
            shell._out.write("\n")
        except EOFError:
            return


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive session on the terminal."""
    try:
        import readline  # noqa: F401  (line editing for input())
    except ImportError:
        pass
    shell = Shell()
    quit_signal = getattr(signal, "SIGQUIT", None)
    previous = None
    if quit_signal is not None:
        previous = signal.signal(quit_signal, signal.SIG_IGN)
    try:
        return shell.loop(_prompt_lines(shell))
    finally:
        if quit_signal is not None and previous is not None:
            signal.signal(quit_signal, previous)


if __name__ == "__main__":
    sys.exit(main())
"""Execution of syntax trees: commands, pipelines, lists and subshells."""

from __future__ import annotations

import io
import os
import subprocess
import sys
import threading
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Iterator, Sequence, TextIO

from minishell.builtins import Builtin, builtin_kind, run_builtin
from minishell.environment import Environment
from minishell.parser import Node, NodeType, Redirect, RedirType

_NOT_FOUND = 127


class RedirectionError(Exception):
    """Raised when a redirection target cannot be opened."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"minishell: {filename}: {reason}")


@dataclass(frozen=True)
class _Streams:
    stdin: TextIO
    stdout: TextIO
    stderr: TextIO


_OPEN_MODES = {
    RedirType.OUT: (os.O_CREAT | os.O_WRONLY | os.O_TRUNC, "w"),
    RedirType.APPEND: (os.O_CREAT | os.O_WRONLY | os.O_APPEND, "a"),
    RedirType.IN: (os.O_RDONLY, "r"),
    RedirType.HEREDOC: (os.O_RDONLY, "r"),
}


def _open_target(redir: Redirect) -> TextIO:
    flags, mode = _OPEN_MODES[redir.type]
    try:
        fd = os.open(redir.filename, flags, 0o644)
    except OSError as exc:
        raise RedirectionError(redir.filename, exc.strerror or str(exc)) from exc
    return os.fdopen(fd, mode, encoding="utf-8")


@contextmanager
def _redirected(redirs: Sequence[Redirect], streams: _Streams) -> Iterator[_Streams]:
    """Open every target in order; the last input and output ones win."""
    with ExitStack() as stack:
        stdin, stdout = streams.stdin, streams.stdout
        for redir in redirs:
            handle = stack.enter_context(_open_target(redir))
            if redir.type in (RedirType.OUT, RedirType.APPEND):
                stdout = handle
            else:
                stdin = handle
        yield _Streams(stdin, stdout, streams.stderr)


def _fileno(stream: TextIO | None) -> int | None:
    if stream is None:
        return None
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _flush(stream: TextIO | None) -> None:
    if stream is None:
        return
    try:
        stream.flush()
    except (OSError, ValueError):
        pass


def _read_input(stream: TextIO | None) -> str | None:
    if stream is None:
        return None
    try:
        return stream.read()
    except (OSError, ValueError):
        return None


class Executor:
    """Runs syntax trees against an environment and a set of streams."""

    def __init__(
        self,
        env: Environment,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.env = env
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr

    def _streams(self) -> _Streams:
        return _Streams(
            self._stdin if self._stdin is not None else sys.stdin,
            self._stdout if self._stdout is not None else sys.stdout,
            self._stderr if self._stderr is not None else sys.stderr,
        )

    def run(self, node: Node | None) -> int:
        """Execute a tree and return its exit status.

        A built-in whose redirection fails raises RedirectionError.
        """
        return self._execute(node, self._streams())

    def _execute(self, node: Node | None, streams: _Streams) -> int:
        if node is None:
            return 0
        if node.type is NodeType.CMD:
            return self._command(node, streams)
        if node.type is NodeType.PIP:
            return self._pipeline(node.left, node.right, streams)
        if node.type is NodeType.AND:
            status = self._execute(node.left, streams)
            if status == 0:
                status = self._execute(node.right, streams)
            return status
        if node.type is NodeType.OR:
            status = self._execute(node.left, streams)
            if status != 0:
                status = self._execute(node.right, streams)
            return status
        return self._subshell(node, streams)

    def _report(self, exc: RedirectionError, streams: _Streams) -> None:
        streams.stderr.write(f"{exc}\n")

    def _command(self, node: Node, streams: _Streams) -> int:
        if builtin_kind(node.cmd) is not Builtin.NONE:
            with _redirected(node.redirs, streams) as inner:
                run_builtin(node.cmd, self.env, inner.stdout, inner.stderr)
            return 0
        try:
            with _redirected(node.redirs, streams) as inner:
                if not node.cmd:
                    return 0
                status = self._external(node.cmd, inner)
        except RedirectionError as exc:
            self._report(exc, streams)
            return 1
        return _NOT_FOUND if status is None else status

    def _subshell(self, node: Node, streams: _Streams) -> int:
        cwd = os.getcwd()
        try:
            if node.redirs:
                with _redirected(node.redirs, streams) as inner:
                    return self._execute(node.left, inner)
            return self._execute(node.left, streams)
        except RedirectionError as exc:
            self._report(exc, streams)
            return 1
        finally:
            _restore_cwd(cwd)

    def _pipeline(self, left: Node | None, right: Node | None, streams: _Streams) -> int:
        read_fd, write_fd = os.pipe()
        writer = os.fdopen(write_fd, "w", encoding="utf-8")
        reader = os.fdopen(read_fd, "r", encoding="utf-8")
        cwd = os.getcwd()

        def run_left() -> None:
            try:
                self._pipe_side(left, _Streams(streams.stdin, writer, streams.stderr))
            except BrokenPipeError:
                pass
            finally:
                try:
                    writer.close()
                except OSError:
                    pass

        thread = threading.Thread(target=run_left, daemon=True)
        thread.start()
        try:
            return self._pipe_side(right, _Streams(reader, streams.stdout, streams.stderr))
        finally:
            reader.close()
            thread.join()
            _restore_cwd(cwd)

    def _pipe_side(self, node: Node | None, streams: _Streams) -> int:
        if node is None:
            return 0
        if node.type is NodeType.PIP:
            return self._pipeline(node.left, node.right, streams)
        if builtin_kind(node.cmd) is not Builtin.NONE:
            run_builtin(node.cmd, self.env, streams.stdout, streams.stderr)
            return 0
        if node.type is NodeType.SUB:
            try:
                return self._execute(node.left, streams)
            except RedirectionError as exc:
                self._report(exc, streams)
                return 1
        status = self._external(node.cmd, streams)
        return 1 if status is None else status

    def _external(self, cmd: Sequence[str], streams: _Streams) -> int | None:
        """Run a program; None (after a message) when it cannot be started."""
        name = cmd[0] if cmd else None
        path = self.env.resolve_command(name) if name else None
        status = self._spawn(cmd, path, streams) if path else None
        if status is None:
            streams.stderr.write(f"{name or ''}: command not found\n")
        return status

    def _spawn(self, argv: Sequence[str], path: str, streams: _Streams) -> int | None:
        _flush(streams.stdout)
        _flush(streams.stderr)
        kwargs: dict = {}
        in_fd = _fileno(streams.stdin)
        if in_fd is not None:
            kwargs["stdin"] = in_fd
        else:
            data = _read_input(streams.stdin)
            if data is None:
                kwargs["stdin"] = subprocess.DEVNULL
            else:
                kwargs["input"] = data.encode("utf-8")
        out_fd = _fileno(streams.stdout)
        err_fd = _fileno(streams.stderr)
        kwargs["stdout"] = out_fd if out_fd is not None else subprocess.PIPE
        kwargs["stderr"] = err_fd if err_fd is not None else subprocess.PIPE
        try:
            proc = subprocess.run(
                list(argv), executable=path, env=self.env.as_dict(), **kwargs
            )
        except OSError:
            return None
        if out_fd is None and proc.stdout:
            streams.stdout.write(proc.stdout.decode("utf-8", errors="replace"))
        if err_fd is None and proc.stderr:
            streams.stderr.write(proc.stderr.decode("utf-8", errors="replace"))
        return proc.returncode if proc.returncode >= 0 else 1


def _restore_cwd(cwd: str) -> None:
    try:
        os.chdir(cwd)
    except OSError:
        pass


__all__ = ["Executor", "RedirectionError"]

# Keep io referenced for type checkers reading stream annotations.
_TextBase = io.TextIOBase
# minishell

A small interactive shell. It reads command lines, splits them into tokens,
checks their syntax, builds a command tree and runs it.

## What it understands

- Words, with single- and double-quoted sections kept together as one word.
  The quote characters stay in the word and are passed on as they are.
- Pipes: `ls | wc -l`
- Logical operators: `make && ./app`, `test -f x || touch x`
- Subshells in parentheses, with redirections after them: `(cd /tmp && ls) > out`.
  A change of directory inside a subshell or a pipeline is undone afterwards.
- Redirections: `<`, `>`, `>>` and `<<`. When several are given, each
  target is opened in order and the last input and last output win.
- Built-in commands:
  - `echo` prints the value of each `$NAME` it finds in its line, each
    followed by a newline, and one more newline at the end; with `-n`
    no newlines are written.
  - `cd DIR` changes directory; `cd` alone goes to `HOME`.
  - `pwd` prints the working directory.
  - `env` prints the environment, one entry per line.
  - `export`, `unset` and `exit` are recognised and do nothing.

Programs are looked up in the `PATH` entry of the shell's environment; names
starting with `./` or `/` are used as given. Without a `PATH` entry no program
is found.

Syntax errors are reported the usual way, for example:

```
minishell: syntax error near unexpected token `|'
```

A command that cannot be found prints `<name>: command not found` and gives
status 127 (1 when it is part of a pipeline).

## Installing

```
pip install .
```

## Running

```
minishell
```

The prompt is `minishell$ `. End of input (Ctrl-D) leaves the shell. Ctrl-C
prints a newline and shows a fresh prompt; SIGQUIT is ignored while the shell
runs.

## Using it from Python

```python
from minishell.shell import Shell

# As with a process's envp, the first entry is skipped.
shell = Shell(envp=["_=minishell", "PATH=/usr/bin:/bin", "HOME=/tmp"])
status = shell.run_line("ls | wc -l")
```

`Shell.run_line(line)` runs one line and returns its status; lines with a
syntax error print the message and leave the status unchanged.
`Shell.loop(lines)` runs each line of an iterable in turn and returns 0 when
they run out, or 1 if a built-in's redirection could not be opened.

The pieces can also be used on their own:

- `minishell.lexer.tokenize(line)` returns a list of `Token`s;
  `format_tokens` renders them.
- `minishell.syntax.syntax_check(tokens)` and `validate(tokens)` raise
  `ShellSyntaxError` for malformed input.
- `minishell.parser.parse(tokens)` builds a tree of `Node`s;
  `format_ast` renders it as indented text.
- `minishell.environment.Environment` holds the ordered `NAME=value` entries,
  with `lookup`, `remove`, `unset_command` and `resolve_command`.
- `minishell.executor.Executor(env, stdin, stdout, stderr).run(node)` runs a
  tree and returns its exit status.
- `minishell.builtins` holds the built-in commands (`builtin_kind`,
  `run_builtin`).
- `minishell.history.History(path)` keeps commands in a text file
  (`add`, `lines`, `show`); `is_history_command` recognises a bare `history`
  line.

## What it does not do

- No expansion of `$NAME` in arguments to programs, and no removal of quotes.
- `<<` is not a here-document: it opens the named file for reading, like `<`.
- `export`, `unset` and `exit` change nothing; leave the shell with Ctrl-D.
- The interactive shell does not record or show history; `History` is only
  available from Python.

## Tests

```
pip install ".[test]"
pytest
```
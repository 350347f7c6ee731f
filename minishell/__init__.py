"""A small shell: lexer, syntax checker, parser, built-ins and executor for pipes, logical operators, subshells and redirections."""

__version__ = "0.1.0"
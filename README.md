# cascarishell

The building blocks of a small POSIX-style shell. This library splits an input
line into tagged words and checks the syntax of the line. It expands variables,
removes quotes, groups words into pipeline stages and finds programs on `PATH`.
It also runs the shell's built-in commands against an in-memory environment.

## Install

    pip install .

## Modules

- `cascarishell.tokens`: `TokenType` (the kind of each word, such as a pipe,
  a redirection, a heredoc delimiter or a quoted word) and the `Element`
  dataclass. It also holds helpers that split a word around one operator
  character (`split_on_char`, `expand_element`) or around a doubled operator
  (`split_on_double`, `expand_double`).
- `cascarishell.quoting`: quote helpers. `pad_special_chars` puts spaces
  around unquoted `|`, `<` and `>`. `protect_quoted_spaces`, `count_quotes`,
  `closed_quotes` and `quote_type` inspect quotes. `classify_quoted` raises
  `UnclosedQuotesError` when a quote is never closed. `strip_quotes` removes
  the quotes and keeps what they enclose.
- `cascarishell.lexer`: `split_input`, `tokenize` and `check_syntax`. Each
  raises `ShellSyntaxError` for a line that cannot be run. The error's
  `exit_code` is 258 for a syntax error and 1 for unclosed quotes. The tokens
  `;`, `\`, `&&`, `(` and `)` are rejected. So are a pipe or redirection with
  nothing after it, two operators in a row, and a heredoc with no delimiter.
- `cascarishell.env`: `Environment` holds `NAME=VALUE` entries and the sorted
  list that `export` prints. It also provides `split_entry`, `export_format`,
  `is_valid_identifier` and `is_assignment`.
- `cascarishell.expand`: `expand` replaces `$NAME` and `$?` outside single
  quotes. A valid name that is not set is removed. `expand_tokens` and
  `strip_token_quotes` apply expansion and quote removal to a list of
  elements.
- `cascarishell.commands`: `split_commands` cuts elements into `Command`
  stages at each pipe. A `Command` provides `argv()`, `command_line()`,
  `is_heredoc_only()` and the `builtin` property. `is_builtin` tells whether a
  name is a built-in command. `search_path` finds the file to run and raises
  `CommandNotFound` with an exit code of 127, or of 126 for a directory or a
  file that is not executable.
- `cascarishell.builtins`: the built-in commands `echo` (with `-n`), `pwd`,
  `cd`, `env_builtin`, `export`, `unset` and `exit_builtin`, plus
  `run_builtin`, which picks one of them by name. Each one writes to the
  streams you pass in and returns its exit status. `exit_builtin` raises
  `ShellExit` carrying the status the shell should end with.

## Example

    import sys

    from cascarishell.builtins import run_builtin
    from cascarishell.commands import split_commands
    from cascarishell.env import Environment
    from cascarishell.expand import expand_tokens, strip_token_quotes
    from cascarishell.lexer import tokenize

    env = Environment({"PATH": "/usr/bin:/bin", "GREETING": "hello"})
    elements = tokenize('echo "$GREETING" world | cat > out.txt')
    first, second = split_commands(elements)

    tokens = strip_token_quotes(expand_tokens(first.tokens, env, 0))
    argv = [t.data for t in tokens if t.type in ("0", "'", '"')]
    status = run_builtin(argv, env, sys.stdout, sys.stderr)  # prints "hello world"

## What it does not do

This package has no interactive prompt and no command to start a shell. It
does not run pipelines. It does not open redirection files, read heredoc
bodies or start external programs. `search_path` only tells you which file
would be run. Connecting the stages, applying the redirections and running
the programs is left to the caller.

## Tests

    pip install .[test]
    pytest
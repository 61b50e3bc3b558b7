# mimishell

A small interactive command shell. It reads lines from standard input,
shows a prompt led by a pseudo-randomly chosen emoji, and runs what you
type.

## Features

- Commands separated by `;` run one after another; commands joined by
  `|` form a pipeline. Each command in a pipeline runs to completion and
  its output is handed to the next one as input.
- Redirections: `<` reads from a file, `>` truncates and writes, `>>`
  appends. Output files are created if missing.
- Single quotes, double quotes and backslash escapes.
- Variable expansion with `$NAME`, and `$?` for the status of the last
  command. Outside double quotes an expanded value has surrounding
  spaces trimmed. A redirect target that expands to nothing, or to
  several words, is reported as an ambiguous redirect.
- Built-in commands: `echo` (with `-n`), `cd` (to `HOME` without an
  argument, keeping `PWD` and `OLDPWD` up to date), `pwd`, `export`
  (with no arguments it prints a sorted `declare -x` listing), `unset`,
  `env` and `exit`.
- Other commands are looked up on `PATH`, or run directly when the name
  contains a `/`. A name that is not found sets status 127; a directory
  or a file without execute permission sets status 126.
- Syntax errors are reported as
  `syntax error near unexpected token '...'`, with status 258.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
mimishell
```

Then type commands at the prompt:

```
echo "hello $USER" > greeting.txt
cat < greeting.txt | wc -c
export GREETING=hi; echo $GREETING
exit
```

`Ctrl-D` at the prompt, or `exit`, ends the session.

## Using it from Python

```python
import io
from mimishell.shell import Shell

out = io.StringIO()
shell = Shell({"PATH": "/usr/bin:/bin"}, io.StringIO(), out, io.StringIO())
shell.run_line("echo one two")
print(out.getvalue())  # "one two\n"
```

`Shell.run_line()` validates, parses and runs one line and returns the
last status. `Shell.loop()` runs the prompt-and-read loop on the streams
it was given, until end of input or `exit`, and returns the exit status.

The pieces can also be used on their own: `mimishell.validate.validate_line`
checks a line's syntax, `mimishell.parser.parse_command` reads commands
from a `mimishell.expand.LineCursor`, and `mimishell.env.Environment`
holds the ordered `NAME=value` entries.

## Limitations

- No `&&`, `||`, subshells or parentheses; parentheses are a syntax
  error.
- No here-documents, globbing, command history or line editing.
- No job control or background commands.
- `exit` ignores its arguments and always ends with status 0.
- A builtin inside a pipeline runs on a copy of the environment, so
  `cd`, `export` or `unset` there do not change the session.

## Running the tests

```
pip install .[test]
pytest
```
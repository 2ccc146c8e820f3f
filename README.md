# minish

A small interactive command shell. It reads a line, splits it into words and
operators, expands variables and runs the result. The result is either a
single command or a pipeline.

## Features

- Words separated by spaces or tabs. A single- or double-quoted string becomes
  one word of its own, without the quotes.
- Pipelines: `ls | grep py | wc -l`
- Redirections: `<`, `>`, `>>` and here-documents with `<<`
- Variable expansion: `$NAME`, and `$?` for the last exit status
- Built-in commands: `echo` (with `-n`), `cd`, `pwd`, `export`, `unset`,
  `env` and `exit`
- Other commands are looked up through `PATH` (or used as given when the name
  holds a `/`) and started as child processes

## Installation

```
pip install .
```

## Usage

Start the shell:

```
minish
```

It prompts with `minishell$ `. It exits at end of input (Ctrl-D), printing
`exit`, or when you type `exit`, optionally followed by an exit status:

```
minishell$ export GREETING=hello
minishell$ echo $GREETING world
hello world
minishell$ ls | wc -l > count.txt
minishell$ cat << END
> some text
> END
some text
minishell$ exit 3
exit
```

Errors are reported on standard error with the prefix `minishell: `, for
example `minishell: cd: HOME not set` or `minishell: foo: command not found`.
A command that cannot be found gives status 127. Ctrl-C at the prompt sets the
status to 130.

## Using it from Python

```python
from minish.shell import Shell

shell = Shell({"PATH": "/usr/bin:/bin", "HOME": "/tmp"})
status = shell.process_input("echo hello")
```

`Shell.process_input` runs one line and returns its exit status. Running
`exit` raises `minish.builtins.ShellExit`, whose `code` attribute holds the
status. `Shell.run` takes a function that is called with the prompt and
returns the next line, or None at end of input. It loops until input ends or
`exit` is run, and returns the status to exit with.

The parts can also be used on their own:

- `minish.tokens.tokenize` splits a line into `Token`s ending with an EOF
  token. It raises `TokenizeError` on an unclosed quote.
- `minish.parser.parse` builds a `Command` or a `Pipeline` from those tokens.
- `minish.expansion.expand_variables` substitutes variables from a
  `minish.environment.ShellState`.
- `minish.executor.execute` runs a parsed node and returns its status.
- `minish.environment.Environment` is the ordered variable table.

## What it does not do

This is a deliberately small shell:

- There are no `;`, `&&`, `||`, background jobs, subshells, globbing or
  command substitution.
- Quotes only group text into a word. Variables are expanded inside single
  quotes as well, and `'a'b` gives two words, `a` and `b`.
- Variables are expanded only in the words of a single command. They are not
  expanded in the stages of a pipeline or in redirection targets.
- Built-in commands run on their own do not apply redirections. Built-ins in a
  pipeline run apart from the shell, so `export`, `cd` and the like have no
  lasting effect there.
- `env` and `export` without arguments list the variables unsorted.
- History is kept only for the running session through line editing when it
  is available. Nothing is saved to a file.

## Running the tests

```
pip install .[test]
pytest
```
"""CLI entry point for the Ember interpreter.

Usage:
    python -m ember [-v|-vv|-vvv] [--tokens] [--color WHEN] <program_file>
    python -m ember [-v...] [--tokens] [--color WHEN]

Options:
  -v            Increase debug verbosity (can be repeated)
  --tokens      Print the token stream before evaluating
  --color WHEN  Colorize output: auto (default, only on a terminal),
                always or never

With a program file the script is executed and its final value printed.
Without one an interactive session starts; type `exit` to leave it. Ctrl+C
in the session abandons the current line instead of quitting.
Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from colorama import just_fix_windows_console
from termcolor import colored

from .environment import Environment
from .errors import ParseError, EvalError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse
from .types import inspect

PROMPT = '>> '
WELCOME = 'Welcome to Ember! Type in your commands, or exit to leave.'
INTERRUPT_MESSAGE = "Please enter 'exit' to leave the application!"

# keyword arguments for termcolor.colored per --color choice
COLOR_OPTIONS = {
    'auto': {},
    'always': {'force_color': True},
    'never': {'no_color': True},
}


def paint(text: str, color: str, when: str = 'auto') -> str:
    return colored(text, color, **COLOR_OPTIONS[when])


def execute_source(source: str, interpreter: Interpreter, env: Environment,
                   show_tokens: bool = False, when: str = 'auto') -> bool:
    """Run one chunk of source, printing its result or the error. Returns success."""
    tokens = tokenize(source)
    if show_tokens:
        print(paint(','.join(tok.value or tok.type for tok in tokens), 'light_blue', when))
    try:
        program = parse(tokens)
    except ParseError as e:
        print(paint(f"Error while parsing: {e}", 'red', when), file=sys.stderr)
        return False
    try:
        result = interpreter.run(program, env)
    except EvalError as e:
        print(paint(f"Error while evaluating: {e}", 'red', when), file=sys.stderr)
        return False
    print(inspect(result))
    return True


def repl(interpreter: Interpreter, show_tokens: bool = False, when: str = 'auto') -> None:
    env = interpreter.global_env
    print(paint(WELCOME, 'green', when))
    while True:
        try:
            line = input(PROMPT)
            if line.strip() == 'exit':
                break
            if line.strip():
                execute_source(line, interpreter, env, show_tokens, when)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            print(paint(INTERRUPT_MESSAGE, 'red', when))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Ember language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--tokens', action='store_true', help='print the token stream before evaluating')
    parser.add_argument('--color', choices=sorted(COLOR_OPTIONS), default='auto',
                        help='colorize output (default: auto)')
    parser.add_argument('program', nargs='?', help='Ember program file (.ember) to execute')
    args = parser.parse_args(argv)

    just_fix_windows_console()
    interpreter = Interpreter(debug_level=args.v)
    try:
        if not args.program:
            repl(interpreter, args.tokens, args.color)
            return
        program_file = Path(args.program)
        if not program_file.exists():
            print(paint(f"Error: file {program_file} not found", 'red', args.color), file=sys.stderr)
            sys.exit(1)
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()
        if not execute_source(source, interpreter, interpreter.global_env, args.tokens, args.color):
            sys.exit(1)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()

"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [program_file]
    python -m lox [-v...] --emit-ast <program_file>
    python -m lox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive prompt is started; every line is run
against the same global environment and errors do not end the session.
Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import cmd
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from termcolor import colored

from .ast_json import program_from_obj, program_to_obj
from .errors import LoxError, LoxRuntimeError, ParseErrors, ScanErrors
from .interpreter import Interpreter, parse_program

# sysexits.h
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def report(errors: Sequence[LoxError]):
    for error in errors:
        print(colored("error: ", "red", attrs=["bold"]) + str(error), file=sys.stderr)


def exit_code(errors: Sequence[LoxError]) -> int:
    if not errors:
        return 0
    if any(isinstance(e, LoxRuntimeError) for e in errors):
        return EX_SOFTWARE
    return EX_DATAERR


class Shell(cmd.Cmd):
    """Interactive Lox prompt."""
    intro = "Lox interpreter\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "

    def __init__(self, interpreter: Interpreter, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter

    def onecmd(self, line):
        # every line is Lox source except the two shell commands
        stripped = line.strip()
        if stripped == 'EOF':
            return self.do_EOF('')
        if stripped == 'exit':
            return self.do_exit('')
        if not stripped:
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Runs one line of Lox source."""
        report(self.interpreter.run(line))
        return False

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


def existing_path(name: str) -> Path:
    path = Path(name)
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    return path


def read_file(name: str) -> str:
    with open(existing_path(name), 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Lox program file (.lox) to execute; omit for a prompt')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_file(args.emit_ast)
        try:
            statements = parse_program(source)
        except (ScanErrors, ParseErrors) as e:
            report(e.errors)
            sys.exit(EX_DATAERR)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            with open(existing_path(args.ast), 'r', encoding='utf-8') as f:
                statements = program_from_obj(json.load(f))
            try:
                interpreter.interpret(statements)
            except LoxRuntimeError as e:
                report([e])
                sys.exit(EX_SOFTWARE)
            return

        if args.program:
            errors = interpreter.run(read_file(args.program))
            report(errors)
            if errors:
                sys.exit(exit_code(errors))
            return

        Shell(interpreter).cmdloop()
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()

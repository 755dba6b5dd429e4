import io
import json
from pathlib import Path

import pytest

from lox.__main__ import Shell, main
from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_runs_file(capsys):
    main([str(EXAMPLES / 'program_5.lox')])
    assert capsys.readouterr().out == '0\n1\n2\n'


def test_runtime_error_exit_code(capsys):
    with pytest.raises(SystemExit) as info:
        main([str(EXAMPLES / 'program_10.lox')])
    assert info.value.code == 70
    captured = capsys.readouterr()
    assert captured.out == 'before\n'
    assert 'DivisionByZero' in captured.err


def test_parse_error_exit_code(tmp_path, capsys):
    path = write(tmp_path, 'bad.lox', 'print 1;\nvar = 2;\nprint ;\n')
    with pytest.raises(SystemExit) as info:
        main([path])
    assert info.value.code == 65
    captured = capsys.readouterr()
    assert captured.out == ''
    assert '[line 2]' in captured.err
    assert '[line 3]' in captured.err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / 'nope.lox')])
    assert info.value.code == 66


def test_emit_and_run_ast(tmp_path, capsys):
    path = write(tmp_path, 'prog.lox', 'var a = 2; print a * 21;')
    main(['--emit-ast', path])
    ast_path = capsys.readouterr().out.strip()
    assert ast_path.endswith('prog.lox.ast.json')
    with open(ast_path, encoding='utf-8') as f:
        assert json.load(f)['type'] == 'Program'
    main(['--ast', ast_path])
    assert capsys.readouterr().out == '42\n'


def test_shell_keeps_state_between_lines(capsys):
    stdin = io.StringIO('var a = 2;\nprint a * 3;\n\nprint b;\nprint a;\n')
    shell = Shell(Interpreter(), stdin=stdin, stdout=io.StringIO())
    shell.use_rawinput = False
    shell.cmdloop()
    captured = capsys.readouterr()
    assert captured.out.split() == ['6', '2']
    assert "Undefined variable 'b'" in captured.err


def test_shell_exit_command(capsys):
    stdin = io.StringIO('print 1;\nexit\nprint 2;\n')
    shell = Shell(Interpreter(), stdin=stdin, stdout=io.StringIO())
    shell.use_rawinput = False
    shell.cmdloop()
    assert capsys.readouterr().out == '1\n'

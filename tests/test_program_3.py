from pathlib import Path

from lox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_string_concatenation(capsys):
    with open(EXAMPLES / 'program_3.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == [
        'ab',
        'x1',
        '1x',
        'pi is about 3.14',
        'flag: true, nothing: nil',
    ]

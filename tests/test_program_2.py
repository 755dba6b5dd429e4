from pathlib import Path

from lox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_precedence_and_grouping(capsys):
    with open(EXAMPLES / 'program_2.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip().splitlines()
    # subtraction is left-associative: (10 - 4) - 3
    assert out == ['14', '20', '3', '6', '3.5']

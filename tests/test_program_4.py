from pathlib import Path

from lox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_block_scoping(capsys):
    with open(EXAMPLES / 'program_4.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['2', '1', 'inner', 'changed from a block']
    # block variables do not leak into the globals
    assert 'inner' not in interp.environment.globals
    assert interp.environment.depth == 1

from pathlib import Path

from ember.interpreter import Interpreter
from ember.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_strings(capsys):
    with open(EXAMPLES / 'program_6.ember', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['Hello, Ember!', '13', '42 is Int', 'true']

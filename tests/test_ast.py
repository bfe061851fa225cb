import pytest

from ember.ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Identifier, IntegerLiteral, InfixExpression, FunctionLiteral,
)
from ember.environment import Environment
from ember.interpreter import evaluate
from ember.parser import parse_program


def test_program_renders_source_text():
    program = Program([
        LetStatement('myVar', Identifier('anotherVar')),
        ReturnStatement(InfixExpression(Identifier('a'), '+', IntegerLiteral('1'))),
    ])
    assert str(program) == 'let myVar = anotherVar; ret (a + 1);'


def test_function_and_if_rendering():
    program = parse_program('fn(a, b) { if (a < b) { ret a; } else { b } }')
    assert str(program) == 'fn(a, b) { if ((a < b)) { ret a; } else { b; }; };'


def test_clone_is_equal_but_independent():
    original = FunctionLiteral(['x'], BlockStatement([
        ExpressionStatement(InfixExpression(Identifier('x'), '+', IntegerLiteral('1'))),
    ]))
    copy = original.clone()
    assert copy == original
    assert copy is not original
    assert copy.body is not original.body
    assert copy.body.statements[0].expression is not original.body.statements[0].expression

    copy.parameters.append('y')
    copy.body.statements[0].expression.operator = '-'
    assert original.parameters == ['x']
    assert original.body.statements[0].expression.operator == '+'


def test_program_clone_deep_copies_every_statement():
    program = parse_program('let a = [1, 2]; while (true) { ret a[0]; }')
    copy = program.clone()
    assert copy == program
    for mine, theirs in zip(copy.statements, program.statements):
        assert mine is not theirs


@pytest.mark.parametrize('source', [
    '1 + 2 * 3 - 4 / 2 % 3',
    '-(3 - 10) * 2',
    '!(1 < 2) == false || 3 >= 3 && true',
    'if (1 > 2) { 10 } else { 20 }',
    'let x = 2; x = x * 21; x',
    'let f = fn(a, b) { ret a * b + 1; }; f(3, 4)',
    'let make = fn(n) { fn(x) { x + n } }; make(5)(10)',
    'let i = 0; let s = 0; while (i < 5) { s = s + i; i = i + 1; }; s',
    '"con" + "cat"',
    'len([1, 2, 3]) + [4, 5][1]',
    'err "bad"',
])
def test_render_then_reparse_evaluates_the_same(source):
    program = parse_program(source)
    reparsed = parse_program(str(program))
    assert reparsed == program
    assert evaluate(reparsed, Environment()) == evaluate(program, Environment())

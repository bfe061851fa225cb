import pytest

from ember.ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Identifier, IntegerLiteral, StringLiteral, BooleanLiteral, PrefixExpression,
    InfixExpression, IfExpression, WhileExpression, FunctionLiteral,
    CallExpression, AssignExpression, ErrorExpression, ArrayLiteral, IndexExpression,
)
from ember.errors import UnexpectedToken, RanOutOfTokens
from ember.lexer import tokenize
from ember.parser import parse, parse_program


def single_expression(source):
    program = parse_program(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def test_let_and_return_statements():
    program = parse_program('let x = 5; ret x;')
    assert program == Program([
        LetStatement('x', IntegerLiteral('5')),
        ReturnStatement(Identifier('x')),
    ])


def test_parse_accepts_a_token_list():
    program = parse(tokenize('"hi";'))
    assert program.statements == [ExpressionStatement(StringLiteral('hi'))]


def test_trailing_semicolon_is_optional():
    assert parse_program('1 + 2') == parse_program('1 + 2;')
    block = single_expression('if (true) { 1 }').consequence
    assert block == BlockStatement([ExpressionStatement(IntegerLiteral('1'))])


@pytest.mark.parametrize('source', ['1 2', 'let a = 1 let b = 2', 'ret 1 2', 'fn() { a b }', 'x = 1 print(x)'])
def test_statements_must_be_separated(source):
    with pytest.raises(UnexpectedToken) as exc_info:
        parse_program(source)
    assert exc_info.value.expected == ';'


def test_semicolon_may_follow_a_closing_brace_implicitly():
    program = parse_program('if (a) { 1 } b; while (c) { d } let e = fn() { 2 } e()')
    assert len(program.statements) == 5


@pytest.mark.parametrize('source, expected', [
    ('-a * b', '((-a) * b)'),
    ('!-a', '(!(-a))'),
    ('a + b + c', '((a + b) + c)'),
    ('a - b - c', '((a - b) - c)'),
    ('a + b * c', '(a + (b * c))'),
    ('a * b % c', '((a * b) % c)'),
    ('a + b / c - d', '((a + (b / c)) - d)'),
    ('5 > 4 == 3 < 4', '((5 > 4) == (3 < 4))'),
    ('1 <= 2 != 3 >= 4', '((1 <= 2) != (3 >= 4))'),
    ('a == b || c != d && e', '(((a == b) || (c != d)) && e)'),
    ('(a + b) * c', '((a + b) * c)'),
    ('-(5 + 5)', '(-(5 + 5))'),
    ('a + add(b * c) + d', '((a + add((b * c))) + d)'),
    ('add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))', 'add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))'),
    ('x = y = 3', '(x = (y = 3))'),
    ('x = 5 + 3', '(x = (5 + 3))'),
    ('a * [1, 2][b]', '(a * ([1, 2][b]))'),
    ('err 1 + 2', '((err 1) + 2)'),
])
def test_operator_precedence(source, expected):
    assert str(single_expression(source)) == expected


def test_prefix_expression_nodes():
    assert single_expression('-15') == PrefixExpression('-', IntegerLiteral('15'))
    assert single_expression('!true') == PrefixExpression('!', BooleanLiteral(True))


def test_infix_expression_node():
    assert single_expression('5 * 5') == InfixExpression(IntegerLiteral('5'), '*', IntegerLiteral('5'))


def test_if_else_expression():
    expr = single_expression('if (x < y) { x } else { y }')
    assert expr == IfExpression(
        InfixExpression(Identifier('x'), '<', Identifier('y')),
        BlockStatement([ExpressionStatement(Identifier('x'))]),
        BlockStatement([ExpressionStatement(Identifier('y'))]),
    )


def test_if_without_else():
    expr = single_expression('if (x) { x; }')
    assert expr.alternative is None


def test_while_expression():
    expr = single_expression('while (i < 3) { i = i + 1; }')
    assert expr == WhileExpression(
        InfixExpression(Identifier('i'), '<', IntegerLiteral('3')),
        BlockStatement([ExpressionStatement(
            AssignExpression('i', InfixExpression(Identifier('i'), '+', IntegerLiteral('1'))),
        )]),
    )


@pytest.mark.parametrize('source, params', [
    ('fn() {}', []),
    ('fn(x) {}', ['x']),
    ('fn(x, y, z) {}', ['x', 'y', 'z']),
])
def test_function_parameters(source, params):
    expr = single_expression(source)
    assert isinstance(expr, FunctionLiteral)
    assert expr.parameters == params
    assert expr.body == BlockStatement([])


def test_function_body():
    expr = single_expression('fn(x, y) { ret x + y; }')
    assert expr.body == BlockStatement([
        ReturnStatement(InfixExpression(Identifier('x'), '+', Identifier('y'))),
    ])


def test_call_expression():
    expr = single_expression('add(1, 2 * 3)')
    assert expr == CallExpression(Identifier('add'), [
        IntegerLiteral('1'),
        InfixExpression(IntegerLiteral('2'), '*', IntegerLiteral('3')),
    ])


def test_immediately_invoked_function_literal():
    expr = single_expression('fn(x) { x }(4)')
    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, FunctionLiteral)
    assert expr.arguments == [IntegerLiteral('4')]


def test_array_and_index_expressions():
    expr = single_expression('[1, "a"][0]')
    assert expr == IndexExpression(
        ArrayLiteral([IntegerLiteral('1'), StringLiteral('a')]),
        IntegerLiteral('0'),
    )


def test_error_expression():
    assert single_expression('err "boom"') == ErrorExpression(StringLiteral('boom'))


def test_unexpected_token_carries_the_token():
    with pytest.raises(UnexpectedToken) as exc_info:
        parse_program('let = 5;')
    assert exc_info.value.token.type == 'ASSIGN'


def test_token_without_prefix_rule():
    with pytest.raises(UnexpectedToken) as exc_info:
        parse_program(')')
    assert exc_info.value.token.value == ')'


def test_illegal_token_is_a_parse_error():
    with pytest.raises(UnexpectedToken):
        parse_program('1 @ 2')


def test_missing_else_block_brace():
    with pytest.raises(UnexpectedToken):
        parse_program('if (x) { 1 } else 2')


def test_assignment_target_must_be_identifier():
    with pytest.raises(UnexpectedToken):
        parse_program('1 = 2')


@pytest.mark.parametrize('source', [
    '1 +',
    'let x =',
    'let',
    'if (x',
    'fn(x) { x',
    'add(1, 2',
])
def test_ran_out_of_tokens(source):
    with pytest.raises(RanOutOfTokens):
        parse_program(source)


def test_parse_of_token_list_without_eof():
    tokens = tokenize('1 +')[:-1]
    with pytest.raises(RanOutOfTokens):
        parse(tokens)

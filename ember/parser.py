"""Parser for the Ember language.

Statements are parsed by recursive descent; expressions by precedence
climbing (a Pratt parser). Every token that can start an expression has
a prefix rule, every token that can continue one has an infix rule and a
binding power from `PRECEDENCES`. After the left operand is parsed the
parser keeps folding infix rules for as long as the current token binds
tighter than the caller's threshold.

`parse` is the public entry point. It either returns a complete
`Program` or raises the first `ParseError` it meets; there is no error
recovery.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List

from lark import Token

from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    StringLiteral, BooleanLiteral, ArrayLiteral, PrefixExpression,
    InfixExpression, IfExpression, WhileExpression, FunctionLiteral,
    CallExpression, IndexExpression, AssignExpression, ErrorExpression,
)
from .errors import UnexpectedToken, RanOutOfTokens
from .lexer import tokenize


class Precedence(IntEnum):
    LOWEST = 0
    OR_AND = 1
    EQUALS = 2
    LESS_GREATER = 3
    SUM = 4
    PRODUCT = 5
    PREFIX = 6
    CALL = 7
    ASSIGN = 8


PRECEDENCES: Dict[str, Precedence] = {
    'OR': Precedence.OR_AND,
    'AND': Precedence.OR_AND,
    'EQ': Precedence.EQUALS,
    'NOT_EQ': Precedence.EQUALS,
    'LT': Precedence.LESS_GREATER,
    'GT': Precedence.LESS_GREATER,
    'LTE': Precedence.LESS_GREATER,
    'GTE': Precedence.LESS_GREATER,
    'PLUS': Precedence.SUM,
    'MINUS': Precedence.SUM,
    'ASTERISK': Precedence.PRODUCT,
    'SLASH': Precedence.PRODUCT,
    'PERCENT': Precedence.PRODUCT,
    'LPAREN': Precedence.CALL,
    'LBRACKET': Precedence.CALL,
    'ASSIGN': Precedence.ASSIGN,
}

BINARY_OPERATORS = {
    'OR', 'AND', 'EQ', 'NOT_EQ', 'LT', 'GT', 'LTE', 'GTE',
    'PLUS', 'MINUS', 'ASTERISK', 'SLASH', 'PERCENT',
}


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.prefix_rules: Dict[str, Callable[[], Expression]] = {
            'IDENT': self.parse_identifier,
            'INT': self.parse_integer,
            'STRING': self.parse_string,
            'TRUE': self.parse_boolean,
            'FALSE': self.parse_boolean,
            'MINUS': self.parse_prefix_expression,
            'BANG': self.parse_prefix_expression,
            'LPAREN': self.parse_grouped_expression,
            'LBRACKET': self.parse_array_literal,
            'IF': self.parse_if_expression,
            'WHILE': self.parse_while_expression,
            'FUNCTION': self.parse_function_literal,
            'ERR': self.parse_error_expression,
        }
        self.infix_rules: Dict[str, Callable[[Expression], Expression]] = {
            name: self.parse_infix_expression for name in BINARY_OPERATORS
        }
        self.infix_rules['LPAREN'] = self.parse_call_expression
        self.infix_rules['LBRACKET'] = self.parse_index_expression
        self.infix_rules['ASSIGN'] = self.parse_assign_expression

    # Token cursor

    def current(self) -> Token:
        if self.pos >= len(self.tokens):
            raise RanOutOfTokens()
        return self.tokens[self.pos]

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens) or self.tokens[self.pos].type == 'EOF'

    def match(self, token_type: str) -> bool:
        return self.pos < len(self.tokens) and self.tokens[self.pos].type == token_type

    def advance(self) -> Token:
        token = self.current()
        self.pos += 1
        return token

    def consume(self, expected: str) -> Token:
        token = self.current()
        if token.type == expected:
            self.pos += 1
            return token
        if token.type == 'EOF':
            raise RanOutOfTokens()
        raise UnexpectedToken(token, expected)

    def current_precedence(self) -> Precedence:
        if self.pos >= len(self.tokens):
            return Precedence.LOWEST
        return PRECEDENCES.get(self.tokens[self.pos].type, Precedence.LOWEST)

    # Statements

    def parse_program(self) -> Program:
        program = Program([])
        while not self.at_end():
            program.add_statement(self.parse_statement())
        return program

    def parse_statement(self) -> Statement:
        token = self.current()
        if token.type == 'LET':
            stmt = self.parse_let_statement()
        elif token.type == 'RETURN':
            stmt = self.parse_return_statement()
        else:
            stmt = ExpressionStatement(self.parse_expression(Precedence.LOWEST))
        self.parse_terminator()
        return stmt

    def parse_terminator(self):
        """Consume the `;` after a statement.

        It may be left out before `}`, at end of input, or after a
        statement that itself ends with a `}` block.
        """
        if self.match('SEMICOLON'):
            self.advance()
            return
        if self.at_end() or self.match('RBRACE') or self.tokens[self.pos - 1].type == 'RBRACE':
            return
        raise UnexpectedToken(self.current(), ';')

    def parse_let_statement(self) -> LetStatement:
        self.consume('LET')
        name = self.consume('IDENT').value
        self.consume('ASSIGN')
        value = self.parse_expression(Precedence.LOWEST)
        return LetStatement(name, value)

    def parse_return_statement(self) -> ReturnStatement:
        self.consume('RETURN')
        value = self.parse_expression(Precedence.LOWEST)
        return ReturnStatement(value)

    def parse_block(self) -> BlockStatement:
        self.consume('LBRACE')
        statements: List[Statement] = []
        while not self.match('RBRACE'):
            if self.at_end():
                raise RanOutOfTokens()
            statements.append(self.parse_statement())
        self.consume('RBRACE')
        return BlockStatement(statements)

    # Expressions (Pratt parser)

    def parse_expression(self, precedence: Precedence) -> Expression:
        token = self.current()
        rule = self.prefix_rules.get(token.type)
        if rule is None:
            if token.type == 'EOF':
                raise RanOutOfTokens()
            raise UnexpectedToken(token, 'an expression')
        left = rule()
        while precedence < self.current_precedence():
            infix = self.infix_rules.get(self.current().type)
            if infix is None:
                return left
            left = infix(left)
        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.consume('IDENT').value)

    def parse_integer(self) -> IntegerLiteral:
        return IntegerLiteral(self.consume('INT').value)

    def parse_string(self) -> StringLiteral:
        raw = self.consume('STRING').value
        return StringLiteral(raw[1:-1])

    def parse_boolean(self) -> BooleanLiteral:
        token = self.advance()
        return BooleanLiteral(token.type == 'TRUE')

    def parse_prefix_expression(self) -> PrefixExpression:
        operator = self.advance().value
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(operator, right)

    def parse_error_expression(self) -> ErrorExpression:
        self.consume('ERR')
        return ErrorExpression(self.parse_expression(Precedence.PREFIX))

    def parse_grouped_expression(self) -> Expression:
        self.consume('LPAREN')
        expr = self.parse_expression(Precedence.LOWEST)
        self.consume('RPAREN')
        return expr

    def parse_array_literal(self) -> ArrayLiteral:
        self.consume('LBRACKET')
        return ArrayLiteral(self.parse_expression_list('RBRACKET'))

    def parse_if_expression(self) -> IfExpression:
        self.consume('IF')
        self.consume('LPAREN')
        condition = self.parse_expression(Precedence.LOWEST)
        self.consume('RPAREN')
        consequence = self.parse_block()
        alternative = None
        if self.match('ELSE'):
            self.advance()
            alternative = self.parse_block()
        return IfExpression(condition, consequence, alternative)

    def parse_while_expression(self) -> WhileExpression:
        self.consume('WHILE')
        self.consume('LPAREN')
        condition = self.parse_expression(Precedence.LOWEST)
        self.consume('RPAREN')
        body = self.parse_block()
        return WhileExpression(condition, body)

    def parse_function_literal(self) -> FunctionLiteral:
        self.consume('FUNCTION')
        self.consume('LPAREN')
        parameters: List[str] = []
        if not self.match('RPAREN'):
            parameters.append(self.consume('IDENT').value)
            while self.match('COMMA'):
                self.advance()
                parameters.append(self.consume('IDENT').value)
        self.consume('RPAREN')
        body = self.parse_block()
        return FunctionLiteral(parameters, body)

    def parse_expression_list(self, closing: str) -> List[Expression]:
        """Parse a comma separated, possibly empty list up to and including `closing`."""
        items: List[Expression] = []
        if self.match(closing):
            self.advance()
            return items
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.match('COMMA'):
            self.advance()
            items.append(self.parse_expression(Precedence.LOWEST))
        self.consume(closing)
        return items

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        precedence = self.current_precedence()
        operator = self.advance().value
        right = self.parse_expression(precedence)
        return InfixExpression(left, operator, right)

    def parse_call_expression(self, function: Expression) -> CallExpression:
        self.consume('LPAREN')
        return CallExpression(function, self.parse_expression_list('RPAREN'))

    def parse_index_expression(self, left: Expression) -> IndexExpression:
        self.consume('LBRACKET')
        index = self.parse_expression(Precedence.LOWEST)
        self.consume('RBRACKET')
        return IndexExpression(left, index)

    def parse_assign_expression(self, target: Expression) -> AssignExpression:
        token = self.consume('ASSIGN')
        if not isinstance(target, Identifier):
            raise UnexpectedToken(token, 'an identifier before =')
        value = self.parse_expression(Precedence.LOWEST)
        return AssignExpression(target.name, value)


def parse(tokens: List[Token]) -> Program:
    """Parse a token list (as produced by `tokenize`) into a Program."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse Ember source code into a Program."""
    return parse(tokenize(source))

"""Abstract Syntax Tree (AST) definitions for the Ember language.

Every node renders back to source-equivalent text through `str()` and
can produce an independent structural copy through `clone()`. Function
values keep a clone of their body so that repeated calls never share
node instances with the tree they were defined in.

Prefix, infix, assignment, index and error expressions render fully
parenthesised, which keeps `parse(str(node))` equivalent to `node` for
the whole grammar except string literals containing a double quote.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""

    def clone(self) -> 'Node':
        raise NotImplementedError


class Expression(Node):
    pass


class Statement(Node):
    pass


###############################################################################
# Expressions
###############################################################################


@dataclass
class Identifier(Expression):
    name: str

    def clone(self) -> 'Identifier':
        return Identifier(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Expression):
    raw: str  # digits as written; converted when evaluated

    def clone(self) -> 'IntegerLiteral':
        return IntegerLiteral(self.raw)

    def __str__(self) -> str:
        return self.raw


@dataclass
class StringLiteral(Expression):
    value: str

    def clone(self) -> 'StringLiteral':
        return StringLiteral(self.value)

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def clone(self) -> 'BooleanLiteral':
        return BooleanLiteral(self.value)

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression]

    def clone(self) -> 'ArrayLiteral':
        return ArrayLiteral([el.clone() for el in self.elements])

    def __str__(self) -> str:
        return '[' + ', '.join(str(el) for el in self.elements) + ']'


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def clone(self) -> 'PrefixExpression':
        return PrefixExpression(self.operator, self.right.clone())

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def clone(self) -> 'InfixExpression':
        return InfixExpression(self.left.clone(), self.operator, self.right.clone())

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None

    def clone(self) -> 'IfExpression':
        alternative = self.alternative.clone() if self.alternative is not None else None
        return IfExpression(self.condition.clone(), self.consequence.clone(), alternative)

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass
class WhileExpression(Expression):
    condition: Expression
    body: 'BlockStatement'

    def clone(self) -> 'WhileExpression':
        return WhileExpression(self.condition.clone(), self.body.clone())

    def __str__(self) -> str:
        return f"while ({self.condition}) {self.body}"


@dataclass
class FunctionLiteral(Expression):
    parameters: List[str]
    body: 'BlockStatement'

    def clone(self) -> 'FunctionLiteral':
        return FunctionLiteral(list(self.parameters), self.body.clone())

    def __str__(self) -> str:
        return f"fn({', '.join(self.parameters)}) {self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression
    arguments: List[Expression]

    def clone(self) -> 'CallExpression':
        return CallExpression(self.function.clone(), [arg.clone() for arg in self.arguments])

    def __str__(self) -> str:
        args = ', '.join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def clone(self) -> 'IndexExpression':
        return IndexExpression(self.left.clone(), self.index.clone())

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass
class AssignExpression(Expression):
    name: str
    value: Expression

    def clone(self) -> 'AssignExpression':
        return AssignExpression(self.name, self.value.clone())

    def __str__(self) -> str:
        return f"({self.name} = {self.value})"


@dataclass
class ErrorExpression(Expression):
    value: Expression

    def clone(self) -> 'ErrorExpression':
        return ErrorExpression(self.value.clone())

    def __str__(self) -> str:
        return f"(err {self.value})"


###############################################################################
# Statements
###############################################################################


@dataclass
class LetStatement(Statement):
    name: str
    value: Expression

    def clone(self) -> 'LetStatement':
        return LetStatement(self.name, self.value.clone())

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    value: Expression

    def clone(self) -> 'ReturnStatement':
        return ReturnStatement(self.value.clone())

    def __str__(self) -> str:
        return f"ret {self.value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def clone(self) -> 'ExpressionStatement':
        return ExpressionStatement(self.expression.clone())

    def __str__(self) -> str:
        return f"{self.expression};"


@dataclass
class BlockStatement(Statement):
    """Body of `if`, `while` and `fn`. Does not open a new scope."""
    statements: List[Statement]

    def clone(self) -> 'BlockStatement':
        return BlockStatement([stmt.clone() for stmt in self.statements])

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + ' '.join(str(stmt) for stmt in self.statements) + ' }'


@dataclass
class Program(Node):
    statements: List[Statement]

    def add_statement(self, statement: Statement):
        self.statements.append(statement)

    def clone(self) -> 'Program':
        return Program([stmt.clone() for stmt in self.statements])

    def __str__(self) -> str:
        return ' '.join(str(stmt) for stmt in self.statements)

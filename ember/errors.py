from typing import Any

from lark import Token

from ember.types import inspect


class EmberError(Exception):
    """Base class for every error raised while parsing or evaluating Ember code."""


###############################################################################
# Parse errors
###############################################################################


class ParseError(EmberError):
    """Raised by the parser on the first token it cannot use."""


class UnexpectedToken(ParseError):
    def __init__(self, token: Token, expected: str = ''):
        where = f" at {token.line}:{token.column}" if token.line is not None else ''
        msg = f"unexpected token {token.value!r} ({token.type}){where}"
        if expected:
            msg += f", expected {expected}"
        super().__init__(msg)
        self.token = token
        self.expected = expected


class RanOutOfTokens(ParseError):
    def __init__(self):
        super().__init__('ran out of tokens')


###############################################################################
# Runtime errors
###############################################################################


class EvalError(EmberError):
    """Raised by the evaluator; terminal for the current evaluation."""


class IllegalOperation(EvalError):
    def __init__(self, operator: str, operand: Any):
        super().__init__(f"illegal operation {operator} on {inspect(operand)}")
        self.operator = operator
        self.operand = operand


class MixedTypeOperation(EvalError):
    def __init__(self, operator: str, left: Any, right: Any):
        super().__init__(f"mixed-type operation: {inspect(left)} {operator} {inspect(right)}")
        self.operator = operator
        self.left = left
        self.right = right


class UnexpectedObject(EvalError):
    def __init__(self, expected: str, got: Any):
        super().__init__(f"expected {expected}, got {inspect(got)}")
        self.expected = expected
        self.got = got


class UnknownIdentifier(EvalError):
    def __init__(self, name: str):
        super().__init__(f"unknown identifier {name}")
        self.name = name


class WrongArgumentCount(EvalError):
    def __init__(self, name: str, expected: Any, got: int):
        super().__init__(f"{name} expects {expected} arguments, got {got}")
        self.name = name
        self.expected = expected
        self.got = got


class NotCallable(EvalError):
    def __init__(self, value: Any):
        super().__init__(f"cannot call non-callable value {inspect(value)}")
        self.value = value


class DivisionByZero(EvalError):
    def __init__(self, operator: str):
        super().__init__('division by zero' if operator == '/' else 'modulo by zero')
        self.operator = operator


class IntegerOverflow(EvalError):
    def __init__(self, operator: str):
        super().__init__(f"integer overflow in {operator}")
        self.operator = operator

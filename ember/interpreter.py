"""Tree-walking evaluator for the Ember language.

The interpreter evaluates AST nodes directly against an `Environment`.
Early returns travel as `ReturnVal` results: a statement sequence stops
at the first one and hands it to its caller unchanged, and only a
function call (or the end of the top-level program) unwraps it. Since
`if` and `while` are expressions, a `ReturnVal` can also come back from
any sub-expression; it is then passed straight up instead of being used
as an operand, argument or binding.

Calling a user function builds a fresh environment in three layers, each
overwriting same-named bindings of the previous one:

1. a duplicate of the caller's environment,
2. the environment captured when the function literal was evaluated,
3. the parameters, bound to arguments evaluated in the caller's scope.

Integers are signed 64-bit and checked: results outside that range raise
`IntegerOverflow`. Division and modulo truncate toward zero.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .ast import (
    Node, Program, Statement, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    StringLiteral, BooleanLiteral, ArrayLiteral, PrefixExpression,
    InfixExpression, IfExpression, WhileExpression, FunctionLiteral,
    CallExpression, IndexExpression, AssignExpression, ErrorExpression,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import (
    IllegalOperation, MixedTypeOperation, UnexpectedObject,
    WrongArgumentCount, NotCallable, DivisionByZero, IntegerOverflow,
)
from .parser import parse_program
from .types import (
    IntVal, StrVal, BoolVal, ReturnVal, FunctionVal, ErrorVal, ArrayVal,
    NULL, INT_MIN, INT_MAX, native_bool, variant_equal, inspect,
)


ARITHMETIC_OPERATORS = {'+', '-', '*', '/', '%'}
RELATIONAL_OPERATORS = {'<', '>', '<=', '>='}
EQUALITY_OPERATORS = {'==', '!='}
LOGICAL_OPERATORS = {'||', '&&'}


def checked_int(value: int, operator: str) -> IntVal:
    if value < INT_MIN or value > INT_MAX:
        raise IntegerOverflow(operator)
    return IntVal(value)


def truncating_divmod(a: int, b: int):
    """Integer quotient and remainder rounding toward zero."""
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - b * quotient


class Interpreter:
    """Core interpreter that executes Ember AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'a', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        """Evaluate a whole program; a top-level `ret` yields its value."""
        if env is None:
            env = self.global_env
        self.debug(f"run program with {len(program.statements)} statements")
        result = self.execute_block(program.statements, env)
        if isinstance(result, ReturnVal):
            result = result.value
        self.debug(f"program result {inspect(result)}")
        return result

    def execute_block(self, statements: List[Statement], env: Environment) -> Any:
        result = NULL
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals
            if isinstance(result, ReturnVal):
                return result
        return result

    def execute(self, node: Statement, env: Environment) -> Any:
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if isinstance(value, ReturnVal):
                return value
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name} = {inspect(value)}")
            return NULL
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.value, env)
            if isinstance(value, ReturnVal):
                return value
            return ReturnVal(value)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, BlockStatement):
            # blocks share the enclosing scope
            return self.execute_block(node.statements, env)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        # Evaluate expression nodes
        if isinstance(node, IntegerLiteral):
            return checked_int(int(node.raw), 'integer literal')
        if isinstance(node, StringLiteral):
            return StrVal(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool(node.value)
        if isinstance(node, Identifier):
            return env.get(node.name)
        if isinstance(node, PrefixExpression):
            operand = self.evaluate(node.right, env)
            if isinstance(operand, ReturnVal):
                return operand
            return self.apply_prefix_op(node.operator, operand)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if isinstance(left, ReturnVal):
                return left
            right = self.evaluate(node.right, env)
            if isinstance(right, ReturnVal):
                return right
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, IfExpression):
            cond = self.evaluate(node.condition, env)
            if isinstance(cond, ReturnVal):
                return cond
            if not isinstance(cond, BoolVal):
                raise UnexpectedObject('Bool', cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {node.condition} -> {inspect(cond)}")
            if cond.value:
                return self.execute_block(node.consequence.statements, env)
            if node.alternative is not None:
                return self.execute_block(node.alternative.statements, env)
            return NULL
        if isinstance(node, WhileExpression):
            result = NULL
            while True:
                cond = self.evaluate(node.condition, env)
                if isinstance(cond, ReturnVal):
                    return cond
                if not isinstance(cond, BoolVal):
                    raise UnexpectedObject('Bool', cond)
                if self.debug_level >= 3:
                    self.debug(f"while condition {node.condition} -> {inspect(cond)}")
                if not cond.value:
                    return result
                result = self.execute_block(node.body.statements, env)
                if isinstance(result, ReturnVal):
                    return result
        if isinstance(node, AssignExpression):
            value = self.evaluate(node.value, env)
            if isinstance(value, ReturnVal):
                return value
            env.set(node.name, value)
            return value
        if isinstance(node, ErrorExpression):
            value = self.evaluate(node.value, env)
            if isinstance(value, ReturnVal):
                return value
            return ErrorVal(value)
        if isinstance(node, ArrayLiteral):
            items = self.evaluate_all(node.elements, env)
            if isinstance(items, ReturnVal):
                return items
            return ArrayVal(tuple(items))
        if isinstance(node, IndexExpression):
            target = self.evaluate(node.left, env)
            if isinstance(target, ReturnVal):
                return target
            index = self.evaluate(node.index, env)
            if isinstance(index, ReturnVal):
                return index
            if not isinstance(target, ArrayVal):
                raise IllegalOperation('[]', target)
            if not isinstance(index, IntVal):
                raise IllegalOperation('[]', index)
            if index.value < 0 or index.value >= len(target.items):
                return NULL
            return target.items[index.value]
        if isinstance(node, FunctionLiteral):
            return FunctionVal(list(node.parameters), node.body.clone(), env.duplicate())
        if isinstance(node, CallExpression):
            func = self.evaluate(node.function, env)
            if isinstance(func, ReturnVal):
                return func
            return self.call_function(func, node.arguments, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_all(self, nodes: List[Node], env: Environment) -> Any:
        """Evaluate `nodes` left to right; stops at and returns the first `ReturnVal`."""
        values = []
        for node in nodes:
            value = self.evaluate(node, env)
            if isinstance(value, ReturnVal):
                return value
            values.append(value)
        return values

    def call_function(self, func: Any, arguments: List[Node], env: Environment) -> Any:
        if isinstance(func, BuiltinFunction):
            args = self.evaluate_all(arguments, env)
            if isinstance(args, ReturnVal):
                return args
            # Check arity; None means the function checks its own arguments
            if func.arity is not None and len(args) != func.arity:
                raise WrongArgumentCount(func.name, func.arity, len(args))
            if self.debug_level >= 2:
                self.debug(f"call builtin {func.name}({', '.join(inspect(a) for a in args)})")
            return func.fn(args)
        if isinstance(func, FunctionVal):
            # Check argument count before touching the body
            if len(arguments) != len(func.parameters):
                raise WrongArgumentCount('fn', len(func.parameters), len(arguments))
            args = self.evaluate_all(arguments, env)
            if isinstance(args, ReturnVal):
                return args
            call_env = env.duplicate()
            call_env.update(func.env)
            for name, value in zip(func.parameters, args):
                call_env.set(name, value)
            if self.debug_level >= 2:
                params = ', '.join(f"{n}={inspect(v)}" for n, v in zip(func.parameters, args))
                self.debug(f"call fn({params})")
            result = self.execute_block(func.body.statements, call_env)
            if isinstance(result, ReturnVal):
                return result.value
            return result
        raise NotCallable(func)

    def apply_prefix_op(self, op: str, operand: Any) -> Any:
        if op == '-' and isinstance(operand, IntVal):
            return checked_int(-operand.value, op)
        if op == '!' and isinstance(operand, BoolVal):
            return native_bool(not operand.value)
        raise IllegalOperation(op, operand)

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if not variant_equal(a, b):
            raise MixedTypeOperation(op, a, b)
        if op == '+' and isinstance(a, StrVal):
            return StrVal(a.value + b.value)
        if op in ARITHMETIC_OPERATORS:
            if not isinstance(a, IntVal):
                raise IllegalOperation(op, a)
            x, y = a.value, b.value
            if op == '+':
                return checked_int(x + y, op)
            if op == '-':
                return checked_int(x - y, op)
            if op == '*':
                return checked_int(x * y, op)
            if y == 0:
                raise DivisionByZero(op)
            quotient, remainder = truncating_divmod(x, y)
            return checked_int(quotient if op == '/' else remainder, op)
        if op in RELATIONAL_OPERATORS:
            if not isinstance(a, IntVal):
                raise IllegalOperation(op, a)
            if op == '<':
                return native_bool(a.value < b.value)
            if op == '>':
                return native_bool(a.value > b.value)
            if op == '<=':
                return native_bool(a.value <= b.value)
            return native_bool(a.value >= b.value)
        if op in EQUALITY_OPERATORS:
            if not isinstance(a, (IntVal, BoolVal, StrVal)):
                raise IllegalOperation(op, a)
            eq = a.value == b.value
            return native_bool(eq if op == '==' else not eq)
        if op in LOGICAL_OPERATORS:
            if not isinstance(a, BoolVal):
                raise IllegalOperation(op, a)
            if op == '&&':
                return native_bool(a.value and b.value)
            return native_bool(a.value or b.value)
        raise IllegalOperation(op, a)


def evaluate(program: Program, env: Environment, debug_level: int = 0) -> Any:
    """Evaluate a parsed program against `env` and return its final value."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program, env)
    finally:
        interpreter.close()


def evaluate_node(node: Statement, env: Environment, unwrap_return: bool) -> Any:
    """Evaluate a single statement, optionally unwrapping a `ret` signal."""
    result = Interpreter().execute(node, env)
    if unwrap_return and isinstance(result, ReturnVal):
        return result.value
    return result


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> Any:
    """Convenience function to parse and run an Ember program from a source string."""
    program = parse_program(source)
    return evaluate(program, env if env is not None else Environment(), debug_level)

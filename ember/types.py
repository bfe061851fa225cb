"""Runtime values for Ember.

Every value the interpreter produces is one of the frozen dataclasses
below. They are immutable, so handing the same instance to two bindings
behaves exactly like copying it; the only mutable piece of state a value
can reach is the captured `Environment` of a `FunctionVal`, which is a
private duplicate made when the function literal is evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple, TYPE_CHECKING

from .builtin_function import BuiltinFunction

if TYPE_CHECKING:
    from .ast import BlockStatement
    from .environment import Environment


INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class IntVal:
    value: int


@dataclass(frozen=True)
class StrVal:
    value: str


@dataclass(frozen=True)
class BoolVal:
    value: bool


@dataclass(frozen=True)
class NullVal:
    pass


@dataclass(frozen=True)
class ReturnVal:
    """Signal wrapping the value of a `ret` statement.

    It bubbles out of nested blocks untouched and is unwrapped only at a
    function call boundary (or at the end of the top-level program).
    """
    value: Any


@dataclass(frozen=True, eq=False)
class FunctionVal:
    parameters: List[str]
    body: 'BlockStatement'
    env: 'Environment' = field(repr=False)


@dataclass(frozen=True)
class ErrorVal:
    """First-class error value produced by `err expr` or by a built-in.

    It is never raised; it flows through bindings and returns like any
    other value.
    """
    value: Any


@dataclass(frozen=True)
class ArrayVal:
    items: Tuple[Any, ...]


NULL = NullVal()
TRUE = BoolVal(True)
FALSE = BoolVal(False)

_TYPE_NAMES = {
    IntVal: 'Int',
    StrVal: 'String',
    BoolVal: 'Bool',
    NullVal: 'Null',
    ReturnVal: 'Return',
    FunctionVal: 'Function',
    ErrorVal: 'Error',
    BuiltinFunction: 'BuiltIn',
    ArrayVal: 'Array',
}


def native_bool(value: bool) -> BoolVal:
    return TRUE if value else FALSE


def variant_equal(a: Any, b: Any) -> bool:
    """True if both values are the same kind of value, whatever their payload."""
    return type(a) is type(b)


def type_name(value: Any) -> str:
    """Return the Ember type name of a runtime value."""
    return _TYPE_NAMES.get(type(value), type(value).__name__)


def to_string(value: Any) -> str:
    """Convert a value to the plain text used by `print` and `str`.

    Unlike `inspect`, strings are not quoted.
    """
    if isinstance(value, StrVal):
        return value.value
    if isinstance(value, ReturnVal):
        return to_string(value.value)
    if isinstance(value, ErrorVal):
        return to_string(value.value)
    return inspect(value)


def inspect(value: Any) -> str:
    """Render a value the way the REPL displays results."""
    if isinstance(value, BoolVal):
        return 'true' if value.value else 'false'
    if isinstance(value, IntVal):
        return str(value.value)
    if isinstance(value, StrVal):
        return f'"{value.value}"'
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, ReturnVal):
        return f"ret {inspect(value.value)}"
    if isinstance(value, FunctionVal):
        return 'fn'
    if isinstance(value, ErrorVal):
        return f"err: {inspect(value.value)}"
    if isinstance(value, BuiltinFunction):
        return 'build_in'
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(inspect(item) for item in value.items) + ']'
    return repr(value)

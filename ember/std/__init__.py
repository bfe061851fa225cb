"""The built-in function table.

`BUILTINS` is assembled once at import and exposed read-only; every
`Environment` refers to this same mapping.
"""

import re
from types import MappingProxyType
from typing import Any, List

from ember.builtin_function import BuiltinFunction
from ember.errors import IllegalOperation
from ember.types import (
    IntVal, StrVal, ArrayVal, ErrorVal, INT_MIN, INT_MAX, to_string, type_name,
)
from .io import BasicIO, populate_io_builtins

# ASCII digits with an optional leading minus, nothing else
INT_PATTERN = re.compile(r'-?[0-9]+')


def std_len(args: List[Any]) -> Any:
    obj = args[0]
    if isinstance(obj, StrVal):
        return IntVal(len(obj.value))
    if isinstance(obj, ArrayVal):
        return IntVal(len(obj.items))
    raise IllegalOperation('len', obj)


def std_int(args: List[Any]) -> Any:
    obj = args[0]
    if isinstance(obj, IntVal):
        return obj
    if not isinstance(obj, StrVal):
        raise IllegalOperation('int', obj)
    if not INT_PATTERN.fullmatch(obj.value):
        return ErrorVal(StrVal(f"cannot parse int from {obj.value!r}"))
    value = int(obj.value)
    if value < INT_MIN or value > INT_MAX:
        return ErrorVal(StrVal(f"integer out of range: {obj.value}"))
    return IntVal(value)


def std_str(args: List[Any]) -> Any:
    return StrVal(to_string(args[0]))


def std_type(args: List[Any]) -> Any:
    return StrVal(type_name(args[0]))


def std_push(args: List[Any]) -> Any:
    array, item = args
    if not isinstance(array, ArrayVal):
        raise IllegalOperation('push', array)
    return ArrayVal(array.items + (item,))


def _build_table():
    table = {
        'len': BuiltinFunction('len', 1, std_len),
        'int': BuiltinFunction('int', 1, std_int),
        'str': BuiltinFunction('str', 1, std_str),
        'type': BuiltinFunction('type', 1, std_type),
        'push': BuiltinFunction('push', 2, std_push),
    }
    table.update(populate_io_builtins(BasicIO()))
    return MappingProxyType(table)


BUILTINS = _build_table()

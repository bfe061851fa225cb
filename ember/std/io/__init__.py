from .basic_io import BasicIO
from ember.builtin_function import BuiltinFunction
from ember.errors import WrongArgumentCount
from ember.types import StrVal, to_string
from typing import Any, Dict, List


def populate_io_builtins(basic_io: BasicIO) -> Dict[str, BuiltinFunction]:
        def std_print(args: List[Any]) -> Any:
            text = ''.join(to_string(a) for a in args)
            basic_io.write_line(text)
            return StrVal(text)

        def std_input(args: List[Any]) -> Any:
            if len(args) > 1:
                raise WrongArgumentCount('input', '0 or 1', len(args))
            prompt = to_string(args[0]) if args else ''
            return StrVal(basic_io.read_line(prompt).strip())

        return {
            'print': BuiltinFunction('print', None, std_print),
            'input': BuiltinFunction('input', None, std_input),
        }

from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass(frozen=True, eq=False)
class BuiltinFunction:
    """A native callable resolved through the built-in table.

    `arity` is the exact number of arguments the interpreter checks before
    dispatching; None means the function validates its own arguments.
    """
    name: str
    arity: Optional[int]
    fn: Callable[[List[Any]], Any]

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"

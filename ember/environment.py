from typing import Any, Dict, Mapping, Optional

from ember.errors import UnknownIdentifier
from ember.std import BUILTINS


class Environment:
    """A lexical scope: variable bindings plus the read-only built-in table.

    Environments are never shared between call frames or closures. Every
    capture or call works on a `duplicate()`, so mutating one scope can
    never be observed through another.
    """
    def __init__(self, store: Optional[Dict[str, Any]] = None, builtins: Mapping[str, Any] = BUILTINS):
        self.store: Dict[str, Any] = dict(store) if store else {}
        self.builtins = builtins

    def get_builtin(self, name: str) -> Optional[Any]:
        return self.builtins.get(name)

    def get(self, name: str) -> Any:
        # built-ins shadow user bindings of the same name
        builtin = self.get_builtin(name)
        if builtin is not None:
            return builtin
        if name in self.store:
            return self.store[name]
        raise UnknownIdentifier(name)

    def set(self, name: str, value: Any):
        self.store[name] = value

    def update(self, other: 'Environment'):
        """Overlay every binding of `other`, overwriting same-named ones."""
        self.store.update(other.store)

    def duplicate(self) -> 'Environment':
        return Environment(self.store, self.builtins)

    def __repr__(self) -> str:
        return f"Environment({sorted(self.store)})"

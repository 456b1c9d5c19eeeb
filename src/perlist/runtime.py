## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any

from .types import PersistentList, nil
from .errors import ListNameError
from .parser import parse
from .formatting import to_persistent as _to_persistent, from_persistent as _from_persistent
from .interpreter import interpret, bind as _bind, drop as _drop


class Session:
    """Minimal facade holding named list handles, for embedding and the `eval` command."""

    def __init__(self):
        self.bindings: dict[str, Any] = {}

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, filename: str | None = None, verbosity: int = 0, stats: dict | None = None):
        return interpret(parse(source, filename=filename), self.bindings, verbosity=verbosity, stats=stats)

    # Bindings ────────────────────────────────────────────────────────────────────────────────
    def bind(self, name: str, value) -> None:
        """Store a handle of its own under `name`; the caller keeps theirs."""
        _bind(self.bindings, name, value.clone() if isinstance(value, PersistentList) else value)

    def lookup(self, name: str):
        if name not in self.bindings:
            raise ListNameError(f"Name `{name}` is not bound in this session.", list_token=name)
        value = self.bindings[name]
        return value.clone() if isinstance(value, PersistentList) else value

    def drop(self, name: str) -> None:
        _drop(self.bindings, name)

    def names(self) -> list[str]:
        return sorted(self.bindings)

    def clear(self) -> None:
        for name in list(self.bindings):
            _drop(self.bindings, name)

    # Conversion ──────────────────────────────────────────────────────────────────────────────
    def to_list(self, values) -> PersistentList:
        return _to_persistent(values)

    def from_list(self, lst: PersistentList) -> list:
        return _from_persistent(lst)

    def empty(self) -> PersistentList:
        return nil

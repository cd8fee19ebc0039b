"""Runtime environment for mal.

The Environment stores bindings of Symbols to evaluated values and supports
nested lexical scopes via an `outer` link. A frame's `outer` is fixed when the
frame is created; closures keep a reference to their defining frame, so later
definitions in that frame are visible to them.
"""

from __future__ import annotations

from typing import Optional

from mal import LispValue
from mal.types.errors import MalInvalidSymbol, MalUnboundSymbol
from mal.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, shadowing any outer binding.

        Raises MalInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise MalInvalidSymbol(f"Cannot define {name!r} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, innermost frame first."""
        env = self.find(name)
        if env is None:
            raise MalUnboundSymbol(f"'{name}' not found")
        return env.vars[name]

    def child(self, bindings: dict[Symbol, LispValue] | None = None) -> Environment:
        """Create a new frame whose outer link is this one."""
        env = Environment(outer=self)
        if bindings:
            env.update(bindings)
        return env

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

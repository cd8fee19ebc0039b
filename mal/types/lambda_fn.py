"""Closure representation for mal functions and macros."""

from __future__ import annotations

from typing import Sequence

from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.symbol import Symbol


class Lambda:
    """A first-class closure with formal parameters, body, and defining env.

    Macros are Lambdas with `is_macro` set; `defmacro!` binds a flagged copy
    so the original function value stays an ordinary function.
    """

    __slots__ = ("formals", "body", "env", "is_macro")

    def __init__(
        self,
        formals: Sequence[Symbol],
        body: SExpression,
        env: Environment,
        is_macro: bool = False,
    ):
        self.formals: list[Symbol] = list(formals)
        self.body: SExpression = body
        self.env: Environment = env
        self.is_macro: bool = is_macro

    def as_macro(self) -> Lambda:
        return Lambda(self.formals, self.body, self.env, is_macro=True)

    def __str__(self) -> str:
        return "#<macro>" if self.is_macro else "#<function>"

    def __repr__(self) -> str:
        params = " ".join(str(f) for f in self.formals)
        kind = "macro" if self.is_macro else "fn*"
        return f"<Lambda {kind} ({params})>"

    def extend_env(self, args: list[LispValue]) -> Environment:
        """
        Bind the given argument values to this lambda's formal parameters and
        return a new Environment for evaluating the body.
        """
        from mal.types.bind import bind_arguments
        return bind_arguments(self.formals, args, self.env)

from __future__ import annotations

from mal import SExpression, LispValue, EvaluatorFn
from mal.types.environment import Environment


class TailCall:
    """A pending evaluation of `expr` in `env`, returned from tail position."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: SExpression, env: Environment):
        self.expr = expr
        self.env = env


def resolve(evaluate_fn: EvaluatorFn, result: LispValue | TailCall) -> LispValue:
    """Step the trampoline until a concrete value is produced."""
    while isinstance(result, TailCall):
        result = evaluate_fn(result.expr, result.env, True)
    return result

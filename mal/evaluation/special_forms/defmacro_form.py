"""Special form: defmacro!.

Evaluates a function expression and binds a macro-flagged copy of it.
"""

from __future__ import annotations

from mal import EvaluatorFn, SExpression, LispValue
from mal.types.environment import Environment
from mal.types.errors import MalInvalidArguments
from mal.types.lambda_fn import Lambda
from mal.types.symbol import Symbol


def defmacro_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(defmacro! name fn-expr): register a macro named by the first argument."""
    if len(tail) != 2:
        raise MalInvalidArguments("defmacro!", "expected a name and a function")

    macro_name, fn_expr = tail
    if not isinstance(macro_name, Symbol):
        raise MalInvalidArguments("defmacro!", f"cannot bind {macro_name!r}")
    fn = evaluate_fn(fn_expr, env)
    if not isinstance(fn, Lambda):
        raise MalInvalidArguments("defmacro!", "macro body must be a fn*")

    macro = fn.as_macro()
    env.define(macro_name, macro)
    return macro

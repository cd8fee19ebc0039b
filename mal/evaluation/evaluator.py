"""Core evaluator and trampoline for the mal interpreter.

Implements macro expansion, special-form dispatch, and tail-call aware
application via a simple trampoline using TailCall objects.

`evaluate0(expr, env, is_tail_call=False)` never returns a TailCall when
`is_tail_call` is false, so special forms evaluate non-tail subforms with a
plain `evaluate_fn(expr, env)` and pass the flag through only for forms in
tail position.
"""

from __future__ import annotations

from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.sequences import List, Vector
from mal.types.symbol import Symbol
from mal.types.tail_call import TailCall, resolve
from mal.evaluation.apply import apply
from mal.evaluation.macros import macroexpand
from mal.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Trampoline evaluator: tail-call aware evaluation.
    """
    return resolve(evaluate0, evaluate0(expr, env, True))  # Start in 'tail' mode.


def evaluate0(
    expr: SExpression,
    env: Environment,
    is_tail_call: bool = False,
) -> LispValue | TailCall:
    """
    Core evaluator: single-step evaluation with tail-call awareness.
    Returns either a value or, in tail position, a TailCall.
    """
    if isinstance(expr, List) and expr:
        expr = macroexpand(expr, env, evaluate0)

    match expr:
        case List() if expr:
            head, *tail_args = expr
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](tail_args, env, evaluate0, is_tail_call)

            fn = evaluate0(head, env)
            args = [evaluate0(arg, env) for arg in tail_args]
            return apply(fn, args, env, evaluate0, is_tail_call)

        case Symbol():
            return env.lookup(expr)

        case Vector():
            return Vector(evaluate0(x, env) for x in expr)

        case dict():
            return {k: evaluate0(v, env) for k, v in expr.items()}

    # --- Everything else (numbers, strings, nil, booleans, (), functions, atoms) ---
    return expr

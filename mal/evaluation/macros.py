"""Macro expansion.

Macros are Lambdas flagged with `is_macro`, bound in the Environment like any
other value, so they are lexically scoped. A macro call is a List whose head
symbol resolves to such a Lambda; expansion applies the macro to the
unevaluated argument forms and repeats until the head is no longer a macro.
"""

from __future__ import annotations

import logging

from mal import SExpression, EvaluatorFn
from mal.types.environment import Environment
from mal.types.lambda_fn import Lambda
from mal.types.sequences import List
from mal.types.symbol import Symbol
from mal.evaluation.apply import apply_lambda

logger = logging.getLogger(__name__)


def find_macro(form: SExpression, env: Environment) -> Lambda | None:
    """Return the macro named by the head of `form`, if there is one."""
    if isinstance(form, List) and form and isinstance(form[0], Symbol):
        owner = env.find(form[0])
        if owner is not None:
            value = owner.vars[form[0]]
            if isinstance(value, Lambda) and value.is_macro:
                return value
    return None


def expand_1(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand only the head-position macro if present."""
    macro = find_macro(form, env)
    if macro is None:
        return form
    logger.debug("expanding macro %s", form[0])
    return apply_lambda(macro, list(form[1:]), evaluate_fn, False)


def macroexpand(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand head-position macros to a fixed point."""
    while find_macro(form, env) is not None:
        form = expand_1(form, env, evaluate_fn)
    return form

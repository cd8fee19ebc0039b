"""Special form that exposes the macro expander to mal code.

(macroexpand form): fully expand the head of `form` and return the expansion
without evaluating it. The argument itself is not evaluated.
"""

from mal import SExpression, EvaluatorFn
from mal.types.errors import MalInvalidArguments
from mal.evaluation.macros import macroexpand


def macroexpand_form(
    tail: list[SExpression], env, evaluate_fn: EvaluatorFn, is_tail_call: bool
):
    if len(tail) != 1:
        raise MalInvalidArguments("macroexpand", "expected exactly 1 argument")
    return macroexpand(tail[0], env, evaluate_fn)

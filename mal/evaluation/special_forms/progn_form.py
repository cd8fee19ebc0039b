from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.nil import Nil


def progn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if not tail:
        return Nil
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return evaluate_fn(tail[-1], env, is_tail_call)

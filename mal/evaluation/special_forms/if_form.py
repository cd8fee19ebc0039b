from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.errors import MalInvalidArguments
from mal.types.nil import Nil
from mal.types.values import is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise MalInvalidArguments("if", "expected a condition, a then-expression and an optional else")

    cond = evaluate_fn(tail[0], env)
    if is_truthy(cond):
        return evaluate_fn(tail[1], env, is_tail_call)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, is_tail_call)
    else:
        return Nil

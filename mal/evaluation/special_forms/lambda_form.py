from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.errors import MalInvalidArguments
from mal.types.lambda_fn import Lambda
from mal.types.nil import Nil
from mal.types.sequences import List
from mal.types.symbol import Symbol
from mal.types.values import is_sequential


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    # (fn* params body...) allows zero or more body forms.
    # Several forms are wrapped in an implicit `do`; none evaluates to nil.
    if not tail or not is_sequential(tail[0]):
        raise MalInvalidArguments("fn*", "expected a parameter list")

    params = tail[0]
    for p in params:
        if not isinstance(p, Symbol):
            raise MalInvalidArguments("fn*", f"parameter must be a Symbol, got {p!r}")
    body_forms = tail[1:]

    if not body_forms:
        body = Nil
    elif len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = List([Symbol("do"), *body_forms])

    return Lambda(params, body, env)

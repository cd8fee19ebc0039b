from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.errors import MalInvalidArguments
from mal.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """
    (def! name value)
    Binds in the current frame and returns the value. The value expression is
    never in tail position since the binding happens after it is evaluated.
    """
    if len(tail) != 2:
        raise MalInvalidArguments("def!", "expected a name and a value")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise MalInvalidArguments("def!", f"cannot bind {name!r}")
    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return value

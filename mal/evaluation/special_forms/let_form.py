from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.errors import MalInvalidArguments
from mal.types.symbol import Symbol
from mal.types.values import is_sequential
from mal.evaluation.special_forms.progn_form import progn_form


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """
    (let* (name1 expr1 name2 expr2 ...) body...)
    Bindings are evaluated in order inside the new frame, so later
    expressions see earlier names. The body runs as an implicit `do`.
    """
    if not tail or not is_sequential(tail[0]):
        raise MalInvalidArguments("let*", "expected a binding list")
    bindings = tail[0]
    if len(bindings) % 2 != 0:
        raise MalInvalidArguments("let*", "bindings must come in name/value pairs")

    let_env = env.child()
    for name, val_expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise MalInvalidArguments("let*", f"cannot bind {name!r}")
        let_env.define(name, evaluate_fn(val_expr, let_env))

    return progn_form(tail[1:], let_env, evaluate_fn, is_tail_call)

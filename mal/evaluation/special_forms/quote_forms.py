"""Special forms: quote, quasiquote and quasiquoteexpand.

Quasiquote is implemented by rewriting the template into calls to the
`cons`, `concat` and `vec` primitives and then evaluating that code:

    `(a ~b ~@c)   =>   (cons (quote a) (cons b (concat c ())))
    `[a ~b]       =>   (vec (cons (quote a) (cons b ())))
"""

from mal import SExpression, LispValue, EvaluatorFn
from mal.types.errors import MalInvalidArguments
from mal.types.sequences import EMPTY_LIST, List, Vector
from mal.types.symbol import Symbol

_UNQUOTE = Symbol("unquote")
_SPLICE_UNQUOTE = Symbol("splice-unquote")


def _is_pair_headed(form: SExpression, head: Symbol) -> bool:
    return isinstance(form, List) and len(form) == 2 and form[0] == head


def _expand_elements(elements: tuple) -> SExpression:
    acc: SExpression = EMPTY_LIST
    for elt in reversed(elements):
        if _is_pair_headed(elt, _SPLICE_UNQUOTE):
            acc = List([Symbol("concat"), elt[1], acc])
        else:
            acc = List([Symbol("cons"), expand_quasiquote(elt), acc])
    return acc


def expand_quasiquote(form: SExpression) -> SExpression:
    """Rewrite a quasiquote template into constructor code."""
    if isinstance(form, List):
        if _is_pair_headed(form, _UNQUOTE):
            return form[1]
        return _expand_elements(form)
    if isinstance(form, Vector):
        return List([Symbol("vec"), _expand_elements(form)])
    if isinstance(form, (Symbol, dict)):
        return List([Symbol("quote"), form])
    return form


def quote_form(
    tail: list[SExpression], env, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    if len(tail) != 1:
        raise MalInvalidArguments("quote", "expected exactly 1 argument")
    return tail[0]


def quasiquote_form(
    tail: list[SExpression],
    env,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) != 1:
        raise MalInvalidArguments("quasiquote", "expected exactly 1 argument")
    return evaluate_fn(expand_quasiquote(tail[0]), env, is_tail_call)


def quasiquoteexpand_form(
    tail: list[SExpression], env, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    if len(tail) != 1:
        raise MalInvalidArguments("quasiquoteexpand", "expected exactly 1 argument")
    return expand_quasiquote(tail[0])

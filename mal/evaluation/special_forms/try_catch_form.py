# try*/catch* handling
# Usage:
#
#   (try* (throw {"code" 42})
#     (catch* e (get e "code")))          ; => 42
#
#   (try* (nth (list 1 2) 5)
#     (catch* e (string? e)))             ; => true
#
# Values raised with `throw` are bound as they are; every other MalError is
# bound as its message string. A host stack overflow from deep non-tail
# recursion is caught too and bound as RECURSION_LIMIT_MESSAGE.

import logging

from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.types.environment import Environment
from mal.types.errors import (
    RECURSION_LIMIT_MESSAGE,
    MalError,
    MalException,
    MalInvalidArguments,
)
from mal.types.sequences import List
from mal.types.symbol import Symbol

logger = logging.getLogger(__name__)

_CATCH = Symbol("catch*")


def try_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """
    (try* body (catch* name handler))

    The body is evaluated to completion before leaving the `try`, so a tail
    call inside it cannot escape the handler. The handler runs in a child
    frame binding `name` and is in tail position.
    """
    if len(tail) not in (1, 2):
        raise MalInvalidArguments("try*", "expected a body and an optional catch* clause")

    body_expr = tail[0]
    if len(tail) == 1:
        return evaluate_fn(body_expr, env, is_tail_call)

    clause = tail[1]
    if not (
        isinstance(clause, List)
        and len(clause) == 3
        and clause[0] == _CATCH
        and isinstance(clause[1], Symbol)
    ):
        raise MalInvalidArguments("catch*", "expected (catch* name handler)")
    _, error_var, handler_expr = clause

    try:
        return evaluate_fn(body_expr, env)
    except MalException as ex:
        caught = ex.value
    except MalError as ex:
        caught = str(ex)
    except RecursionError:
        caught = RECURSION_LIMIT_MESSAGE
    logger.debug("try* caught %r", caught)

    handler_env = env.child({error_var: caught})
    return evaluate_fn(handler_expr, handler_env, is_tail_call)

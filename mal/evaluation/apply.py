"""Application engine for mal.

Centralizes function application for the evaluator, special forms and the
primitives that call back into user code (`apply`, `map`, `swap!`):
- Closures (Lambda) bind a child frame and continue with their body, as a
  TailCall when the call is in tail position.
- Primitives are Python callables invoked as `fn(env, args)`.
"""

from __future__ import annotations

from typing import Callable

from mal import LispValue, EvaluatorFn
from mal.types.environment import Environment
from mal.types.errors import MalError
from mal.types.lambda_fn import Lambda
from mal.types.tail_call import TailCall, resolve


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool,
) -> LispValue | TailCall:
    """Apply a closure to already-evaluated arguments.

    Arity mismatches raise MalInvalidArguments from the binder. In tail
    position the body is handed back to the trampoline instead of being
    evaluated here, so self-recursion runs in constant Python stack.
    """
    new_env = fn.extend_env(args)
    if is_tail_call:
        return TailCall(fn.body, new_env)
    return resolve(evaluate_fn, evaluate_fn(fn.body, new_env, True))


def apply(
    head: Lambda | Callable[[Environment, list[LispValue]], LispValue] | object,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    tail: bool = False,
) -> LispValue | TailCall:
    """Apply either a Lambda or a Python callable; anything else is an error."""
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn, tail)
    elif callable(head):
        return head(env, args)
    else:
        from mal.printer import pr_str
        raise MalError(f"{pr_str(head)} is not a function")

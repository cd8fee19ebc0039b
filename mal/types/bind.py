from __future__ import annotations

from typing import Sequence

from mal import LispValue
from mal.types.environment import Environment
from mal.types.errors import MalInvalidArguments
from mal.types.sequences import List
from mal.types.symbol import Symbol

VARIADIC_MARKER = Symbol("&")


def bind_arguments(
    formals: Sequence[Symbol],
    supplied_args: Sequence[LispValue],
    closure_env: Environment,
) -> Environment:
    """
    Single source of truth for parameter binding.

    Supports:
    - Positional required parameters
    - `&` followed by one name, capturing remaining supplied args as a List

    Returns a new Environment whose outer is `closure_env`, populated with
    the bindings for evaluating the callee body. Arity mismatches raise
    MalInvalidArguments before any binding is visible to the caller.
    """
    formals = list(formals)
    supplied = list(supplied_args)
    local_env = Environment(outer=closure_env)

    if VARIADIC_MARKER in formals:
        split = formals.index(VARIADIC_MARKER)
        required, rest = formals[:split], formals[split + 1:]
        if len(rest) != 1:
            raise MalInvalidArguments("fn*", "'&' must be followed by exactly one name")
        if len(supplied) < len(required):
            raise MalInvalidArguments(
                "fn*", f"expected at least {len(required)} argument(s), got {len(supplied)}"
            )
        for formal, value in zip(required, supplied):
            local_env.define(formal, value)
        local_env.define(rest[0], List(supplied[len(required):]))
        return local_env

    if len(supplied) != len(formals):
        raise MalInvalidArguments(
            "fn*", f"expected {len(formals)} argument(s), got {len(supplied)}"
        )
    for formal, value in zip(formals, supplied):
        local_env.define(formal, value)
    return local_env

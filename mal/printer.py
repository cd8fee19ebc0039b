"""Render mal values as text.

`pr_str(value, print_readably=True)` produces text the reader turns back into
an equal value; with `print_readably=False` strings are emitted raw, which is
what `str` and `println` show.
"""

from __future__ import annotations

from mal import LispValue
from mal.types.atom import Atom
from mal.types.keyword import is_keyword, keyword_name
from mal.types.lambda_fn import Lambda
from mal.types.nil import Nil
from mal.types.sequences import List, Vector
from mal.types.symbol import Symbol

_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n"})


def escape(text: str) -> str:
    return '"' + text.translate(_ESCAPES) + '"'


def pr_str(value: LispValue, print_readably: bool = True) -> str:
    match value:
        case _ if value is Nil:
            return "nil"
        case True:
            return "true"
        case False:
            return "false"
        case int():
            return str(value)
        case str() if is_keyword(value):
            return ":" + keyword_name(value)
        case str():
            return escape(value) if print_readably else value
        case Symbol():
            return value.id
        case List():
            return "(" + _join(value, print_readably) + ")"
        case Vector():
            return "[" + _join(value, print_readably) + "]"
        case dict():
            items = (
                f"{pr_str(k, print_readably)} {pr_str(v, print_readably)}"
                for k, v in value.items()
            )
            return "{" + " ".join(items) + "}"
        case Atom():
            return f"(atom {pr_str(value.val, print_readably)})"
        case Lambda():
            return str(value)
        case _ if callable(value):
            return "#<function>"
    return repr(value)


def _join(values, print_readably: bool) -> str:
    return " ".join(pr_str(v, print_readably) for v in values)

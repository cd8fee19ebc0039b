"""Tag tests over the closed set of mal value representations.

| mal variant | Python representation                        |
|-------------|----------------------------------------------|
| nil         | mal.types.nil.Nil                            |
| boolean     | True / False                                 |
| number      | int (never bool)                             |
| string      | str (keywords carry KEYWORD_PREFIX)          |
| symbol      | mal.types.symbol.Symbol                      |
| list        | mal.types.sequences.List                     |
| vector      | mal.types.sequences.Vector                   |
| hash-map    | dict with str keys                           |
| function    | Lambda, or a Python callable (env, args)     |
| atom        | mal.types.atom.Atom                          |
"""

from __future__ import annotations

from mal import LispValue
from mal.types.keyword import is_keyword
from mal.types.lambda_fn import Lambda
from mal.types.nil import Nil
from mal.types.sequences import List, Vector


def is_number(x: LispValue) -> bool:
    # bool is an int subclass in Python but a distinct mal type
    return isinstance(x, int) and not isinstance(x, bool)


def is_string(x: LispValue) -> bool:
    return isinstance(x, str) and not is_keyword(x)


def is_sequential(x: LispValue) -> bool:
    return isinstance(x, (List, Vector))


def is_function(x: LispValue) -> bool:
    if isinstance(x, Lambda):
        return True
    return callable(x) and not isinstance(x, type)


def is_truthy(x: LispValue) -> bool:
    """Only nil and false are falsy."""
    return not (x is Nil or x is False)


def is_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality; List and Vector compare equal element-wise."""
    if a is b:
        return True
    if is_sequential(a) and is_sequential(b):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(is_equal(v, b[k]) for k, v in a.items())
    if type(a) != type(b):
        return False
    # Symbols compare by name; functions and atoms by identity
    return a == b

"""Keywords are strings carrying a reserved leading sentinel character.

The sentinel cannot be produced by an ordinary string literal, so `:foo` and
`"foo"` never collide as map keys, while keywords still behave as strings
everywhere else (equality, hashing, map keys).
"""

from __future__ import annotations

KEYWORD_PREFIX = "ʞ"


def keyword(name: str) -> str:
    """Return the keyword for `name`; already-prefixed names are returned unchanged."""
    if name.startswith(KEYWORD_PREFIX):
        return name
    return KEYWORD_PREFIX + name


def is_keyword(value: object) -> bool:
    return isinstance(value, str) and value.startswith(KEYWORD_PREFIX)


def keyword_name(value: str) -> str:
    return value[len(KEYWORD_PREFIX):]

"""Symbols name bindings in an Environment.

Two symbols with the same spelling are equal and hash alike, so they can be
used directly as dict keys in environment frames and the special-form table.
"""

from __future__ import annotations

import sys


class Symbol:
    __slots__ = ("id",)

    def __init__(self, id: str):
        # interned spellings compare by identity in the common case
        self.id: str = sys.intern(id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Symbol):
            return False
        return self.id is other.id or self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Symbol({self.id!r})"

    def __str__(self) -> str:
        return self.id

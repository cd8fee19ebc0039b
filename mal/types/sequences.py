"""Immutable sequence types.

List and Vector share a representation (a tuple) and differ only by tag, which
drives `list?` / `vector?` and printing. Every primitive that "modifies" a
sequence builds a new one.
"""

from __future__ import annotations


class List(tuple):
    __slots__ = ()

    def __repr__(self):
        return f"List({list(self)!r})"


class Vector(tuple):
    __slots__ = ()

    def __repr__(self):
        return f"Vector({list(self)!r})"


EMPTY_LIST = List()

from __future__ import annotations

from mal import LispValue


class Atom:
    """A mutable reference cell. Two atoms are never equal unless they are the same cell."""

    __slots__ = ("val",)

    def __init__(self, val: LispValue):
        self.val: LispValue = val

    def __repr__(self):
        return f"Atom({self.val!r})"

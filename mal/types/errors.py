from __future__ import annotations

from typing import Any


class MalError(Exception):
    """Base class for all mal errors. Every subclass is catchable by try*/catch*."""


class MalInvalidArguments(MalError):
    """Raised when a primitive or special form gets the wrong number or kind of arguments."""

    def __init__(self, name: str, detail: str | None = None):
        message = f"invalid arguments: {name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.name = name


class MalOutOfRange(MalError):
    """Raised when an index falls outside a sequence."""

    def __init__(self, message: str = "index out of range"):
        super().__init__(message)


class MalUnboundSymbol(MalError):
    """Raised when a symbol is used before it is bound."""


class MalInvalidSymbol(MalError):
    """Raised by Environment.define when the name is not a Symbol."""


class MalSyntaxError(MalError):
    """Raised by the reader on malformed source text."""


class MalException(MalError):
    """A language-level value raised by `throw`; `value` is any mal value."""

    def __init__(self, value: Any):
        super().__init__(f"MalException(value={value!r})")
        self.value: Any = value


# Message bound by catch* (and shown by the REPL) when a non-tail recursion
# exhausts the host stack.
RECURSION_LIMIT_MESSAGE = "maximum recursion depth exceeded"

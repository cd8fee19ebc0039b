"""
  mal Reader: Lexer and Parser

- Streaming, lazy parsing over a token generator
- Emits mal values directly:

    - nil / true / false -> Nil / True / False
    - integers -> int
    - strings -> str (escapes decoded)
    - :keywords -> str with the keyword sentinel prefix
    - symbols -> Symbol
    - ( ... ) -> List, [ ... ] -> Vector, { ... } -> dict
    - 'x `x ~x ~@x @x -> (quote x) (quasiquote x) (unquote x)
                          (splice-unquote x) (deref x)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from mal import SExpression
from mal.types.errors import MalSyntaxError
from mal.types.keyword import KEYWORD_PREFIX, keyword
from mal.types.nil import Nil
from mal.types.sequences import List, Vector
from mal.types.symbol import Symbol

TOKEN_RE = re.compile(
    r"[\s,]*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<splice>~@)"  # ~@
    r"|(?P<macro>['`~@])"  # ' ` ~ @
    r"|(?P<open>[\[({])"  # ( [ {
    r"|(?P<close>[\])}])"  # ) ] }
    r'|(?P<string>"(?:\\.|[^\\"])*"?)'  # double-quoted strings, possibly unterminated
    r"|(?P<atom>[^\s\[\]{}('\"`,;)]+)"  # numbers, symbols, keywords
    r")"
)

INT_RE = re.compile(r"-?\d+$")

READER_MACROS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("splice-unquote"),
    "@": Symbol("deref"),
}

CLOSERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}

_UNESCAPES: dict[str, str] = {"n": "\n", '"': '"', "\\": "\\"}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples, skipping comments."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None:
            # only trailing separators left
            if not source[pos:].strip(" \t\r\n,"):
                return
            raise MalSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        for nm in TOKEN_RE.groupindex:
            if m.group(nm):
                if nm != "comment":
                    yield nm, m.group(nm)
                break


def unescape(token: str) -> str:
    """Decode a string token including its quotes; raise on unterminated strings."""
    if len(token) < 2 or not token.endswith('"') or _ends_in_escape(token[1:-1]):
        raise MalSyntaxError("expected '\"', got EOF")
    text = re.sub(r"\\(.)", lambda m: _UNESCAPES.get(m.group(1), m.group(1)), token[1:-1])
    if text.startswith(KEYWORD_PREFIX):
        # would otherwise read back as a keyword
        raise MalSyntaxError(f"string literal may not start with {KEYWORD_PREFIX!r}")
    return text


def _ends_in_escape(body: str) -> bool:
    trailing = len(body) - len(body.rstrip("\\"))
    return trailing % 2 == 1


def read_atom(token: str) -> SExpression:
    if INT_RE.match(token):
        return int(token)
    if token == "nil":
        return Nil
    if token == "true":
        return True
    if token == "false":
        return False
    if token.startswith(":"):
        return keyword(token[1:])
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression | None:
        """Parse the next form, or return None at end of input."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None
        return self._parse_required()

    def _parse_required(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise MalSyntaxError("unexpected EOF")

        if tok_type in ("macro", "splice"):
            return List([READER_MACROS[tok_val], self._parse_required()])

        if tok_type == "open":
            items = self._parse_until(CLOSERS[tok_val])
            if tok_val == "(":
                return List(items)
            if tok_val == "[":
                return Vector(items)
            return self._build_map(items)

        if tok_type == "close":
            raise MalSyntaxError(f"unexpected '{tok_val}'")

        if tok_type == "string":
            return unescape(tok_val)

        return read_atom(tok_val)

    def _parse_until(self, closer: str) -> list[SExpression]:
        items = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise MalSyntaxError(f"expected '{closer}', got EOF")
            if tok_type == "close":
                if tok_val != closer:
                    raise MalSyntaxError(f"expected '{closer}', got '{tok_val}'")
                self.advance()
                return items
            items.append(self._parse_required())

    @staticmethod
    def _build_map(items: list[SExpression]) -> dict:
        if len(items) % 2 != 0:
            raise MalSyntaxError("map literal requires an even number of forms")
        result = {}
        for k, v in zip(items[::2], items[1::2]):
            if not isinstance(k, str):
                raise MalSyntaxError(f"map keys must be strings or keywords, got {k!r}")
            result[k] = v
        return result

    def parse_all(self) -> Iterator[SExpression]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def read_str(source: str) -> SExpression:
    """Read the first form in `source`; nil when the text holds no forms."""
    expr = TokenStream(lex(source)).parse_expr()
    return Nil if expr is None else expr


def read_all(source: str) -> Iterator[SExpression]:
    return TokenStream(lex(source)).parse_all()

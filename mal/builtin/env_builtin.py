"""Built-in functions for the mal runtime environment.

This module defines arithmetic, comparison, printing, predicates, sequence and
hash-map operations, atoms, and reflection helpers exposed to mal code, plus
the `register` function that installs them into a root Environment.

Every builtin has the signature `fn(env, args)` and checks the number and
kind of its arguments before doing anything else, raising
MalInvalidArguments(name) when they do not fit.
"""
from __future__ import annotations

import operator
import time
from functools import reduce
from itertools import chain
from pathlib import Path

from mal import LispValue
from mal.printer import pr_str
from mal.reader.parser import read_str
from mal.types.atom import Atom
from mal.types.environment import Environment
from mal.types.errors import MalError, MalException, MalInvalidArguments, MalOutOfRange
from mal.types.keyword import is_keyword, keyword
from mal.types.lambda_fn import Lambda
from mal.types.nil import Nil
from mal.types.sequences import EMPTY_LIST, List, Vector
from mal.types.symbol import Symbol
from mal.types.values import is_equal, is_function, is_number, is_sequential, is_string
from mal.evaluation.apply import apply as apply_engine
from mal.evaluation.evaluator import evaluate, evaluate0


def _arity(name: str, args: list[LispValue], n: int) -> None:
    if len(args) != n:
        raise MalInvalidArguments(name, f"expected {n} argument(s), got {len(args)}")


def _operands(name: str, args: list[LispValue]) -> list[int]:
    """Validate an arithmetic fold's arguments: two or more numbers."""
    if len(args) < 2 or not all(is_number(a) for a in args):
        raise MalInvalidArguments(name, "expected 2 or more numbers")
    return args


def _numbers(name: str, args: list[LispValue]) -> list[int]:
    """Validate a comparison's arguments: exactly 2 numbers."""
    if len(args) != 2 or not all(is_number(a) for a in args):
        raise MalInvalidArguments(name, "expected 2 numbers")
    return args


def call_function(fn: LispValue, args: list[LispValue], env: Environment) -> LispValue:
    """Invoke a mal function (closure or builtin) with evaluated arguments."""
    return apply_engine(fn, list(args), env, evaluate0, False)


# -------------------------------
# Arithmetic and comparison
# -------------------------------
def _truncating_div(a: int, b: int) -> int:
    if b == 0:
        raise MalError("division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def add(env: Environment, args: list[LispValue]) -> int:
    return reduce(operator.add, _operands("+", args))


def sub(env: Environment, args: list[LispValue]) -> int:
    """(- a b c) is ((a - b) - c)."""
    return reduce(operator.sub, _operands("-", args))


def mul(env: Environment, args: list[LispValue]) -> int:
    return reduce(operator.mul, _operands("*", args))


def div(env: Environment, args: list[LispValue]) -> int:
    """Integer division truncating toward zero, folded left."""
    return reduce(_truncating_div, _operands("/", args))


def lt(env: Environment, args: list[LispValue]) -> bool:
    a, b = _numbers("<", args)
    return a < b


def lte(env: Environment, args: list[LispValue]) -> bool:
    a, b = _numbers("<=", args)
    return a <= b


def gt(env: Environment, args: list[LispValue]) -> bool:
    a, b = _numbers(">", args)
    return a > b


def gte(env: Environment, args: list[LispValue]) -> bool:
    a, b = _numbers(">=", args)
    return a >= b


def equals(env: Environment, args: list[LispValue]) -> bool:
    """Structural equality of exactly two values."""
    _arity("=", args, 2)
    return is_equal(args[0], args[1])


# -------------------------------
# Printing
# -------------------------------
def _render(args: list[LispValue], readable: bool, sep: str) -> str:
    return sep.join(pr_str(a, readable) for a in args)


def prn(env: Environment, args: list[LispValue]) -> LispValue:
    """Print readable representations separated by spaces; returns nil."""
    print(_render(args, True, " "))
    return Nil


def println(env: Environment, args: list[LispValue]) -> LispValue:
    """Print display representations separated by spaces; returns nil."""
    print(_render(args, False, " "))
    return Nil


def pr_str_builtin(env: Environment, args: list[LispValue]) -> str:
    return _render(args, True, " ")


def str_builtin(env: Environment, args: list[LispValue]) -> str:
    return _render(args, False, "")


# -------------------------------
# Predicates
# -------------------------------
def _predicate(name: str, test):
    """Build a one-argument tag test that never fails on the argument's kind."""

    def predicate(env: Environment, args: list[LispValue]) -> bool:
        _arity(name, args, 1)
        return bool(test(args[0]))

    predicate.__name__ = name
    return predicate


is_list = _predicate("list?", lambda x: isinstance(x, List))
is_vector = _predicate("vector?", lambda x: isinstance(x, Vector))
is_map = _predicate("map?", lambda x: isinstance(x, dict))
is_atom = _predicate("atom?", lambda x: isinstance(x, Atom))
is_nil = _predicate("nil?", lambda x: x is Nil)
is_true = _predicate("true?", lambda x: x is True)
is_false = _predicate("false?", lambda x: x is False)
is_symbol = _predicate("symbol?", lambda x: isinstance(x, Symbol))
is_keyword_builtin = _predicate("keyword?", is_keyword)
is_string_builtin = _predicate("string?", is_string)
is_number_builtin = _predicate("number?", is_number)
is_sequential_builtin = _predicate("sequential?", is_sequential)
is_fn = _predicate("fn?", lambda x: is_function(x) and not (isinstance(x, Lambda) and x.is_macro))
is_macro = _predicate("macro?", lambda x: isinstance(x, Lambda) and x.is_macro)
is_empty = _predicate("empty?", lambda x: is_sequential(x) and len(x) == 0)


# -------------------------------
# Sequences
# -------------------------------
def list_builtin(env: Environment, args: list[LispValue]) -> List:
    return List(args)


def vector(env: Environment, args: list[LispValue]) -> Vector:
    return Vector(args)


def vec(env: Environment, args: list[LispValue]) -> Vector:
    """(vec seq) -> a Vector holding the elements of a List or Vector."""
    _arity("vec", args, 1)
    if not is_sequential(args[0]):
        raise MalInvalidArguments("vec", "expected a list or vector")
    return Vector(args[0])


def count(env: Environment, args: list[LispValue]) -> int:
    """Number of elements in a List or Vector; 0 for nil and other values."""
    _arity("count", args, 1)
    xs = args[0]
    return len(xs) if is_sequential(xs) else 0


def first(env: Environment, args: list[LispValue]) -> LispValue:
    """First element of a sequence; nil for an empty sequence or nil."""
    _arity("first", args, 1)
    xs = args[0]
    if xs is Nil:
        return Nil
    if not is_sequential(xs):
        raise MalInvalidArguments("first", "expected a list, vector or nil")
    return xs[0] if xs else Nil


def rest(env: Environment, args: list[LispValue]) -> List:
    """All but the first element as a new List; () for an empty sequence or nil."""
    _arity("rest", args, 1)
    xs = args[0]
    if xs is Nil:
        return EMPTY_LIST
    if not is_sequential(xs):
        raise MalInvalidArguments("rest", "expected a list, vector or nil")
    return List(xs[1:])


def nth(env: Environment, args: list[LispValue]) -> LispValue:
    """(nth seq index); an index outside the sequence raises MalOutOfRange."""
    _arity("nth", args, 2)
    xs, index = args
    if not is_number(index) or not is_sequential(xs):
        raise MalInvalidArguments("nth", "expected a sequence and a number")
    if not 0 <= index < len(xs):
        raise MalOutOfRange(f"index {index} out of range for sequence of length {len(xs)}")
    return xs[index]


def cons(env: Environment, args: list[LispValue]) -> List:
    """Prepend a value to a List or Vector, returning a new List."""
    _arity("cons", args, 2)
    head, tail = args
    if not is_sequential(tail):
        raise MalInvalidArguments("cons", "second argument must be a list or vector")
    return List((head, *tail))


def concat(env: Environment, args: list[LispValue]) -> List:
    for item in args:
        if not is_sequential(item):
            raise MalInvalidArguments("concat", f"expected lists or vectors, got {pr_str(item)}")
    return List(chain.from_iterable(args))


def conj(env: Environment, args: list[LispValue]) -> LispValue:
    """(conj coll x...) adds to the front of a List and to the end of a Vector."""
    if not args or not is_sequential(args[0]):
        raise MalInvalidArguments("conj", "expected a list or vector")
    coll, items = args[0], args[1:]
    if isinstance(coll, List):
        return List((*reversed(items), *coll))
    return Vector((*coll, *items))


def seq(env: Environment, args: list[LispValue]) -> LispValue:
    """(seq x): nil for empty input, otherwise a List of its elements or characters."""
    _arity("seq", args, 1)
    x = args[0]
    if x is Nil:
        return Nil
    if is_sequential(x) or is_string(x):
        return List(x) if len(x) else Nil
    raise MalInvalidArguments("seq", "expected a list, vector, string or nil")


def map_builtin(env: Environment, args: list[LispValue]) -> List:
    """(map f seq) -> a List of f applied to each element, in order."""
    _arity("map", args, 2)
    fn, xs = args
    if not is_function(fn) or not is_sequential(xs):
        raise MalInvalidArguments("map", "expected a function and a sequence")
    return List([call_function(fn, [x], env) for x in xs])


# -------------------------------
# Hash maps
# -------------------------------
def _pairs(name: str, items: list[LispValue]) -> dict[str, LispValue]:
    """Build a dict from alternating string keys and values, checking parity first."""
    if len(items) % 2 != 0:
        raise MalInvalidArguments(name, "expected key/value pairs")
    data: dict[str, LispValue] = {}
    for k, v in zip(items[::2], items[1::2]):
        if not isinstance(k, str):
            raise MalInvalidArguments(name, f"map keys must be strings or keywords, got {pr_str(k)}")
        data[k] = v
    return data


def _hash_map_arg(name: str, args: list[LispValue]) -> dict[str, LispValue]:
    if not args or not isinstance(args[0], dict):
        raise MalInvalidArguments(name, "expected a hash-map")
    return args[0]


def hash_map(env: Environment, args: list[LispValue]) -> dict[str, LispValue]:
    return _pairs("hash-map", args)


def assoc(env: Environment, args: list[LispValue]) -> dict[str, LispValue]:
    """New map with the given pairs merged over the original; last write per key wins."""
    data = _hash_map_arg("assoc", args)
    return {**data, **_pairs("assoc", args[1:])}


def dissoc(env: Environment, args: list[LispValue]) -> dict[str, LispValue]:
    """New map without the given keys; missing keys are ignored."""
    data = _hash_map_arg("dissoc", args)
    keys = args[1:]
    if not all(isinstance(k, str) for k in keys):
        raise MalInvalidArguments("dissoc", "keys must be strings or keywords")
    removed = set(keys)
    return {k: v for k, v in data.items() if k not in removed}


def get(env: Environment, args: list[LispValue]) -> LispValue:
    """(get m key); nil when the key is missing or the map is nil."""
    _arity("get", args, 2)
    data, key = args
    if not isinstance(key, str):
        raise MalInvalidArguments("get", "key must be a string or keyword")
    if data is Nil:
        return Nil
    if not isinstance(data, dict):
        raise MalInvalidArguments("get", "expected a hash-map or nil")
    return data.get(key, Nil)


def contains(env: Environment, args: list[LispValue]) -> bool:
    _arity("contains?", args, 2)
    data, key = args
    if not isinstance(data, dict) or not isinstance(key, str):
        raise MalInvalidArguments("contains?", "expected a hash-map and a string key")
    return key in data


def keys(env: Environment, args: list[LispValue]) -> List:
    _arity("keys", args, 1)
    return List(_hash_map_arg("keys", args).keys())


def vals(env: Environment, args: list[LispValue]) -> List:
    _arity("vals", args, 1)
    return List(_hash_map_arg("vals", args).values())


# -------------------------------
# Atoms
# -------------------------------
def _atom_arg(name: str, args: list[LispValue]) -> Atom:
    if not args or not isinstance(args[0], Atom):
        raise MalInvalidArguments(name, "expected an atom")
    return args[0]


def atom(env: Environment, args: list[LispValue]) -> Atom:
    _arity("atom", args, 1)
    return Atom(args[0])


def deref(env: Environment, args: list[LispValue]) -> LispValue:
    _arity("deref", args, 1)
    return _atom_arg("deref", args).val


def reset(env: Environment, args: list[LispValue]) -> LispValue:
    _arity("reset!", args, 2)
    cell = _atom_arg("reset!", args)
    cell.val = args[1]
    return args[1]


def swap(env: Environment, args: list[LispValue]) -> LispValue:
    """(swap! a f x...) stores (f @a x...) into a and returns it.

    The cell is written only after f returns, so a failing f leaves it untouched.
    """
    if len(args) < 2:
        raise MalInvalidArguments("swap!", "expected an atom and a function")
    cell = _atom_arg("swap!", args)
    fn = args[1]
    if not is_function(fn):
        raise MalInvalidArguments("swap!", "expected a function")
    new_val = call_function(fn, [cell.val, *args[2:]], env)
    cell.val = new_val
    return new_val


# -------------------------------
# Symbols, keywords, reflection
# -------------------------------
def _string_arg(name: str, args: list[LispValue]) -> str:
    _arity(name, args, 1)
    if not isinstance(args[0], str):
        raise MalInvalidArguments(name, "expected a string")
    return args[0]


def symbol(env: Environment, args: list[LispValue]) -> Symbol:
    return Symbol(_string_arg("symbol", args))


def keyword_builtin(env: Environment, args: list[LispValue]) -> str:
    """(keyword "foo") -> :foo; applying it to a keyword returns the keyword."""
    return keyword(_string_arg("keyword", args))


def read_string(env: Environment, args: list[LispValue]) -> LispValue:
    return read_str(_string_arg("read-string", args))


def slurp(env: Environment, args: list[LispValue]) -> str:
    """Read a whole file as text; I/O failures surface as a catchable MalError."""
    filename = _string_arg("slurp", args)
    try:
        return Path(filename).read_text(encoding="utf-8")
    except OSError as e:
        raise MalError(f"slurp: {e}") from e


def throw(env: Environment, args: list[LispValue]) -> LispValue:
    """Raise the argument itself as the value seen by catch*."""
    _arity("throw", args, 1)
    raise MalException(args[0])


def apply(env: Environment, args: list[LispValue]) -> LispValue:
    """(apply f a [b c] [d e]) calls f once with a, b, c, d and e.

    The final argument must be a List or Vector. Intermediate sequences are
    spliced the same way; any other intermediate value is passed as is.
    """
    if len(args) < 2:
        raise MalInvalidArguments("apply", "expected a function and an argument sequence")
    fn, last = args[0], args[-1]
    if not is_function(fn) or not is_sequential(last):
        raise MalInvalidArguments("apply", "expected a function and an argument sequence")
    fn_args: list[LispValue] = []
    for arg in args[1:-1]:
        if is_sequential(arg):
            fn_args.extend(arg)
        else:
            fn_args.append(arg)
    return call_function(fn, [*fn_args, *last], env)


def eval_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(eval form) evaluates a form in the root environment."""
    _arity("eval", args, 1)
    return evaluate(args[0], env.root())


def readline(env: Environment, args: list[LispValue]) -> LispValue:
    """(readline prompt) -> the next input line, or nil at end of input."""
    prompt = _string_arg("readline", args)
    try:
        return input(prompt)
    except EOFError:
        return Nil


def time_ms(env: Environment, args: list[LispValue]) -> int:
    _arity("time-ms", args, 0)
    return int(time.time() * 1000)


def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    env.update(
        {
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("<"): lt,
            Symbol("<="): lte,
            Symbol(">"): gt,
            Symbol(">="): gte,
            Symbol("="): equals,
            Symbol("prn"): prn,
            Symbol("println"): println,
            Symbol("pr-str"): pr_str_builtin,
            Symbol("str"): str_builtin,
            Symbol("list"): list_builtin,
            Symbol("list?"): is_list,
            Symbol("vector"): vector,
            Symbol("vector?"): is_vector,
            Symbol("vec"): vec,
            Symbol("empty?"): is_empty,
            Symbol("count"): count,
            Symbol("first"): first,
            Symbol("rest"): rest,
            Symbol("nth"): nth,
            Symbol("cons"): cons,
            Symbol("concat"): concat,
            Symbol("conj"): conj,
            Symbol("seq"): seq,
            Symbol("map"): map_builtin,
            Symbol("sequential?"): is_sequential_builtin,
            Symbol("hash-map"): hash_map,
            Symbol("map?"): is_map,
            Symbol("assoc"): assoc,
            Symbol("dissoc"): dissoc,
            Symbol("get"): get,
            Symbol("contains?"): contains,
            Symbol("keys"): keys,
            Symbol("vals"): vals,
            Symbol("atom"): atom,
            Symbol("atom?"): is_atom,
            Symbol("deref"): deref,
            Symbol("reset!"): reset,
            Symbol("swap!"): swap,
            Symbol("nil?"): is_nil,
            Symbol("true?"): is_true,
            Symbol("false?"): is_false,
            Symbol("symbol?"): is_symbol,
            Symbol("symbol"): symbol,
            Symbol("keyword"): keyword_builtin,
            Symbol("keyword?"): is_keyword_builtin,
            Symbol("string?"): is_string_builtin,
            Symbol("number?"): is_number_builtin,
            Symbol("fn?"): is_fn,
            Symbol("macro?"): is_macro,
            Symbol("read-string"): read_string,
            Symbol("slurp"): slurp,
            Symbol("throw"): throw,
            Symbol("apply"): apply,
            Symbol("eval"): eval_builtin,
            Symbol("readline"): readline,
            Symbol("time-ms"): time_ms,
        }
    )

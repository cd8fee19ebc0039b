from __future__ import annotations

import logging
import sys
from typing import Literal

from mal import LispValue
from mal.builtin.env_builtin import register
from mal.config import get_log_level, get_prelude_root, get_recursion_limit
from mal.evaluation.evaluator import evaluate
from mal.printer import pr_str
from mal.reader.parser import read_all
from mal.types.environment import Environment
from mal.types.errors import RECURSION_LIMIT_MESSAGE, MalError, MalException
from mal.types.nil import Nil
from mal.types.sequences import List
from mal.types.symbol import Symbol

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating mal code.
    Maintains a root Environment across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto', argv: list[str] | None = None):
        limit = get_recursion_limit()
        if limit > sys.getrecursionlimit():
            sys.setrecursionlimit(limit)

        self.env: Environment = Environment()
        register(self.env)
        self.env.define(Symbol("*ARGV*"), List(argv or []))
        self.env.define(Symbol("*host-language*"), "python")

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            self.load_prelude()
        elif prelude:
            self.eval_prelude(prelude)

    def load_prelude(self) -> None:
        core = get_prelude_root() / 'core.mal'
        if not core.exists():
            logger.warning("prelude %s not found; continuing without it", core)
            return
        logger.debug("loading prelude %s", core)
        self.eval_prelude(core.read_text(encoding='utf-8'))

    def eval_prelude(self, code: str) -> None:
        for expr in read_all(code):
            evaluate(expr, self.env)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`.

        Returns nil for no forms, the value for one form, or a Python list of
        values for several.
        """
        results: list[LispValue] = [evaluate(expr, self.env) for expr in read_all(code)]
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results

    def rep(self, code: str) -> str:
        """Read, evaluate and print: the readable form of the last value."""
        result: LispValue = Nil
        for expr in read_all(code):
            result = evaluate(expr, self.env)
        return pr_str(result, True)

    def load_file(self, path: str) -> LispValue:
        logger.debug("loading file %s", path)
        return evaluate(List([Symbol("load-file"), path]), self.env)


def _describe(error: MalError | RecursionError) -> str:
    if isinstance(error, RecursionError):
        return RECURSION_LIMIT_MESSAGE
    if isinstance(error, MalException):
        return pr_str(error.value, True)
    return str(error)


def repl(interp: Interpreter) -> None:
    while True:
        try:
            line = input("user> ")
        except EOFError:
            print()
            return
        if not line.strip():
            continue
        try:
            print(interp.rep(line))
        except (MalError, RecursionError) as e:
            print(f"Error: {_describe(e)}")


def main(args: list[str] | None = None) -> int:
    args = sys.argv[1:] if args is None else args
    logging.basicConfig(level=get_log_level())
    interp = Interpreter(argv=args[1:])
    if args:
        try:
            interp.load_file(args[0])
        except (MalError, RecursionError) as e:
            print(f"Error: {_describe(e)}", file=sys.stderr)
            return 1
        return 0
    interp.rep('(println (str "Mal [" *host-language* "]"))')
    repl(interp)
    return 0


if __name__ == "__main__":
    sys.exit(main())

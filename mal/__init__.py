# Core type aliases for mal's data model.
# Values are plain Python objects (int, bool, str, dict) plus a handful of small
# classes under mal.types (Symbol, List, Vector, Atom, Lambda, Nil).
#
# Naming guidance:
# - SExpression: use in reader and macro code for syntactic forms (code-as-data).
# - LispValue:  use in evaluator and runtime code for evaluated values.
# Both resolve to `Any`; the closed set of representations is documented in
# mal.types.values.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (code is data, so the two are interchangeable)
SExpression = LispValue

# Evaluator function type: Python evaluator passed into special forms
EvaluatorFn = Callable[..., LispValue]

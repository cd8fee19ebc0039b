import pytest

from mal.types.errors import MalInvalidArguments, MalUnboundSymbol
from mal.types.lambda_fn import Lambda
from mal.types.nil import Nil
from mal.types.sequences import List


def test_def_binds_and_returns_value(itp):
    assert itp.eval("(def! x (+ 1 2))") == 3
    assert itp.eval("x") == 3


@pytest.mark.parametrize(
    "source",
    [
        '(def! "x" 1)',
        "(def! 1 2)",
        "(let* (1 2) 3)",
        "(let* [a 1 :b 2] a)",
        "(defmacro! \"m\" (fn* () 1))",
    ],
)
def test_binding_forms_require_symbols(itp, source):
    with pytest.raises(MalInvalidArguments):
        itp.eval(source)


def test_failed_def_leaves_binding_unchanged(itp):
    itp.eval("(def! x 1)")
    with pytest.raises(MalUnboundSymbol):
        itp.eval("(def! x (+ 1 undefined-thing))")
    assert itp.eval("x") == 1


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(let* (a 1 b 2) (+ a b))", 3),
        ("(let* [a 1 b (+ a 1)] b)", 2),
        ("(let* (a 1) (let* (a 2) a))", 2),
        ("(let* () 5)", 5),
        ("(let* (a 1) a a 7)", 7),
    ],
)
def test_let(itp, source, expected):
    assert itp.eval(source) == expected


def test_let_does_not_leak_bindings(itp):
    itp.eval("(let* (hidden 1) hidden)")
    with pytest.raises(MalUnboundSymbol):
        itp.eval("hidden")


def test_let_with_odd_bindings_fails(itp):
    with pytest.raises(MalInvalidArguments):
        itp.eval("(let* (a 1 b) a)")


def test_do_sequences_and_returns_last(itp, capsys):
    assert itp.eval("(do (prn 1) (prn 2) 3)") == 3
    assert capsys.readouterr().out == "1\n2\n"
    assert itp.eval("(do)") is Nil


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if true 1 2)", 1),
        ("(if false 1 2)", 2),
        ("(if nil 1 2)", 2),
        ("(if 0 1 2)", 1),
        ('(if "" 1 2)', 1),
        ("(if (list) 1 2)", 1),
        ("(if [] 1 2)", 1),
        ("(if false 1)", Nil),
    ],
)
def test_if_truthiness(itp, source, expected):
    assert itp.eval(source) == expected


def test_if_evaluates_only_the_taken_branch(itp, capsys):
    itp.eval('(if true (prn "then") (prn "else"))')
    assert capsys.readouterr().out == '"then"\n'


def test_fn_builds_closures(itp):
    assert isinstance(itp.eval("(fn* (a) a)"), Lambda)
    itp.eval("(def! make-adder (fn* (n) (fn* (x) (+ x n))))")
    itp.eval("(def! add5 (make-adder 5))")
    assert itp.eval("(add5 10)") == 15


def test_fn_with_no_body_returns_nil(itp):
    assert itp.eval("((fn* ()))") is Nil


def test_fn_variadic_parameters(itp):
    assert itp.eval("((fn* (& more) more) 1 2 3)") == List([1, 2, 3])
    assert itp.eval("((fn* (a & more) (count more)) 1)") == 0
    assert itp.eval("((fn* [a & more] (list a more)) 1 2)") == List([1, List([2])])


def test_fn_variadic_requires_leading_arguments(itp):
    with pytest.raises(MalInvalidArguments):
        itp.eval("((fn* (a b & more) a) 1)")


def test_fn_rejects_malformed_variadic_marker(itp):
    with pytest.raises(MalInvalidArguments):
        itp.eval("((fn* (a &) a) 1)")


def test_fn_parameters_must_be_symbols(itp):
    with pytest.raises(MalInvalidArguments, match=r"fn\*"):
        itp.eval("(fn* (1) 1)")


def test_recursive_function(itp):
    itp.eval("(def! fib (fn* (n) (if (<= n 1) n (+ (fib (- n 1)) (fib (- n 2))))))")
    assert itp.eval("(fib 15)") == 610


def test_eval_uses_root_environment(itp):
    assert itp.eval("(eval (list + 1 2))") == 3
    assert itp.eval("(let* (x 10) (eval (read-string \"(def! from-eval 4)\")))") == 4
    assert itp.eval("from-eval") == 4
    with pytest.raises(MalUnboundSymbol):
        itp.eval("(let* (local 1) (eval 'local))")

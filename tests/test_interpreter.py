import pytest

from mal.interpreter import Interpreter, main, repl
from mal.types.errors import MalSyntaxError
from mal.types.keyword import keyword
from mal.types.nil import Nil


def test_eval_return_shapes(itp):
    assert itp.eval("") is Nil
    assert itp.eval("  ; nothing here") is Nil
    assert itp.eval("(+ 1 2)") == 3
    assert itp.eval("1 (+ 1 1) 3") == [1, 2, 3]


def test_state_persists_between_calls(itp):
    itp.eval("(def! counter (atom 0))")
    itp.eval("(swap! counter (fn* (x) (+ x 1)))")
    assert itp.eval("@counter") == 1


def test_separate_interpreters_do_not_share_state():
    a, b = Interpreter(), Interpreter()
    a.eval("(def! only-in-a 1)")
    assert b.eval("(try* only-in-a (catch* e :unbound))") == keyword("unbound")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", "3"),
        ('(str "a" "b")', '"ab"'),
        ('"line\\nbreak"', '"line\\nbreak"'),
        ("(list 1 [2] {\"k\" :v})", '(1 [2] {"k" :v})'),
        ("(fn* (x) x)", "#<function>"),
        ("+", "#<function>"),
        ("(atom nil)", "(atom nil)"),
        ("", "nil"),
        ("1 2", "2"),
    ],
)
def test_rep(itp, source, expected):
    assert itp.rep(source) == expected


def test_syntax_errors_propagate(itp):
    with pytest.raises(MalSyntaxError):
        itp.eval("(+ 1 2")


def test_main_runs_a_file(tmp_path, capsys):
    script = tmp_path / "script.mal"
    script.write_text('(println "hi" (+ 1 2))\n(prn *ARGV*)\n', encoding="utf-8")
    assert main([str(script), "x", "y"]) == 0
    assert capsys.readouterr().out == 'hi 3\n("x" "y")\n'


def test_main_reports_errors(tmp_path, capsys):
    script = tmp_path / "bad.mal"
    script.write_text('(throw "bad")', encoding="utf-8")
    assert main([str(script)]) == 1
    assert capsys.readouterr().err == 'Error: "bad"\n'


def _feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_repl_session(itp, monkeypatch, capsys):
    _feed(monkeypatch, ["(def! x 2)", "", "(* x 21)", "(throw {\"a\" 1})", "undefined", "(+ 1"])
    repl(itp)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "2",
        "42",
        'Error: {"a" 1}',
        "Error: 'undefined' not found",
        "Error: expected ')', got EOF",
        "",
    ]


def test_main_without_arguments_starts_repl(monkeypatch, capsys):
    _feed(monkeypatch, ["(+ 40 2)"])
    assert main([]) == 0
    assert capsys.readouterr().out == "Mal [python]\n42\n\n"


def test_repl_survives_deep_recursion(itp, monkeypatch, capsys):
    _feed(
        monkeypatch,
        [
            "(def! depth (fn* (n) (if (= n 0) 0 (+ 1 (depth (- n 1))))))",
            "(depth 100000)",
            "(+ 1 2)",
        ],
    )
    repl(itp)
    out = capsys.readouterr().out.splitlines()
    assert out == ["#<function>", "Error: maximum recursion depth exceeded", "3", ""]


def test_main_reports_deep_recursion(tmp_path, capsys):
    script = tmp_path / "deep.mal"
    script.write_text(
        "(def! depth (fn* (n) (if (= n 0) 0 (+ 1 (depth (- n 1))))))\n(depth 100000)\n",
        encoding="utf-8",
    )
    assert main([str(script)]) == 1
    assert capsys.readouterr().err == "Error: maximum recursion depth exceeded\n"

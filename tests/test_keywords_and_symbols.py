import pytest

from mal.types.errors import MalInvalidArguments, MalSyntaxError
from mal.types.keyword import KEYWORD_PREFIX, is_keyword, keyword, keyword_name
from mal.types.symbol import Symbol


def test_keyword_helpers():
    k = keyword("abc")
    assert k == KEYWORD_PREFIX + "abc"
    assert keyword(k) == k
    assert is_keyword(k)
    assert not is_keyword("abc")
    assert not is_keyword(1)
    assert keyword_name(k) == "abc"


def test_symbols_compare_by_name():
    assert Symbol("x") == Symbol("x")
    assert Symbol("x") != Symbol("y")
    assert hash(Symbol("x")) == hash(Symbol("x"))
    assert Symbol("x") != "x"


@pytest.mark.parametrize(
    "source,expected",
    [
        (":kw", keyword("kw")),
        ('(keyword "kw")', keyword("kw")),
        ("(keyword :kw)", keyword("kw")),
        ("(keyword? :kw)", True),
        ('(keyword? "kw")', False),
        ("(string? :kw)", False),
        ('(string? "kw")', True),
        ('(= :kw (keyword "kw"))', True),
        ('(= :kw "kw")', False),
        ('(symbol "abc")', Symbol("abc")),
        ("(symbol? (quote abc))", True),
        ('(symbol? "abc")', False),
        ('(= (symbol "abc") (quote abc))', True),
        ("(nil? nil)", True),
        ("(nil? false)", False),
        ("(true? true)", True),
        ("(true? 1)", False),
        ("(false? false)", True),
        ("(false? nil)", False),
        ("(number? 1)", True),
        ('(number? "1")', False),
    ],
)
def test_keyword_and_symbol_primitives(itp, source, expected):
    assert itp.eval(source) == expected


def test_keyword_evaluates_to_itself(itp):
    assert itp.rep(":abc") == ":abc"


def test_fn_and_macro_predicates(itp):
    assert itp.eval("(fn? +)") is True
    assert itp.eval("(fn? (fn* () 1))") is True
    assert itp.eval("(fn? cond)") is False
    assert itp.eval("(macro? cond)") is True
    assert itp.eval("(macro? not)") is False
    assert itp.eval("(fn? 1)") is False


@pytest.mark.parametrize("source", ["(symbol 1)", "(keyword nil)", "(symbol)", '(keyword "a" "b")'])
def test_constructors_reject_bad_arguments(itp, source):
    with pytest.raises(MalInvalidArguments):
        itp.eval(source)


def test_keyword_marker_in_string_literal_is_rejected(itp):
    with pytest.raises(MalSyntaxError):
        itp.eval(f'(keyword? "{KEYWORD_PREFIX}foo")')
    assert itp.eval('(keyword? (keyword "foo"))') is True

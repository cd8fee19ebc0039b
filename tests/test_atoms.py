import pytest

from mal.types.atom import Atom
from mal.types.errors import MalError, MalInvalidArguments


def test_atom_create_and_deref(itp):
    a = itp.eval("(atom 5)")
    assert isinstance(a, Atom)
    assert a.val == 5
    itp.eval("(def! a (atom 5))")
    assert itp.eval("(deref a)") == 5
    assert itp.eval("@a") == 5
    assert itp.eval("(atom? a)") is True
    assert itp.eval("(atom? 5)") is False


def test_reset_returns_new_value(itp):
    itp.eval("(def! a (atom 1))")
    assert itp.eval("(reset! a 10)") == 10
    assert itp.eval("@a") == 10


def test_swap_applies_function_with_extra_args(itp):
    itp.eval("(def! a (atom 5))")
    assert itp.eval("(swap! a + 1)") == 6
    assert itp.eval("(swap! a (fn* (x y z) (+ x (+ y z))) 1 2)") == 9
    assert itp.eval("@a") == 9


def test_swap_twice(itp):
    itp.eval("(def! a (atom 5))")
    itp.eval("(swap! a (fn* (x) (+ x 1)))")
    itp.eval("(swap! a (fn* (x) (+ x 1)))")
    assert itp.eval("@a") == 7


def test_failing_swap_leaves_value_unchanged(itp):
    itp.eval("(def! a (atom 1))")
    with pytest.raises(MalError):
        itp.eval('(swap! a (fn* (x) (throw "no")))')
    assert itp.eval("@a") == 1


def test_atoms_are_shared_by_reference(itp):
    itp.eval("(def! a (atom 0))")
    itp.eval("(def! bump (fn* () (swap! a (fn* (x) (+ x 1)))))")
    itp.eval("(bump)")
    itp.eval("(bump)")
    assert itp.eval("@a") == 2


def test_atom_equality_is_identity(itp):
    itp.eval("(def! a (atom 1))")
    assert itp.eval("(= a a)") is True
    assert itp.eval("(= a (atom 1))") is False


@pytest.mark.parametrize(
    "source",
    ["(deref 1)", "(reset! 1 2)", "(swap! 1 +)", "(swap! (atom 1))", "(swap! (atom 1) 2)", "(atom)"],
)
def test_atom_primitives_reject_bad_arguments(itp, source):
    with pytest.raises(MalInvalidArguments):
        itp.eval(source)

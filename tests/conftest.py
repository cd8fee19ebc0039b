import pytest

from mal.builtin.env_builtin import register
from mal.interpreter import Interpreter
from mal.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with the builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def itp():
    """Interpreter with builtins and the standard prelude."""
    return Interpreter()

import os
import sys

import pytest

from mal import config
from mal.interpreter import Interpreter


def test_prelude_root_default(monkeypatch):
    monkeypatch.delenv("MAL_PRELUDE_PATH", raising=False)
    root = config.get_prelude_root()
    assert (root / "core.mal").is_file()


def test_prelude_root_from_file_path(tmp_path, monkeypatch):
    target = tmp_path / "core.mal"
    target.write_text("", encoding="utf-8")
    monkeypatch.setenv("MAL_PRELUDE_PATH", str(target))
    assert config.get_prelude_root() == tmp_path


def test_prelude_root_is_taken_whole(tmp_path, monkeypatch):
    target = tmp_path / f"one{os.pathsep}dir"
    target.mkdir()
    monkeypatch.setenv("MAL_PRELUDE_PATH", str(target))
    assert config.get_prelude_root() == target
    monkeypatch.setenv("MAL_PRELUDE_PATH", "   ")
    assert (config.get_prelude_root() / "core.mal").is_file()


def test_recursion_limit(monkeypatch):
    monkeypatch.delenv("MAL_RECURSION_LIMIT", raising=False)
    assert config.get_recursion_limit() == 10_000
    monkeypatch.setenv("MAL_RECURSION_LIMIT", "25000")
    assert config.get_recursion_limit() == 25000
    monkeypatch.setenv("MAL_RECURSION_LIMIT", "lots")
    with pytest.raises(ValueError):
        config.get_recursion_limit()


def test_recursion_limit_is_never_lowered(monkeypatch):
    before = sys.getrecursionlimit()
    monkeypatch.setenv("MAL_RECURSION_LIMIT", "10")
    Interpreter(prelude=None)
    assert sys.getrecursionlimit() == before


def test_log_level(monkeypatch):
    monkeypatch.delenv("MAL_LOG_LEVEL", raising=False)
    assert config.get_log_level() == "WARNING"
    monkeypatch.setenv("MAL_LOG_LEVEL", "debug")
    assert config.get_log_level() == "DEBUG"

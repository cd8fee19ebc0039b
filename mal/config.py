from __future__ import annotations
import os
from pathlib import Path


# Resolve installation dir (mal package directory)
_MAL_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _MAL_DIR / 'prelude'
_DEFAULT_RECURSION_LIMIT = 10_000
_DEFAULT_LOG_LEVEL = 'WARNING'


def get_prelude_root() -> Path:
    """Directory holding core.mal: MAL_PRELUDE_PATH, or the packaged prelude.

    A path naming a file resolves to the directory containing it.
    """
    raw = os.environ.get('MAL_PRELUDE_PATH', '').strip()
    if not raw:
        return _DEFAULT_PRELUDE_DIR
    p = Path(raw)
    return p if p.is_dir() else p.parent


def get_recursion_limit() -> int:
    raw = os.environ.get('MAL_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"MAL_RECURSION_LIMIT must be an integer, got {raw!r}") from None


def get_log_level() -> str:
    return os.environ.get('MAL_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()

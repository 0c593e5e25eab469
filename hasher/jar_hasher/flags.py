from __future__ import annotations
import logging, os

_LOG_ENV = "JAR_HASHER_LOG"
_TQDM_ENV = "JAR_HASHER_TQDM"


def log_level(default: int = logging.WARNING) -> int:
    """Level named by JAR_HASHER_LOG (e.g. DEBUG, info); default when unset or unknown."""
    name = os.environ.get(_LOG_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def tqdm_override() -> bool | None:
    """
    Value for tqdm(disable=...): JAR_HASHER_TQDM=0 forces the bar on, =1 forces it off.
    None means no override.
    """
    env = os.environ.get(_TQDM_ENV)
    if env == "0":
        return False
    if env == "1":
        return True
    return None

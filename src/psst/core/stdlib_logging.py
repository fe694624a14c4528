from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LEVEL_ENV_VAR = "PSST_LOG_LEVEL"

_PSST_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging(
    level: str = "INFO",
    fmt: str = DEFAULT_FORMAT,
    *,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Install a single stream handler on the ``psst`` logger.

    Idempotent per-process: a handler installed by a previous call is replaced,
    never stacked. ``PSST_LOG_LEVEL`` overrides ``level`` when set.
    """
    global _PSST_HANDLER

    env_level = os.environ.get(LEVEL_ENV_VAR)
    resolved = _level_from_name(env_level or level)

    logger = logging.getLogger("psst")
    logger.setLevel(resolved)
    logger.propagate = False

    if _PSST_HANDLER is not None:
        logger.removeHandler(_PSST_HANDLER)
        _PSST_HANDLER.close()
        _PSST_HANDLER = None

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    _PSST_HANDLER = handler
    return logger


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_logging."""
    global _PSST_HANDLER
    logger = logging.getLogger("psst")
    if _PSST_HANDLER is not None:
        logger.removeHandler(_PSST_HANDLER)
        _PSST_HANDLER.close()
    _PSST_HANDLER = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["DEFAULT_FORMAT", "LEVEL_ENV_VAR", "configure_logging", "reset_logging_for_tests"]

# src/tetris_engine/utils/logging.py
from __future__ import annotations

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "tetris_engine"


def _parse_level(level: str) -> int:
    lvl = logging.getLevelName(str(level).strip().upper())
    if not isinstance(lvl, int):
        raise ValueError(f"unknown log level {level!r}")
    return lvl


def _make_handler(*, use_rich: bool) -> logging.Handler:
    if use_rich:
        rich_handler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
        )
        rich_handler.setFormatter(logging.Formatter("%(message)s"))
        return rich_handler

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
    return handler


def setup_logger(*, name: str, use_rich: bool = True, level: str = "info") -> logging.Logger:
    """
    Install one handler on the package logger and return logging.getLogger(name).

    Engine modules log via logging.getLogger(__name__), so their debug records (moves,
    freezes, cleared rows) show up once level='debug'. A name outside the package gets
    its own handler.
    """
    lvl = _parse_level(level)

    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.handlers.clear()
    pkg.propagate = False
    pkg.setLevel(lvl)
    pkg.addHandler(_make_handler(use_rich=use_rich))

    logger = logging.getLogger(str(name))
    if logger is not pkg and not logger.name.startswith(PACKAGE_LOGGER + "."):
        logger.handlers.clear()
        logger.propagate = False
        logger.setLevel(lvl)
        logger.addHandler(_make_handler(use_rich=use_rich))
    return logger


__all__ = ["PACKAGE_LOGGER", "setup_logger"]

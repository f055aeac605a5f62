"""Logging helpers for the generator CLI."""

from __future__ import annotations

import logging
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _file_handler(log_path: str | Path) -> logging.FileHandler:
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


def configure_logging(level: int = logging.INFO, log_path: str | Path | None = None) -> None:
    """
    Configure default logging if no handlers are present.

    When the root logger is already set up, only its level is changed and,
    if `log_path` is given, a file handler is attached alongside the
    existing handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        if log_path:
            root.addHandler(_file_handler(log_path))
        return
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_path:
        handlers.append(_file_handler(log_path))

    logging.basicConfig(
        level=level,
        format=_FORMAT,
        datefmt=_DATEFMT,
        handlers=handlers,
    )

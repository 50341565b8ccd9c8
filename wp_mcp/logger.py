"""
File-only logging for wp_mcp. Nothing here may write to stdout: in stdio
mode stdout carries the JSON-RPC stream.

All module loggers are children of the "wp_mcp" logger, which owns the
only two handlers (main log + error log). One handler per file keeps
rotation sane when many modules log at once.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import Config

ROOT_NAME = "wp_mcp"
_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def _rotating(log_path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    # request paths and site content end up in here
    try:
        os.chmod(log_path, 0o600)
    except OSError:
        pass  # not created yet

    return handler


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_NAME)
    if root.handlers:
        return root

    Config.ensure_dirs()
    level = logging.getLevelName(Config.LOG_LEVEL)
    root.setLevel(level if isinstance(level, int) else logging.DEBUG)
    root.addHandler(_rotating(Config.LOG_FILE, logging.DEBUG))
    root.addHandler(_rotating(Config.ERROR_LOG, logging.ERROR))

    # The process root logger may have a stdout handler (uvicorn, basicConfig)
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger "wp_mcp.<name>", writing to the shared log files only."""
    _configure_root()
    return logging.getLogger(f"{ROOT_NAME}.{name}")

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""loguru setup shared by the whole service.

Every record carries ``request_id`` and ``client_ip`` extras. Inside a Flask
request they come from a ContextVar set by the request logging middleware;
components that receive a ``RequestContext`` bind them explicitly.
"""

from __future__ import annotations

import inspect
import logging
import os
import sys
from contextvars import ContextVar, Token
from pathlib import Path

from loguru import logger

from .sensitive_filter import sanitize_record

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[request_id]}</magenta> <dim>{extra[client_ip]}</dim> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")

_QUIET_LOGGERS = {"werkzeug": logging.INFO, "httpx": logging.WARNING, "httpcore": logging.WARNING}


def _inject_request_id(record) -> None:
    extra = record["extra"]
    extra.setdefault("request_id", _REQUEST_ID.get())
    extra.setdefault("client_ip", "-")


logger.configure(patcher=_inject_request_id)


class _StdlibBridge(logging.Handler):
    """Routes stdlib logging (werkzeug, sqlalchemy, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = inspect.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def bind_logger(request_id: str, **extra):
    return logger.bind(request_id=request_id, **extra)


def set_request_id(value: str | None) -> Token[str]:
    return _REQUEST_ID.set(value or "-")


def reset_request_id(token: Token[str] | None = None) -> None:
    if token is None:
        _REQUEST_ID.set("-")
    else:
        _REQUEST_ID.reset(token)


def get_request_id() -> str:
    return _REQUEST_ID.get()


def _log_file() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path.cwd() / "instance" / "marketplace.log"


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = _log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    common = {"level": level, "format": _FORMAT, "filter": sanitize_record, "diagnose": False}
    logger.add(sys.stderr, colorize=True, backtrace=debug_mode, **common)
    logger.add(
        log_file,
        colorize=False,
        backtrace=False,
        enqueue=True,
        rotation="20 MB",
        retention=5,
        encoding="utf-8",
        **common,
    )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


__all__ = [
    "bind_logger",
    "get_request_id",
    "logger",
    "reset_request_id",
    "set_request_id",
    "setup_logging",
]

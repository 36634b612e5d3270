from __future__ import annotations

import logging
import sys
from contextlib import suppress
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

from localnotify.config import get_settings

# Bridge action currently being dispatched (e.g. "schedule"); attached to every record.
bridge_action_var: ContextVar[str | None] = ContextVar("bridge_action", default=None)

# Unconfigured until `setup_logging()`; importing the library leaves the host's logging alone.
logger: structlog.stdlib.BoundLogger = structlog.get_logger("localnotify")


def _log_path() -> Path:
    s = get_settings()
    return Path(s.log_dir) / "localnotify.log"


def add_contextvars(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    action = bridge_action_var.get()
    if action:
        event_dict.setdefault("bridge_action", action)
    return event_dict


def rename_event_to_msg(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    if "msg" not in event_dict and "event" in event_dict:
        event_dict["msg"] = event_dict.pop("event")
    return event_dict


def setup_logging() -> structlog.stdlib.BoundLogger:
    """
    Route structlog through stdlib logging as JSON (rotating file + stderr).

    Takes over the root logger, so only entry points (the CLI) call it.
    """
    s = get_settings()
    level = str(s.log_level).upper()
    log_path = _log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicates if re-imported
    if getattr(root, "_localnotify_structlog_configured", False):
        return structlog.get_logger("localnotify")

    foreign_pre_chain = [
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
        structlog.stdlib.add_log_level,
        add_contextvars,
        structlog.processors.format_exc_info,
        rename_event_to_msg,
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=foreign_pre_chain,
    )

    file_handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=int(s.log_max_bytes),
        backupCount=int(s.log_backup_count),
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)

    root.handlers.clear()
    root.addHandler(file_handler)
    root.addHandler(stream_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.stdlib.add_log_level,
            add_contextvars,
            structlog.processors.format_exc_info,
            rename_event_to_msg,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root._localnotify_structlog_configured = True
    return structlog.get_logger("localnotify")


def set_log_level(level: str) -> None:
    """
    Best-effort runtime log level override (CLI convenience).
    Does not change handlers/formatters; only raises/lowers filtering level.
    """
    try:
        lvl = getattr(logging, str(level).upper(), logging.INFO)
        root = logging.getLogger()
        root.setLevel(lvl)
        for h in root.handlers:
            with suppress(Exception):
                h.setLevel(lvl)
    except Exception:
        # keep existing configuration
        return

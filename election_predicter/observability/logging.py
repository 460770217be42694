from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .context import snapshot


_RESERVED = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
    "run_id",
}


class JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter suitable for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(snapshot())

        # Capture non-standard fields attached via `extra={...}`.
        for k, v in record.__dict__.items():
            if k in _RESERVED or k.startswith("_"):
                continue
            try:
                json.dumps(v)
                payload[k] = v
            except TypeError:
                payload[k] = repr(v)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = snapshot().get("run_id", "-")
        return True


_TEXT_FORMAT = "%(asctime)s %(levelname)s run_id=%(run_id)s %(name)s: %(message)s"


def configure_logging(*, level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging on stderr.

    Safe to call multiple times: existing root handlers are replaced.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream=sys.stderr)
    if fmt == "text":
        handler.addFilter(_ContextFilter())
        handler.setFormatter(logging.Formatter(fmt=_TEXT_FORMAT))
    elif fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        raise ValueError(f"unknown log format: {fmt!r}")

    root.handlers.clear()
    root.addHandler(handler)

from __future__ import annotations

import secrets
from contextvars import ContextVar


_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)
_method: ContextVar[str | None] = ContextVar("method", default=None)


def new_run_id() -> str:
    return secrets.token_hex(8)


def bind_run(run_id: str) -> None:
    _run_id.set(run_id)
    _method.set(None)


def set_method(name: str | None) -> None:
    _method.set(name)


def snapshot() -> dict[str, object]:
    """Return the current run context for logging."""

    out: dict[str, object] = {}
    if (v := _run_id.get()) is not None:
        out["run_id"] = v
    if (v := _method.get()) is not None:
        out["method"] = v
    return out

from __future__ import annotations

from .context import bind_run, new_run_id, set_method, snapshot
from .logging import configure_logging

__all__ = ["bind_run", "configure_logging", "new_run_id", "set_method", "snapshot"]

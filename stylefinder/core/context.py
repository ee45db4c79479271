from __future__ import annotations

from contextvars import ContextVar

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
style_id_ctx: ContextVar[str | None] = ContextVar("style_id", default=None)

"""Observability: LangSmith tracing (optional, env-controlled)."""

from introlink.observability.tracing import (
    flush,
    get_client,
    trace,
    traceable,
    tracing_enabled,
)

__all__ = ["trace", "traceable", "flush", "get_client", "tracing_enabled"]

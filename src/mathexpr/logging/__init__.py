"""Structured event logging for mathexpr.

Provides an event schema, a filesystem NDJSON sink, and safe emit helpers
that never raise uncaught exceptions.
"""

from mathexpr.logging.events import (
    EventLevel,
    EventType,
    ExprEvent,
    emit,
    emit_error,
    emit_info,
    get_sink,
    set_log_dir,
    truncate_context,
)
from mathexpr.logging.sink import EventSink

__all__ = [
    "EventLevel",
    "EventSink",
    "EventType",
    "ExprEvent",
    "emit",
    "emit_error",
    "emit_info",
    "get_sink",
    "set_log_dir",
    "truncate_context",
]

"""Structured log events and the helpers that record them.

Events are pydantic models serialized one per line by
:class:`~mathexpr.logging.sink.EventSink`.  Until :func:`set_log_dir` is
called there is no sink and events are dropped.  Recording an event never
raises: a failing sink is reported on stderr, at most once a minute.
"""

from __future__ import annotations

import contextlib
import sys
import time
import traceback
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from mathexpr.logging.sink import EventSink


class EventLevel(str, Enum):
    info = "info"
    error = "error"


class EventType(str, Enum):
    parse_completed = "parse_completed"
    parse_failed = "parse_failed"
    evaluate_failed = "evaluate_failed"
    sample_completed = "sample_completed"


# Expression text is unbounded; logged strings are not.
CONTEXT_VALUE_LIMIT = 256
_TRUNCATION_MARK = "...[truncated]"


def truncate_context(context: dict[str, Any]) -> dict[str, Any]:
    """Copy *context*, cutting string values (at any dict depth) to the limit."""

    def shorten(value: Any) -> Any:
        if isinstance(value, dict):
            return {key: shorten(inner) for key, inner in value.items()}
        if isinstance(value, str) and len(value) > CONTEXT_VALUE_LIMIT:
            return value[:CONTEXT_VALUE_LIMIT] + _TRUNCATION_MARK
        return value

    return shorten(context)


def _timestamp() -> str:
    # UTC, ISO-8601, "Z" suffix
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace(
        "+00:00", "Z"
    )


class ExprEvent(BaseModel):
    """One parse, evaluate or sample outcome."""

    schema_version: int = 1
    ts: str = Field(default_factory=_timestamp)
    level: EventLevel
    event_type: EventType
    message: str = ""
    context: dict[str, Any] = Field(default_factory=dict)
    error_code: str | None = None


_sink: EventSink | None = None


def set_log_dir(log_dir: str | Path | None) -> None:
    """Send events to ``<log_dir>/logs/events.ndjson``; ``None`` stops logging."""
    global _sink
    from mathexpr.logging.sink import EventSink

    _sink = None if log_dir is None else EventSink(Path(log_dir))


def get_sink() -> EventSink | None:
    return _sink


_STDERR_INTERVAL_SECS = 60.0
_last_complaint = float("-inf")


def _complain(msg: str) -> None:
    global _last_complaint
    now = time.monotonic()
    if now - _last_complaint >= _STDERR_INTERVAL_SECS:
        _last_complaint = now
        with contextlib.suppress(OSError, ValueError):
            sys.stderr.write(f"[mathexpr] {msg}\n")


def emit(event: ExprEvent) -> None:
    """Record *event* on the configured sink, if any.  Never raises."""
    sink = _sink
    if sink is None:
        return
    try:
        sink.write(
            event.model_copy(update={"context": truncate_context(event.context)})
        )
    except Exception:
        _complain(f"could not record {event.event_type.value} event:\n"
                  f"{traceback.format_exc()}")


def _emit_at(
    level: EventLevel,
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None,
    error_code: str | None = None,
) -> None:
    emit(
        ExprEvent(
            level=level,
            event_type=event_type,
            message=message,
            context=context or {},
            error_code=error_code,
        )
    )


def emit_info(
    event_type: EventType, message: str, context: dict[str, Any] | None = None
) -> None:
    _emit_at(EventLevel.info, event_type, message, context)


def emit_error(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
    *,
    error_code: str | None = None,
) -> None:
    _emit_at(EventLevel.error, event_type, message, context, error_code)

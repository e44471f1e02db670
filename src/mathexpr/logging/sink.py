"""Append-only NDJSON event file.

One JSON object per line, keys sorted.  Appends hold an exclusive
``flock`` and reads a shared one, so several processes may log to the same
directory.  Where ``fcntl`` is unavailable the file is used unlocked.
"""

from __future__ import annotations

import contextlib
import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from mathexpr.logging.events import ExprEvent

try:
    import fcntl
except ImportError:  # Windows
    fcntl = None  # type: ignore[assignment]

EVENTS_FILENAME = "events.ndjson"


@contextlib.contextmanager
def _locked(path: Path, flags: int, lock: str) -> Iterator[int]:
    """Open *path* as a raw descriptor held under an ``flock`` of kind *lock*."""
    fd = os.open(path, flags, 0o644)
    try:
        if fcntl is not None:
            fcntl.flock(fd, getattr(fcntl, lock))
        yield fd
    finally:
        # closing the descriptor releases the lock
        os.close(fd)


class EventSink:
    """Writes :class:`ExprEvent` records under ``<log_dir>/logs``."""

    def __init__(self, log_dir: Path) -> None:
        self.logs_dir = log_dir / "logs"
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self.logs_dir / EVENTS_FILENAME

    def write(self, event: ExprEvent) -> None:
        record = json.dumps(event.model_dump(mode="json"), sort_keys=True, default=str)
        data = (record + "\n").encode("utf-8")
        with _locked(self.path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, "LOCK_EX") as fd:
            os.write(fd, data)

    def read_events(
        self,
        *,
        level: str | None = None,
        event_type: str | None = None,
        limit: int = 200,
    ) -> list[dict[str, Any]]:
        """Return up to *limit* matching events, newest first."""
        matches = [
            event
            for event in reversed(self._load())
            if (level is None or event.get("level") == level)
            and (event_type is None or event.get("event_type") == event_type)
        ]
        return matches[:limit]

    def _load(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        with _locked(self.path, os.O_RDONLY, "LOCK_SH") as fd:
            size = os.fstat(fd).st_size
            raw = os.read(fd, size).decode("utf-8", errors="replace")

        events = []
        for line in raw.splitlines():
            if not line.strip():
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                # partial or foreign line
                continue
        return events

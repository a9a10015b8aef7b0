"""In-memory circular buffer log handler served by ``/api/logs``."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from dataclasses import dataclass, asdict

SERVICE_LOGGERS = (
    "cricket_hub.main",
    "cricket_hub.store",
    "cricket_hub.content.feeds",
    "cricket_hub.content.publishing",
    "cricket_hub.fixtures.service",
    "cricket_hub.fixtures.cricapi_client",
    "cricket_hub.fixtures.importer",
    "cricket_hub.settings",
)


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    logger: str
    message: str


class BufferHandler(logging.Handler):
    """Keeps the last *maxlen* records for the admin activity view."""

    def __init__(self, maxlen: int = 200) -> None:
        super().__init__()
        self._buffer: deque[LogEntry] = deque(maxlen=maxlen)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc)
                .strftime("%Y-%m-%d %H:%M:%S UTC"),
                level=record.levelname,
                logger=record.name,
                message=self.format(record),
            )
            self._buffer.append(entry)
        except Exception:
            self.handleError(record)

    def entries(self, limit: int = 100, min_level: str | None = None) -> list[dict]:
        """Newest first, optionally only records at or above *min_level*."""
        items = list(self._buffer)
        if min_level:
            threshold = logging.getLevelName(min_level.upper())
            if isinstance(threshold, int):
                items = [e for e in items if logging.getLevelName(e.level) >= threshold]
        items = items[-limit:]
        items.reverse()
        return [asdict(e) for e in items]


_handler: BufferHandler | None = None


def get_buffer_handler() -> BufferHandler:
    global _handler
    if _handler is None:
        _handler = BufferHandler(maxlen=200)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        _handler.setLevel(logging.INFO)
    return _handler


def install_buffer_handler() -> BufferHandler:
    handler = get_buffer_handler()
    for name in SERVICE_LOGGERS:
        lg = logging.getLogger(name)
        if handler not in lg.handlers:
            lg.addHandler(handler)
        lg.setLevel(logging.INFO)
    return handler

"""
Operator-facing server log and endpoint catalog.

Both are created per application instance and reached through dependencies,
so tests and handlers never share hidden module state.
"""

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, UTC
from enum import Enum as PyEnum
from typing import Protocol

from fastapi import FastAPI


HTTP_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}


class LogLevel(str, PyEnum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ServerLogEntry:
    timestamp: datetime
    level: LogLevel
    message: str


class ServerLogSource(Protocol):
    """What the server status endpoints need from a log store"""

    def entries(self) -> list[ServerLogEntry]: ...

    def append(self, level: LogLevel, message: str) -> None: ...

    def clear(self, message: str) -> None: ...


class InMemoryServerLog:
    """
    Bounded in-process log buffer, newest entry first.

    Once ``capacity`` entries are held, appending drops the oldest.
    """

    def __init__(self, capacity: int = 50):
        self._entries: deque[ServerLogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def entries(self) -> list[ServerLogEntry]:
        with self._lock:
            return list(self._entries)

    def append(self, level: LogLevel, message: str) -> None:
        entry = ServerLogEntry(timestamp=datetime.now(UTC), level=level, message=message)
        with self._lock:
            self._entries.appendleft(entry)

    def clear(self, message: str) -> None:
        """Drop every entry and leave ``message`` as the only one"""
        with self._lock:
            self._entries.clear()
        self.append(LogLevel.INFO, message)


@dataclass(frozen=True)
class EndpointInfo:
    path: str
    methods: str
    description: str


class EndpointCatalog:
    """API endpoints exposed by the application, for the server status page"""

    def __init__(self, endpoints: list[EndpointInfo] | None = None):
        self._endpoints = list(endpoints or [])

    @classmethod
    def from_app(cls, app: FastAPI, prefix: str = "/api") -> "EndpointCatalog":
        """Collect every API operation in the OpenAPI schema of ``app``, one entry per path"""
        entries = []
        for path, operations in sorted(app.openapi().get("paths", {}).items()):
            if not path.startswith(prefix):
                continue
            methods = sorted(m.upper() for m in operations if m.upper() in HTTP_METHODS)
            if not methods:
                continue
            first = operations[methods[0].lower()]
            description = first.get("summary") or first.get("operationId", path)
            entries.append(
                EndpointInfo(path=path, methods=", ".join(methods), description=description)
            )
        return cls(entries)

    def endpoints(self) -> list[EndpointInfo]:
        return list(self._endpoints)

"""Value types shared by the parser, resolver and query engine."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LogEvent:
    timestamp: str
    client_ip: str
    host: str
    remote_ip: str
    raw: str
    client_name: str = ""
    source: str = ""

    @property
    def domain(self) -> str:
        """Accessed name; the log format does not distinguish host from domain."""
        return self.host

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "client_ip": self.client_ip,
            "client_name": self.client_name,
            "host": self.host,
            "domain": self.domain,
            "remote_ip": self.remote_ip,
            "source": self.source,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class LogDayReference:
    day: str | None
    path: str
    exists: bool


@dataclass
class QueryResult:
    date: str | None
    entries: list[LogEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "date": self.date,
        }

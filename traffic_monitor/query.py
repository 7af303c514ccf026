"""Bounded, most-recent-first queries over a single day's traffic log.

Each query reads the whole file into memory before scanning it backwards.
That is fine for a day of traffic but is the ceiling on log size this
engine can serve; the short-circuit on ``limit`` only saves parsing work.
"""

import logging

from traffic_monitor.models import QueryResult
from traffic_monitor.parser import parse_line
from traffic_monitor.resolver import LogFileResolver

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000
MAX_LIMIT = 5000
ALL_CLIENTS = "all"


def clamp_limit(limit) -> int:
    """Coerce a requested limit into [1, MAX_LIMIT]; missing or non-numeric → DEFAULT_LIMIT."""
    if limit is None:
        return DEFAULT_LIMIT
    try:
        value = int(str(limit).strip())
    except ValueError:
        return DEFAULT_LIMIT
    return max(1, min(value, MAX_LIMIT))


class LogQueryEngine:
    def __init__(self, resolver: LogFileResolver):
        self._resolver = resolver

    def _read(self, path: str) -> str | None:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as exc:
            logger.warning("Could not read log file %s: %s", path, exc)
            return None

    def query(self, day: str | None = None, client: str | None = None,
              limit=None) -> QueryResult:
        """Return up to ``limit`` events for ``day``, oldest first.

        ``client`` keeps only events from that exact client IP; blank or
        ``"all"`` disables the filter.
        """
        limit = clamp_limit(limit)
        client = (client or "").strip()
        day = (day or "").strip() or None

        ref = self._resolver.resolve(day)
        result = QueryResult(date=day)
        if not ref.exists:
            return result

        content = self._read(ref.path)
        if content is None:
            return result

        for line in reversed(content.split("\n")):
            line = line.strip()
            if not line:
                continue
            event = parse_line(line)
            if event is None:
                continue
            if client and client != ALL_CLIENTS and event.client_ip != client:
                continue
            result.entries.append(event)
            if len(result.entries) >= limit:
                break

        result.entries.reverse()
        logger.debug("Query day=%s client=%s returned %d entries",
                     day, client or ALL_CLIENTS, len(result.entries))
        return result

"""Traffic log line parser: an ordered list of compiled grammars.

Line format written by the capture agent:

    [+] 2025-12-11 23:31:42 | 192.168.1.201 (Redmi-13C) → graph.facebook.com (157.240.12.13) | fonte=TLS

Older agents omitted the client name:

    [+] 2025-12-01 19:29:20 | 192.168.3.11 → example.com (1.2.3.4) | fonte=DNS
"""

import re

from traffic_monitor.models import LogEvent

_IP = r"[0-9a-fA-F.:]+"
_SOURCE_CLAUSE = r"(?:\s+\|\s+fonte=(?P<source>[A-Za-z0-9\-_]+))?"

CLIENT_NAME_PATTERN = re.compile(
    r"^\[\+\]\s+(?P<timestamp>[^|]+)\s+\|\s+"
    rf"(?P<client_ip>{_IP})\s+\((?P<client_name>[^)]+)\)\s+→\s+"
    rf"(?P<host>.+?)\s+\((?P<remote_ip>{_IP})\)"
    + _SOURCE_CLAUSE
)

LEGACY_PATTERN = re.compile(
    r"^\[\+\]\s+(?P<timestamp>[^|]+)\s+\|\s+"
    rf"(?P<client_ip>{_IP})\s+→\s+"
    rf"(?P<host>.+?)\s+\((?P<remote_ip>{_IP})\)"
    + _SOURCE_CLAUSE
)

# Tried in order; the first match wins.
GRAMMARS = (CLIENT_NAME_PATTERN, LEGACY_PATTERN)


def _group(match: re.Match, name: str) -> str:
    if name not in match.re.groupindex:
        return ""
    return (match.group(name) or "").strip()


def parse_line(line: str) -> LogEvent | None:
    """Parse a single traffic log line. Returns None for unparseable lines."""
    stripped = line.strip()
    for pattern in GRAMMARS:
        match = pattern.match(stripped)
        if match:
            return LogEvent(
                timestamp=_group(match, "timestamp"),
                client_ip=_group(match, "client_ip"),
                client_name=_group(match, "client_name"),
                host=_group(match, "host"),
                remote_ip=_group(match, "remote_ip"),
                source=_group(match, "source"),
                raw=stripped,
            )
    return None

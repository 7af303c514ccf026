"""Read-only access to the per-client byte counters kept by the traffic aggregator."""

import json
import logging

logger = logging.getLogger(__name__)


def empty_counters() -> dict:
    return {"updated_at": None, "clients": {}}


class ByteCounterReader:
    def __init__(self, path: str):
        self._path = path

    def read(self) -> dict:
        """Return the aggregate document, or the empty shape if it is missing or unusable."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return empty_counters()
        except (OSError, ValueError) as exc:
            logger.warning("Could not read byte counters %s: %s", self._path, exc)
            return empty_counters()

        if not isinstance(data, dict):
            logger.warning("Byte counters %s is not a JSON object", self._path)
            return empty_counters()
        return data

    def clients(self) -> list[str]:
        """Sorted IPs of every client present in the aggregate."""
        clients = self.read().get("clients")
        if not isinstance(clients, dict):
            return []
        return sorted(clients)

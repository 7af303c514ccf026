"""Maps a calendar day to the active or rotated traffic log file."""

import os
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from traffic_monitor.models import LogDayReference

DAY_FORMAT = "%Y-%m-%d"


def _parse_day(day: str) -> date | None:
    """Return the date for a YYYY-MM-DD string, or None if it is not one."""
    if len(day) != 10:
        return None
    try:
        return datetime.strptime(day, DAY_FORMAT).date()
    except ValueError:
        return None


class LogFileResolver:
    """Resolves `<log_file>` for today and `<log_file>-YYYY-MM-DD` for past days.

    "Today" is evaluated on every call, in ``tz`` when given and in the
    server's local time otherwise.
    """

    def __init__(self, log_file: str, tz: str | None = None, time_func=None):
        self._log_file = log_file
        self._tz = ZoneInfo(tz) if tz else None
        self._time_func = time_func or (lambda: datetime.now(self._tz))

    def today(self) -> str:
        return self._time_func().strftime(DAY_FORMAT)

    def archive_path(self, day: str) -> str:
        return f"{self._log_file}-{day}"

    def resolve(self, day: str | None = None) -> LogDayReference:
        day = (day or "").strip() or None

        if day is None or day == self.today():
            return LogDayReference(day, self._log_file, os.path.isfile(self._log_file))

        # Anything but a real calendar day never becomes a path.
        if _parse_day(day) is None:
            return LogDayReference(day, self.archive_path(day), False)

        path = self.archive_path(day)
        return LogDayReference(day, path, os.path.isfile(path))

    def available_days(self, lookback_days: int = 30) -> list[str]:
        """Days within the lookback window that have a log file, newest first."""
        today = self._time_func().date()
        days = []
        for offset in range(max(lookback_days, 0)):
            day = (today - timedelta(days=offset)).strftime(DAY_FORMAT)
            if self.resolve(day).exists:
                days.append(day)
        return days

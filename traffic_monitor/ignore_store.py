"""Operator-maintained list of ignored domain patterns, one per line.

The file is rewritten in full on every change without any locking, so two
concurrent mutations can lose an update (the last writer wins). Changes are
rare and operator-driven.
"""

from __future__ import annotations

import logging
import os
import tempfile

logger = logging.getLogger(__name__)

HEADER = "# Ignored domains (one regex per line)\n"


class ValidationError(ValueError):
    """Raised when a pattern supplied for a mutation cannot be stored as one line."""


# Characters the line-oriented file format would reinterpret on read-back.
_UNSTORABLE = ("#", "\n", "\r")


def _clean_pattern(pattern) -> str:
    if not isinstance(pattern, str) or not pattern.strip():
        raise ValidationError("invalid domain")
    pattern = pattern.strip()
    if any(c in pattern for c in _UNSTORABLE):
        raise ValidationError("domain must not contain '#' or line breaks")
    return pattern


def parse_patterns(content: str) -> list[str]:
    """Extract patterns from file content; '#' starts a comment anywhere on a line."""
    patterns = []
    seen = set()
    for line in content.splitlines():
        line = line.split("#", 1)[0].strip()
        if not line or line in seen:
            continue
        seen.add(line)
        patterns.append(line)
    return patterns


class IgnoredDomainStore:
    def __init__(self, path: str):
        self._path = path

    def _ensure_file(self):
        """Create the parent directory and a header-only file if either is missing."""
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self._path):
            with open(self._path, "w", encoding="utf-8") as f:
                f.write(HEADER)
            logger.info("Created ignore file %s", self._path)

    def list(self) -> list[str]:
        try:
            self._ensure_file()
            with open(self._path, "r", encoding="utf-8") as f:
                return parse_patterns(f.read())
        except OSError as exc:
            logger.warning("Could not read ignore file %s: %s", self._path, exc)
            return []

    def _write(self, patterns: list[str]) -> list[str]:
        """Replace the file with ``patterns``. Returns what is on disk afterwards."""
        content = HEADER + "".join(p + "\n" for p in patterns)
        try:
            self._ensure_file()
            fd, tmp_path = tempfile.mkstemp(
                dir=os.path.dirname(self._path) or ".", prefix=".ignore-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_path, self._path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as exc:
            logger.error("Could not write ignore file %s: %s", self._path, exc)
            return self.list()
        return patterns

    def add(self, pattern) -> list[str]:
        pattern = _clean_pattern(pattern)
        patterns = self.list()
        if pattern not in patterns:
            patterns.append(pattern)
            logger.info("Ignored domain added: %s", pattern)
        return self._write(patterns)

    def remove(self, pattern) -> list[str]:
        pattern = _clean_pattern(pattern)
        patterns = self.list()
        remaining = [p for p in patterns if p != pattern]
        if len(remaining) != len(patterns):
            logger.info("Ignored domain removed: %s", pattern)
        return self._write(remaining)

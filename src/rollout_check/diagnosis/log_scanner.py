"""Scan container log output for lines that look like application errors."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rollout_check.diagnosis.models import EvidenceSet
from rollout_check.errors import LogStreamError

logger = logging.getLogger(__name__)

DEFAULT_EVIDENCE_LIMIT = 10
DEFAULT_EXCLUDE_PATTERNS = ("datadog",)
ERROR_MARKER = "error"


class LogErrorScanner:
    """Collects distinct error lines from a log stream, up to a fixed limit.

    A line qualifies when it contains ``error`` and none of the exclude
    patterns, both compared case-insensitively. Reading stops as soon as the
    limit is reached, so the rest of a large stream is never consumed.
    """

    def __init__(
        self,
        limit: int = DEFAULT_EVIDENCE_LIMIT,
        exclude_patterns: Sequence[str] = DEFAULT_EXCLUDE_PATTERNS,
    ) -> None:
        if limit < 1:
            raise ValueError(f"Evidence limit must be at least 1, got {limit}")
        self.limit = limit
        self.exclude_patterns = tuple(p.lower() for p in exclude_patterns)

    def qualifies(self, line: str) -> bool:
        lowered = line.lower()
        if ERROR_MARKER not in lowered:
            return False
        return not any(p in lowered for p in self.exclude_patterns)

    def scan(self, lines: Iterable[str]) -> EvidenceSet:
        """Return the evidence found in ``lines``; read failures end the scan early."""
        collected: list[str] = []
        seen: set[str] = set()
        read_error: str | None = None
        try:
            for line in lines:
                if line in seen or not self.qualifies(line):
                    continue
                seen.add(line)
                collected.append(line)
                if len(collected) >= self.limit:
                    break
        except LogStreamError as e:
            logger.warning("%s", e)
            read_error = str(e)
        return EvidenceSet(
            lines=collected,
            limit=self.limit,
            truncated=len(collected) >= self.limit,
            read_error=read_error,
        )

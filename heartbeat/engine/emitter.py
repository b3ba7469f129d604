from __future__ import annotations

import logging
import sys
from typing import TextIO

from pydantic_core import PydanticSerializationError

from heartbeat.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


class JsonLinesEmitter:
    """Writes each snapshot as one JSON object per line.

    Encoding or write failures are logged and the snapshot is dropped;
    ``emit()`` never raises for them.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.emitted = 0
        self.failed = 0

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a redirected sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def emit(self, snapshot: Snapshot) -> bool:
        self.report_anomalies(snapshot)
        try:
            line = snapshot.model_dump_json()
        except (PydanticSerializationError, ValueError) as exc:
            self.failed += 1
            logger.error("Error serializing snapshot %d: %s", snapshot.timestamp, exc)
            return False

        try:
            self.stream.write(line + "\n")
            self.stream.flush()
        except OSError as exc:
            self.failed += 1
            logger.error("Error writing snapshot %d: %s", snapshot.timestamp, exc)
            return False

        self.emitted += 1
        return True

    @staticmethod
    def report_anomalies(snapshot: Snapshot) -> None:
        if snapshot.cpu_spike_detected:
            logger.warning("CPU spike detected (%.1f%%)", snapshot.cpu_usage_percent)
        if snapshot.memory_leak_suspected:
            logger.warning(
                "Memory leak suspected (%d MB used, %.1f%%)",
                snapshot.memory_used_mb,
                snapshot.memory_usage_percent,
            )

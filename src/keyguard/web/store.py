"""In-memory registry of scans for the lifetime of the server process."""

from __future__ import annotations

import logging
import threading

from keyguard.scanner.engine import ScanRun
from keyguard.scanner.models import ProgressEvent, ScanResult

logger = logging.getLogger(__name__)


class ScanStore:
    """Lock-guarded map of scan id to its run.

    Worker threads drive the runs; request handlers read snapshots. Only the
    newest ``max_finished`` finished runs are kept; runs still scanning are
    never evicted.
    """

    def __init__(self, max_finished: int = 100) -> None:
        self._runs: dict[str, ScanRun] = {}
        self._lock = threading.Lock()
        self._max_finished = max_finished

    def add(self, run: ScanRun) -> None:
        with self._lock:
            self._evict_finished()
            self._runs[run.result.id] = run

    def _evict_finished(self) -> None:
        # insertion order is start order, so the oldest go first
        finished = [
            scan_id for scan_id, run in self._runs.items() if run.result.is_finished
        ]
        excess = len(finished) - self._max_finished
        for scan_id in finished[: max(excess, 0)]:
            del self._runs[scan_id]
            logger.debug("Evicted finished scan %s", scan_id)

    def get(self, scan_id: str) -> ScanResult | None:
        with self._lock:
            run = self._runs.get(scan_id)
        return run.snapshot() if run else None

    def progress(self, scan_id: str) -> ProgressEvent | None:
        """Latest progress event, synthesized from check counts if none yet."""
        with self._lock:
            run = self._runs.get(scan_id)
        if run is None:
            return None

        event = run.latest_event
        if event is not None:
            return event

        result = run.snapshot()
        done, total = result.completed_checks, result.total_checks
        return ProgressEvent(
            stage="Scanning",
            progress=done * 100 // total if total else 0,
            message=f"Completed {done}/{total} checks",
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._runs)

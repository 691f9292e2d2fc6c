"""In-memory holder for the current result snapshot and draw listing."""

from __future__ import annotations

from datetime import datetime, timezone
import threading
from typing import Sequence

from kerala_results.models import DrawLink, ResultSnapshot

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SnapshotStore:
    """Publish-by-replacement holder for the served dataset.

    Readers take a reference to the current immutable snapshot and keep using
    it even if a refresh publishes a new one meanwhile. Publishing swaps the
    reference; it never edits the snapshot readers already hold.
    """

    def __init__(self, snapshot: ResultSnapshot | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot = snapshot if snapshot is not None else ResultSnapshot(last_updated=EPOCH)
        self._draws: tuple[DrawLink, ...] = ()

    def current(self) -> ResultSnapshot:
        return self._snapshot

    def publish(self, snapshot: ResultSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def draws(self) -> tuple[DrawLink, ...]:
        return self._draws

    def publish_draws(self, draws: Sequence[DrawLink]) -> None:
        with self._lock:
            self._draws = tuple(draws)

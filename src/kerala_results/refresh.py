"""Refresh orchestration: list draws, process documents concurrently, publish.

Every document runs through its own pipeline on a worker thread. A document
that fails to download or parse is logged and left out; the others still make
it into the new snapshot.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta
import logging
import threading
import time
from typing import Callable, Sequence
from zoneinfo import ZoneInfo

import requests

from kerala_results.config import Settings
from kerala_results.io.snapshot_json import save_snapshot
from kerala_results.models import DrawLink, LotteryResult, ResultSnapshot
from kerala_results.pipeline import process_pdf
from kerala_results.sources.kerala_site import fetch_document, fetch_draw_list, new_session
from kerala_results.store import SnapshotStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildOutcome:
    """Result of processing one listing's worth of documents.

    Attributes:
        snapshot: Snapshot holding every draw that processed cleanly.
        failed: Names of draws that were skipped.
    """

    snapshot: ResultSnapshot
    failed: tuple[str, ...]


def refresh_time_on(day: datetime, refresh_hour: int) -> datetime:
    """Return ``refresh_hour:00`` on ``day``'s date in ``day``'s timezone."""

    return day.replace(hour=refresh_hour, minute=0, second=0, microsecond=0)


def is_outdated(last_updated: datetime, now: datetime, refresh_hour: int = 15, tz: str = "Asia/Kolkata") -> bool:
    """Tell whether a snapshot built at ``last_updated`` misses today's results.

    Results for a day are expected after ``refresh_hour`` local time. A
    snapshot is outdated once that time has passed and it was built before it.
    """

    zone = ZoneInfo(tz)
    local_now = now.astimezone(zone)
    today_refresh = refresh_time_on(local_now, refresh_hour)
    return last_updated.astimezone(zone) < today_refresh and local_now > today_refresh


def next_refresh_at(now: datetime, refresh_hour: int = 15, tz: str = "Asia/Kolkata") -> datetime:
    """Return the next local ``refresh_hour:00`` strictly after ``now``."""

    local_now = now.astimezone(ZoneInfo(tz))
    candidate = refresh_time_on(local_now, refresh_hour)
    if local_now >= candidate:
        candidate = refresh_time_on(local_now + timedelta(days=1), refresh_hour)
    return candidate


def build_snapshot(
    draws: Sequence[DrawLink],
    fetch: Callable[[str], bytes],
    max_workers: int = 4,
    process: Callable[[bytes], LotteryResult] | None = None,
    now: datetime | None = None,
) -> BuildOutcome:
    """Process every listed draw document concurrently.

    Draws without a name are ignored. When two draws share a name the later
    listing row wins, matching the order of the listing page.

    Args:
        draws: Listing rows to process.
        fetch: Downloads a document given its link.
        max_workers: Worker thread count.
        process: Turns document bytes into a result; :func:`process_pdf` by
            default.
        now: Snapshot timestamp; current local time by default.

    Returns:
        The new snapshot and the names of the draws that failed.
    """

    process = process or process_pdf

    def run(draw: DrawLink) -> LotteryResult:
        return process(fetch(draw.pdf_link))

    named = [draw for draw in draws if draw.lottery_name]
    results: dict[str, LotteryResult] = {}
    failed: list[str] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures: list[tuple[DrawLink, Future[LotteryResult]]] = [
            (draw, executor.submit(run, draw)) for draw in named
        ]
        for draw, future in futures:
            try:
                results[draw.lottery_name] = future.result()
            except Exception:
                logger.exception(
                    "Skipping draw %s", draw.lottery_name, extra={"draw": draw.lottery_name}
                )
                failed.append(draw.lottery_name)

    snapshot = ResultSnapshot(last_updated=now or datetime.now().astimezone(), results=results)
    return BuildOutcome(snapshot=snapshot, failed=tuple(failed))


def refresh_snapshot(
    settings: Settings,
    store: SnapshotStore,
    session: requests.Session | None = None,
) -> ResultSnapshot | None:
    """Rebuild, persist and publish the snapshot.

    The previous snapshot stays in place when the listing cannot be fetched or
    when every listed document failed.

    Returns:
        The published snapshot, or ``None`` when nothing was published.
    """

    session = session or new_session()
    started = time.monotonic()
    draws = fetch_draw_list(session, settings.draw_list_url, timeout=settings.request_timeout)
    store.publish_draws(draws)

    outcome = build_snapshot(
        draws,
        fetch=lambda url: fetch_document(session, url, timeout=settings.request_timeout),
        max_workers=settings.max_workers,
    )
    duration_ms = int((time.monotonic() - started) * 1000)
    if outcome.failed and not outcome.snapshot.results:
        logger.error(
            "Every draw failed; keeping previous snapshot",
            extra={"failed_count": len(outcome.failed), "duration_ms": duration_ms},
        )
        return None

    save_snapshot(outcome.snapshot, settings.results_file)
    store.publish(outcome.snapshot)
    logger.info(
        "Published %d draws",
        len(outcome.snapshot.results),
        extra={
            "draw_count": len(outcome.snapshot.results),
            "failed_count": len(outcome.failed),
            "duration_ms": duration_ms,
        },
    )
    return outcome.snapshot


class RefreshWorker(threading.Thread):
    """Daemon thread that refreshes the snapshot once a day.

    On start it refreshes if the current snapshot is empty or outdated, then
    sleeps until the next refresh time and checks again. ``stop()`` wakes it up
    and ends the loop.
    """

    def __init__(
        self,
        settings: Settings,
        store: SnapshotStore,
        refresh: Callable[[Settings, SnapshotStore], object] = refresh_snapshot,
        clock: Callable[[], datetime] = lambda: datetime.now().astimezone(),
    ) -> None:
        super().__init__(name="kerala-results-refresh", daemon=True)
        self.settings = settings
        self.store = store
        self._refresh = refresh
        self._clock = clock
        self._stop_event = threading.Event()

    def check_once(self) -> bool:
        """Refresh if outdated. Returns whether a refresh was attempted."""

        now = self._clock()
        snapshot = self.store.current()
        outdated = is_outdated(snapshot.last_updated, now, self.settings.refresh_hour, self.settings.timezone)
        if snapshot.results and not outdated:
            logger.info("Data is up-to-date")
            return False
        logger.info("Data is outdated, refreshing")
        try:
            self._refresh(self.settings, self.store)
        except Exception:
            logger.exception("Refresh failed")
        return True

    def run(self) -> None:
        while not self._stop_event.is_set():
            self.check_once()
            now = self._clock()
            wait = next_refresh_at(now, self.settings.refresh_hour, self.settings.timezone) - now
            self._stop_event.wait(max(wait.total_seconds(), 1.0))

    def stop(self) -> None:
        self._stop_event.set()

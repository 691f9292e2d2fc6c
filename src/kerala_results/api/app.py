"""HTTP surface: list results, list current draws, check tickets."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kerala_results.config import Settings
from kerala_results.errors import SnapshotError
from kerala_results.io.snapshot_json import load_snapshot
from kerala_results.matching.matcher import check_tickets
from kerala_results.refresh import RefreshWorker
from kerala_results.store import SnapshotStore

logger = logging.getLogger(__name__)

WORKER_JOIN_TIMEOUT = 10.0


def load_store(settings: Settings) -> SnapshotStore:
    """Create a store seeded from the snapshot file when one is readable."""

    try:
        snapshot = load_snapshot(settings.results_file)
    except FileNotFoundError:
        logger.info("%s not found, starting empty", settings.results_file)
        return SnapshotStore()
    except SnapshotError:
        logger.exception("Ignoring unreadable snapshot %s", settings.results_file)
        return SnapshotStore()
    logger.info("Loaded existing data from %s", settings.results_file)
    return SnapshotStore(snapshot)


def create_app(
    settings: Settings | None = None,
    store: SnapshotStore | None = None,
    start_refresh: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service settings; read from the environment when omitted.
        store: Snapshot holder; loaded from ``settings.results_file`` when
            omitted.
        start_refresh: Run the daily refresh worker while the app is up.
    """

    settings = settings or Settings.from_env()
    store = store or load_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        worker = RefreshWorker(settings, store) if start_refresh else None
        if worker is not None:
            worker.start()
        try:
            yield
        finally:
            if worker is not None:
                worker.stop()
                worker.join(timeout=WORKER_JOIN_TIMEOUT)
                if worker.is_alive():
                    logger.warning("Refresh worker still running after %.0fs", WORKER_JOIN_TIMEOUT)

    app = FastAPI(title="Kerala Lottery Results API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.state.store = store
    app.state.settings = settings

    @app.get("/")
    async def root():
        snapshot = store.current()
        return {
            "name": "Kerala Lottery Results API",
            "last_updated": snapshot.last_updated.isoformat(),
            "draws_loaded": len(snapshot.results),
            "endpoints": {
                "results": "GET /results",
                "lotteries": "GET /lotteries",
                "check_tickets": "POST /check-tickets",
            },
        }

    @app.get("/results")
    async def get_all_results():
        return store.current().to_dict()

    @app.get("/lotteries")
    async def list_lotteries():
        return [draw.to_dict() for draw in store.draws()]

    @app.post("/check-tickets")
    async def post_check_tickets(tickets: list[str] = Body(...)):
        winners, invalid = check_tickets(
            store.current(), tickets, deduplicate=settings.deduplicate_winners
        )
        logger.info("Checked tickets", extra={"tickets": len(tickets)})
        return {"winners": winners, "invalid": list(invalid)}

    return app

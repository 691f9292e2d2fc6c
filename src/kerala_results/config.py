"""Runtime settings read from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

DEFAULT_DRAW_LIST_URL = "https://statelottery.kerala.gov.in/index.php/lottery-result-view"
TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Service configuration.

    Attributes:
        results_file: Snapshot JSON path.
        draw_list_url: Result listing page to enumerate draws from.
        refresh_hour: Local hour after which a new day's results are expected.
        timezone: IANA zone the refresh hour is expressed in.
        max_workers: Documents processed concurrently during a refresh.
        request_timeout: Per-request HTTP timeout in seconds.
        deduplicate_winners: Record a ticket at most once per tier.
        log_json: Emit JSON log lines instead of plain text.
        host: Interface the HTTP service binds to.
        port: TCP port the HTTP service listens on.
    """

    results_file: Path = Path("results.json")
    draw_list_url: str = DEFAULT_DRAW_LIST_URL
    refresh_hour: int = 15
    timezone: str = "Asia/Kolkata"
    max_workers: int = 4
    request_timeout: float = 30.0
    deduplicate_winners: bool = False
    log_json: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``KERALA_*`` variables, falling back to defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed or is out of range.
        """

        env = os.environ if environ is None else environ
        defaults = cls()
        settings = cls(
            results_file=Path(env.get("KERALA_RESULTS_FILE", str(defaults.results_file))),
            draw_list_url=env.get("KERALA_DRAW_LIST_URL", defaults.draw_list_url),
            refresh_hour=int(env.get("KERALA_REFRESH_HOUR", defaults.refresh_hour)),
            timezone=env.get("KERALA_TIMEZONE", defaults.timezone),
            max_workers=int(env.get("KERALA_MAX_WORKERS", defaults.max_workers)),
            request_timeout=float(env.get("KERALA_REQUEST_TIMEOUT", defaults.request_timeout)),
            deduplicate_winners=_as_bool(env.get("KERALA_DEDUPLICATE_WINNERS"), defaults.deduplicate_winners),
            log_json=_as_bool(env.get("KERALA_LOG_JSON"), defaults.log_json),
            host=env.get("KERALA_HOST", defaults.host),
            port=int(env.get("KERALA_PORT", defaults.port)),
        )
        if not 0 <= settings.refresh_hour <= 23:
            raise ValueError(f"KERALA_REFRESH_HOUR must be 0-23, got {settings.refresh_hour}")
        if settings.max_workers < 1:
            raise ValueError(f"KERALA_MAX_WORKERS must be positive, got {settings.max_workers}")
        if not 0 < settings.port < 65536:
            raise ValueError(f"KERALA_PORT must be 1-65535, got {settings.port}")
        return settings


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES

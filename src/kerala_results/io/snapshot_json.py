"""JSON persistence for result snapshots."""

from __future__ import annotations

from datetime import datetime
import json
import os
from pathlib import Path
import re
import tempfile

from kerala_results.errors import SnapshotError
from kerala_results.models import LotteryResult, ResultSnapshot

FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, including the nanosecond form with a ``Z`` suffix.

    The fraction is cut or padded to microseconds.
    """

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = FRACTION_RE.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def snapshot_from_dict(data: object) -> ResultSnapshot:
    """Build a snapshot from its decoded JSON form.

    Expected shape: ``{"last_updated": ISO-8601, "results": {draw: {tier: [..]}}}``.

    Raises:
        SnapshotError: If the shape or any value is wrong.
    """

    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    try:
        last_updated = parse_timestamp(str(data["last_updated"]))
        raw_results = data["results"] or {}
    except KeyError as exc:
        raise SnapshotError(f"Snapshot missing field {exc}") from exc
    except ValueError as exc:
        raise SnapshotError(f"Invalid last_updated: {exc}") from exc

    if not isinstance(raw_results, dict):
        raise SnapshotError("Snapshot 'results' must be an object")

    results: dict[str, LotteryResult] = {}
    for draw_name, tiers in raw_results.items():
        if not isinstance(tiers, dict) or not all(isinstance(values, list) for values in tiers.values()):
            raise SnapshotError(f"Draw '{draw_name}' must map positions to lists")
        results[draw_name] = LotteryResult.from_dict(tiers)
    return ResultSnapshot(last_updated=last_updated, results=results)


def load_snapshot(path: Path) -> ResultSnapshot:
    """Load a snapshot file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        SnapshotError: If the file is not a valid snapshot.
    """

    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Snapshot {path} is not valid JSON: {exc}") from exc
    return snapshot_from_dict(data)


def save_snapshot(snapshot: ResultSnapshot, path: Path) -> None:
    """Write ``snapshot`` as indented JSON, replacing ``path`` atomically.

    Readers of ``path`` see either the previous file or the new one in full.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(snapshot.to_dict(), handle, indent=4)
            handle.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

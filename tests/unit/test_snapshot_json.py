"""Unit tests for snapshot JSON persistence."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import json
from pathlib import Path

import pytest

from kerala_results.errors import SnapshotError
from kerala_results.io.snapshot_json import load_snapshot, parse_timestamp, save_snapshot, snapshot_from_dict
from kerala_results.models import LotteryResult, ResultSnapshot


def test_save_and_load_snapshot(tmp_path: Path) -> None:
    """A saved snapshot should load back with the same contents."""

    path = tmp_path / "data" / "results.json"
    snapshot = ResultSnapshot(
        last_updated=datetime(2024, 7, 29, 9, 45, tzinfo=timezone.utc),
        results={"Akshaya AK-650": LotteryResult({"Series": ("A",), "1st": ("AB 123456",)})},
    )

    save_snapshot(snapshot, path)
    loaded = load_snapshot(path)

    assert loaded.last_updated == snapshot.last_updated
    assert loaded.results["Akshaya AK-650"].series_letter == "A"
    assert [item.name for item in path.parent.iterdir()] == ["results.json"]


def test_save_snapshot_replaces_existing_file(tmp_path: Path) -> None:
    """Saving over an existing file should replace its contents."""

    path = tmp_path / "results.json"
    path.write_text("stale", encoding="utf-8")

    save_snapshot(ResultSnapshot(last_updated=datetime(2024, 1, 1, tzinfo=timezone.utc)), path)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "last_updated": "2024-01-01T00:00:00+00:00",
        "results": {},
    }


def test_load_snapshot_rejects_invalid_json(tmp_path: Path) -> None:
    """Malformed JSON should raise SnapshotError."""

    path = tmp_path / "results.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotError, match="not valid JSON"):
        load_snapshot(path)


def test_load_snapshot_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    """A missing snapshot file should raise FileNotFoundError."""

    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "absent.json")


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"results": {}},
        {"last_updated": "yesterday", "results": {}},
        {"last_updated": "2024-01-01T00:00:00+00:00", "results": {"X": {"1st": "1234"}}},
    ],
)
def test_snapshot_from_dict_rejects_bad_shapes(data: object) -> None:
    """Wrongly shaped snapshot data should raise SnapshotError."""

    with pytest.raises(SnapshotError):
        snapshot_from_dict(data)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (
            "2024-07-29T15:04:05.123456789+05:30",
            datetime(2024, 7, 29, 15, 4, 5, 123456, tzinfo=timezone(timedelta(hours=5, minutes=30))),
        ),
        ("2024-07-29T09:34:05.5Z", datetime(2024, 7, 29, 9, 34, 5, 500000, tzinfo=timezone.utc)),
        ("2024-07-29T09:34:05Z", datetime(2024, 7, 29, 9, 34, 5, tzinfo=timezone.utc)),
    ],
)
def test_parse_timestamp_accepts_rfc3339_nano(value: str, expected: datetime) -> None:
    """Nanosecond fractions and a Z suffix should parse on every supported Python."""

    assert parse_timestamp(value) == expected


def test_load_snapshot_reads_nanosecond_timestamps(tmp_path: Path) -> None:
    """Snapshot files stamped with nanosecond UTC times should load."""

    path = tmp_path / "results.json"
    path.write_text(
        json.dumps({"last_updated": "2024-07-29T09:34:05.987654321Z", "results": {"A": {"Series": ["A"]}}}),
        encoding="utf-8",
    )

    snapshot = load_snapshot(path)

    assert snapshot.last_updated == datetime(2024, 7, 29, 9, 34, 5, 987654, tzinfo=timezone.utc)
    assert snapshot.results["A"].series_letter == "A"

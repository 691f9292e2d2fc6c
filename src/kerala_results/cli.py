"""CLI entrypoint for parsing result PDFs, checking tickets, refreshing and serving."""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime
import json
from pathlib import Path
import sys
from typing import Sequence

import uvicorn

from kerala_results.api.app import create_app
from kerala_results.config import Settings
from kerala_results.io.snapshot_json import load_snapshot, save_snapshot
from kerala_results.log import configure_logging
from kerala_results.matching.matcher import check_tickets
from kerala_results.models import ResultSnapshot
from kerala_results.pipeline import process_pdf
from kerala_results.refresh import refresh_snapshot
from kerala_results.reporting.report_md import build_report_md
from kerala_results.store import SnapshotStore
from kerala_results.validation import result_issues, validate_results


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Render rows as a left-aligned terminal table.

    Every column is padded to its widest cell, header included.
    """

    widths = [max(len(cell) for cell in column) for column in zip(headers, *data_rows)]

    def line(cells: Sequence[str], sep: str = " | ") -> str:
        return sep.join(cell.ljust(width) for cell, width in zip(cells, widths))

    rule = line(["-" * width for width in widths], sep="-+-")
    return "\n".join([line(headers), rule, *(line(row) for row in data_rows)])


def build_arg_parser(settings: Settings) -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Args:
        settings: Environment settings supplying option defaults.

    Returns:
        Parser with ``parse``, ``check``, ``refresh`` and ``serve`` subcommands.
    """

    parser = argparse.ArgumentParser(description="Extract and check Kerala lottery results.")
    parser.add_argument("--log-json", action="store_true", default=settings.log_json, help="Emit JSON logs.")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level.")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Extract results from one result PDF.")
    parse_cmd.add_argument("--pdf", required=True, type=Path, help="Path to the result PDF.")
    parse_cmd.add_argument("--name", default=None, help="Draw name (default: PDF file stem).")
    parse_cmd.add_argument("--output", type=Path, default=None, help="Write a snapshot JSON here.")
    parse_cmd.add_argument("--report", type=Path, default=None, help="Write a markdown report here.")
    parse_cmd.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the extracted result has shape problems instead of warning.",
    )

    check_cmd = commands.add_parser("check", help="Check tickets against a snapshot file.")
    check_cmd.add_argument("tickets", nargs="+", help="Tickets such as AB123456.")
    check_cmd.add_argument("--results", type=Path, default=settings.results_file, help="Snapshot JSON path.")
    check_cmd.add_argument(
        "--deduplicate",
        action="store_true",
        default=settings.deduplicate_winners,
        help="Record a ticket at most once per prize position.",
    )

    refresh_cmd = commands.add_parser("refresh", help="Download every listed draw and rebuild the snapshot.")
    refresh_cmd.add_argument("--results", type=Path, default=settings.results_file, help="Snapshot JSON path.")
    refresh_cmd.add_argument("--report", type=Path, default=None, help="Write a markdown report here.")

    serve_cmd = commands.add_parser("serve", help="Run the HTTP API with the daily refresh.")
    serve_cmd.add_argument("--results", type=Path, default=settings.results_file, help="Snapshot JSON path.")
    serve_cmd.add_argument("--host", default=settings.host, help="Interface to bind.")
    serve_cmd.add_argument("--port", type=int, default=settings.port, help="Port to listen on.")
    serve_cmd.add_argument(
        "--no-refresh",
        action="store_true",
        help="Serve the snapshot file as is without the daily refresh.",
    )
    return parser


def _run_parse(args: argparse.Namespace) -> int:
    if not args.pdf.exists():
        raise SystemExit(f"PDF not found: {args.pdf}")

    name = args.name or args.pdf.stem
    result = process_pdf(args.pdf.read_bytes())
    snapshot = ResultSnapshot(last_updated=datetime.now().astimezone(), results={name: result})

    if args.strict:
        validate_results(snapshot.results)
    for issue in result_issues(result):
        print(f"WARNING: {issue}")

    rows = [[position, str(len(values)), " ".join(values)] for position, values in result.tiers.items()]
    print(_format_table(["position", "count", "fragments"], rows))

    if args.output is not None:
        save_snapshot(snapshot, args.output)
        print(f"Wrote snapshot to {args.output}")
    if args.report is not None:
        args.report.write_text(build_report_md(snapshot), encoding="utf-8")
        print(f"Wrote report to {args.report}")
    return 0


def _run_check(args: argparse.Namespace) -> int:
    if not args.results.exists():
        raise SystemExit(f"Results file not found: {args.results}")

    snapshot = load_snapshot(args.results)
    winners, invalid = check_tickets(snapshot, args.tickets, deduplicate=args.deduplicate)
    print(json.dumps({"winners": winners, "invalid": list(invalid)}, indent=2))
    return 1 if invalid else 0


def _run_refresh(args: argparse.Namespace, settings: Settings) -> int:
    settings = replace(settings, results_file=args.results)
    snapshot = refresh_snapshot(settings, SnapshotStore())
    if snapshot is None:
        print("Refresh failed; previous snapshot left in place.")
        return 1

    print(f"Wrote {len(snapshot.results)} draws to {settings.results_file}")
    if args.report is not None:
        args.report.write_text(build_report_md(snapshot), encoding="utf-8")
        print(f"Wrote report to {args.report}")
    return 0


def _run_serve(args: argparse.Namespace, settings: Settings) -> int:
    settings = replace(settings, results_file=args.results, host=args.host, port=args.port)
    app = create_app(settings, start_refresh=not args.no_refresh)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the selected subcommand.

    Returns:
        Process exit status.
    """

    settings = Settings.from_env()
    parser = build_arg_parser(settings)
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "INFO", json_format=args.log_json)

    if args.command == "parse":
        return _run_parse(args)
    if args.command == "check":
        return _run_check(args)
    if args.command == "serve":
        return _run_serve(args, settings)
    return _run_refresh(args, settings)


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError

from wikiedit.adapters.wikibase import parse_edit_request
from wikiedit.app import list_recent_changes, plan_entity_edit, submit_entity_edit
from wikiedit.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from wikiedit.domain.entity_updates import EditRequest

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan and submit Wikibase entity edits")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log HTTP round trips and other debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Print the minimal edit payload for a change file")
    plan.add_argument("entity_id", type=str, help="Entity to edit, e.g. Q42")
    plan.add_argument(
        "--changes",
        type=Path,
        required=True,
        help="JSON file describing the requested changes",
    )

    edit = subparsers.add_parser("edit", help="Plan and submit an edit")
    edit.add_argument("entity_id", type=str, help="Entity to edit, e.g. Q42")
    edit.add_argument(
        "--changes",
        type=Path,
        required=True,
        help="JSON file describing the requested changes",
    )
    edit.add_argument("--summary", type=str, help="Edit summary")
    edit.add_argument("--bot", action="store_true", help="Flag the edit as a bot edit")
    edit.add_argument(
        "--dry-run",
        action="store_true",
        help="Plan the edit and print the payload without submitting it",
    )

    recent = subparsers.add_parser("recent-changes", help="List recent changes from the feed")
    recent.add_argument(
        "--since",
        type=str,
        help="ISO-8601 timestamp (UTC) of the oldest change to list",
    )

    return parser.parse_args(list(argv))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _load_edit_request(path: Path) -> EditRequest:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read change file {path}: {exc}") from exc
    try:
        return parse_edit_request(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid change file {path}: {exc}") from exc


def _write_json(data: object) -> None:
    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    request: EditRequest | None = None
    since: datetime | None = None
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        if parsed_args.command in {"plan", "edit"}:
            request = _load_edit_request(parsed_args.changes)
        elif parsed_args.since:
            since = _parse_iso_datetime(parsed_args.since)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "plan" and request is not None:
            update = plan_entity_edit(parsed_args.entity_id, request)
            _write_json(update.as_json())
        elif parsed_args.command == "edit" and request is not None:
            outcome = submit_entity_edit(
                parsed_args.entity_id,
                request,
                summary=parsed_args.summary,
                bot=parsed_args.bot,
                dry_run=parsed_args.dry_run,
            )
            if outcome.result is None:
                _write_json(outcome.update.as_json())
            else:
                log.info(
                    "Saved %s as revision %s",
                    outcome.result.entity_id,
                    outcome.result.revision_id,
                )
        elif parsed_args.command == "recent-changes":
            for change in list_recent_changes(since=since):
                sys.stdout.write(
                    f"{change.timestamp.isoformat()}\t{change.author}\t{change.title}\n"
                )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

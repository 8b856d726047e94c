"""Command-line interface for deriving insights from Statistics Service payloads."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from crickstats.api import fixture_insights_to_response, player_insights_to_response
from crickstats.client import StatsClient
from crickstats.config import load_settings
from crickstats.config.settings import Settings
from crickstats.config_loader import ServiceProfile
from crickstats.countdown import countdown
from crickstats.insights import build_fixture_insights, build_player_insights
from crickstats.logging import configure_logging
from crickstats.navigation import TABS, SelectionContext


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Derive fantasy cricket insights from Statistics Service data")
    parser.add_argument("--profile", type=Path, default=None, help="Load service settings from a JSON profile")
    parser.add_argument("--save-profile", type=Path, default=None, help="Save the resolved service settings as JSON")
    parser.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    subparsers = parser.add_subparsers(dest="command", required=True)

    player = subparsers.add_parser("player", help="Player-card insights from a saved payload")
    player.add_argument("payload", type=Path, help="Path to a player-card JSON payload")
    player.add_argument("--year", type=int, default=None, help="Only keep competition rows from this year")

    fixture = subparsers.add_parser("fixture", help="Fixture leaderboards from a saved payload")
    fixture.add_argument("payload", type=Path, help="Path to a fixture JSON payload")
    fixture.add_argument("--team", default=None, help="Team tab filter (omit for Overall)")

    timer = subparsers.add_parser("countdown", help="Time left before a scheduled fixture")
    timer.add_argument("scheduled", help="Scheduled start, e.g. '2024-05-01 14:00:00'")

    fetch = subparsers.add_parser("fetch", help="Fetch a player card and derive its insights")
    fetch.add_argument("--player", required=True, help="Player uid")
    fetch.add_argument("--match", required=True, help="Season game uid")
    fetch.add_argument("--year", type=int, default=None, help="Season year sent with the request")
    fetch.add_argument("--tab", default="form", choices=TABS, help="Tab requested from the service")
    return parser


def _read_payload(path: Path) -> Any:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    return data


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    if args.profile:
        settings = ServiceProfile.load(args.profile).apply(settings)
    if args.save_profile:
        ServiceProfile.from_settings(settings).save(args.save_profile)
        logger.info("Saved service profile to %s", args.save_profile)
    return settings


def _run(args: argparse.Namespace, settings: Settings) -> tuple[dict[str, Any], int]:
    if args.command == "player":
        insights = build_player_insights(_read_payload(args.payload), year=args.year)
        return player_insights_to_response(insights).model_dump(mode="json"), 0
    if args.command == "fixture":
        insights = build_fixture_insights(
            _read_payload(args.payload),
            team=args.team,
            offset=settings.timezone_offset,
        )
        return fixture_insights_to_response(insights).model_dump(mode="json"), 0
    if args.command == "countdown":
        return {"scheduled": args.scheduled, "text": countdown(args.scheduled, offset=settings.timezone_offset)}, 0

    selection = SelectionContext(player_uid=args.player, match_uid=args.match, year=args.year, tab=args.tab)
    with StatsClient(settings) as client:
        result = client.fetch_player_card(selection)
    if result.status == "error":
        return {"status": "error", "error": result.error}, 1
    if result.status == "empty":
        return {"status": "no_data"}, 0
    insights = build_player_insights(result.payload, year=args.year)
    return player_insights_to_response(insights).model_dump(mode="json"), 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = _build_parser().parse_args(argv)
    settings = _resolve_settings(args)

    try:
        payload, exit_code = _run(args, settings)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read payload: %s", exc)
        return 2

    text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s insights to %s", args.command, args.output)
    else:
        sys.stdout.write(text + "\n")
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

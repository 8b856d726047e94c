"""Countdown and status text for a scheduled fixture.

Nothing here keeps timer state: callers re-invoke on their own schedule and
each call reads the wall clock (or the ``now`` they pass) afresh.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from crickstats.ingest.normalize import parse_datetime


logger = logging.getLogger(__name__)

EVENT_STARTED = "Event Started"
LINEUP_OUT = "Lineup Out"
NOT_ANNOUNCED = "Playing 11 is not announced"

TIMEZONE_OFFSET = timedelta(hours=5, minutes=30)


@dataclass(frozen=True)
class CountdownParts:
    days: int
    hours: int
    minutes: int
    seconds: int

    def format(self) -> str:
        return f"{self.days}d {self.hours}h {self.minutes}m {self.seconds}s"


def _current(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def remaining(
    scheduled: Any,
    *,
    now: Optional[datetime] = None,
    offset: timedelta = TIMEZONE_OFFSET,
) -> Optional[CountdownParts]:
    """Whole days/hours/minutes/seconds left, or ``None`` once started."""

    target = parse_datetime(scheduled)
    if isinstance(target, str):
        return None
    diff = (target - _current(now)) + offset
    if diff <= timedelta(0):
        return None
    total = int(diff.total_seconds())
    days, rest = divmod(total, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, seconds = divmod(rest, 60)
    return CountdownParts(days=days, hours=hours, minutes=minutes, seconds=seconds)


def countdown(
    scheduled: Any,
    *,
    now: Optional[datetime] = None,
    offset: timedelta = TIMEZONE_OFFSET,
) -> str:
    """Render ``"1d 2h 0m 0s"`` style text, or ``"Event Started"``.

    ``scheduled`` is read as UTC and shifted by ``offset`` before comparing.
    Unparsable input yields the normalizer's date placeholder.
    """

    target = parse_datetime(scheduled)
    if isinstance(target, str):
        return target
    parts = remaining(target, now=now, offset=offset)
    if parts is None:
        return EVENT_STARTED
    return parts.format()


def toss_text(toss_data: Any) -> str:
    """Extract ``text`` from the JSON-encoded ``toss_data`` field."""

    if not isinstance(toss_data, str) or not toss_data.strip() or toss_data.strip() == "[]":
        return ""
    try:
        parsed = json.loads(toss_data)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse toss_data JSON: %s", exc)
        return ""
    if not isinstance(parsed, dict):
        return ""
    text = parsed.get("text")
    return text.strip() if isinstance(text, str) else ""


def fixture_status_text(toss_data: Any, playing_announce: Any, *, show_lineup: bool = True) -> str:
    """Status bubble for a fixture header.

    Once the playing eleven is announced and a toss result exists, the
    bubble alternates between "Lineup Out" and the toss text; the caller
    drives the alternation through ``show_lineup``.
    """

    if str(playing_announce).strip() != "1":
        return NOT_ANNOUNCED
    text = toss_text(toss_data)
    if not text or show_lineup:
        return LINEUP_OUT
    return text

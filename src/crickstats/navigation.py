"""Selection context and route history for the insight views."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List, Optional


TABS = ("form", "graph", "news", "competition", "format", "power_ranking")

FORMAT_LABELS = {
    "1": "Test",
    "2": "ODI",
    "3": "T20",
    "4": "T10",
}


@dataclass(frozen=True)
class SelectionContext:
    """Which player, fixture, year and tab a view is asking about."""

    player_uid: Optional[str] = None
    match_uid: Optional[str] = None
    year: Optional[int] = None
    tab: str = "form"

    def __post_init__(self) -> None:
        if self.tab not in TABS:
            raise ValueError(f"Unknown tab {self.tab!r}; expected one of {', '.join(TABS)}")


class RouteHistory:
    """Bounded log of visited routes exposing only the previous entry."""

    def __init__(self, maxlen: int = 10):
        if maxlen < 2:
            raise ValueError("maxlen must be at least 2")
        self._routes: Deque[str] = deque(maxlen=maxlen)

    def push(self, route: str) -> None:
        if self._routes and self._routes[-1] == route:
            return
        self._routes.append(route)

    def previous(self) -> Optional[str]:
        if len(self._routes) < 2:
            return None
        return self._routes[-2]

    def __len__(self) -> int:
        return len(self._routes)


def year_options(current_year: int, first_year: int = 2020) -> List[int]:
    """Years offered by the competition filter, newest first."""

    return list(range(current_year, first_year - 1, -1))


def format_label(code: Any) -> str:
    text = str(code).strip() if code is not None else ""
    if not text:
        return "N/A"
    return FORMAT_LABELS.get(text, text)

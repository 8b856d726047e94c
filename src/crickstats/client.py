"""HTTP client for the remote Statistics Service.

Requests never raise for transport or service failures: the outcome is a
``FetchResult`` whose ``status`` is ``ok``, ``empty`` or ``error``. There is
no retry and no de-duplication; a caller that has moved on to a newer
selection simply ignores older results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional

import httpx

from crickstats.config.settings import Settings, load_settings
from crickstats.navigation import SelectionContext


logger = logging.getLogger(__name__)

FetchStatus = Literal["ok", "empty", "error"]


@dataclass(frozen=True)
class FetchResult:
    selection: Optional[SelectionContext]
    payload: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def status(self) -> FetchStatus:
        if self.error is not None:
            return "error"
        if not self.payload:
            return "empty"
        return "ok"


def player_card_body(selection: SelectionContext, settings: Settings) -> Dict[str, Any]:
    return {
        "season_game_uid": selection.match_uid,
        "sports_id": settings.sports_id,
        "fav_detail": 1,
        "player_uid": selection.player_uid,
        "power_rank_detail": 1,
        "tab_info": selection.tab,
        "website_id": settings.website_id,
        "year": selection.year,
    }


def _extract_data(response: httpx.Response, *, envelope: bool) -> Optional[Dict[str, Any]]:
    response.raise_for_status()
    body = response.json()
    if envelope:
        body = body.get("data") if isinstance(body, Mapping) else None
    if not isinstance(body, Mapping):
        return None
    return dict(body)


def _failure(selection: Optional[SelectionContext], exc: Exception) -> FetchResult:
    logger.warning("Statistics Service request failed: %s", exc)
    message = str(exc) or exc.__class__.__name__
    return FetchResult(selection=selection, error=message)


class StatsClient:
    """Blocking client; use as a context manager or call ``close()``."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or load_settings()
        self._client = httpx.Client(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            headers=self.settings.headers(),
            transport=transport,
        )

    def __enter__(self) -> "StatsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        self._client.close()

    def fetch_player_card(self, selection: SelectionContext) -> FetchResult:
        try:
            response = self._client.post(
                self.settings.player_card_path,
                json=player_card_body(selection, self.settings),
            )
            payload = _extract_data(response, envelope=True)
        except (httpx.HTTPError, ValueError) as exc:
            return _failure(selection, exc)
        return FetchResult(selection=selection, payload=payload)

    def fetch_fixture(self, match_uid: str) -> FetchResult:
        selection = SelectionContext(match_uid=match_uid)
        try:
            response = self._client.get(self.settings.fixture_url.format(match_uid=match_uid))
            payload = _extract_data(response, envelope=False)
        except (httpx.HTTPError, ValueError) as exc:
            return _failure(selection, exc)
        return FetchResult(selection=selection, payload=payload)


class AsyncStatsClient:
    """Awaitable counterpart of :class:`StatsClient`."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or load_settings()
        self._client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            headers=self.settings.headers(),
            transport=transport,
        )

    async def __aenter__(self) -> "AsyncStatsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_player_card(self, selection: SelectionContext) -> FetchResult:
        try:
            response = await self._client.post(
                self.settings.player_card_path,
                json=player_card_body(selection, self.settings),
            )
            payload = _extract_data(response, envelope=True)
        except (httpx.HTTPError, ValueError) as exc:
            return _failure(selection, exc)
        return FetchResult(selection=selection, payload=payload)

    async def fetch_fixture(self, match_uid: str) -> FetchResult:
        selection = SelectionContext(match_uid=match_uid)
        try:
            response = await self._client.get(self.settings.fixture_url.format(match_uid=match_uid))
            payload = _extract_data(response, envelope=False)
        except (httpx.HTTPError, ValueError) as exc:
            return _failure(selection, exc)
        return FetchResult(selection=selection, payload=payload)

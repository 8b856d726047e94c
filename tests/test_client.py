import json

import httpx
import pytest

from crickstats.client import AsyncStatsClient, StatsClient, player_card_body
from crickstats.config.settings import Settings
from crickstats.navigation import SelectionContext


SETTINGS = Settings(
    base_url="https://stats.test",
    player_card_path="/player-card",
    fixture_url="https://static.test/match_{match_uid}.json",
    session_key="key-123",
    sports_id=7,
)
SELECTION = SelectionContext(player_uid="p1", match_uid="m9", year=2024, tab="graph")


def _card_handler(captured):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"data": {"player_detail": {"player_uid": "p1"}}})

    return handler


def test_player_card_body_fields():
    body = player_card_body(SELECTION, SETTINGS)
    assert body == {
        "season_game_uid": "m9",
        "sports_id": 7,
        "fav_detail": 1,
        "player_uid": "p1",
        "power_rank_detail": 1,
        "tab_info": "graph",
        "website_id": 1,
        "year": 2024,
    }


def test_fetch_player_card_success():
    captured = []
    with StatsClient(SETTINGS, transport=httpx.MockTransport(_card_handler(captured))) as client:
        result = client.fetch_player_card(SELECTION)

    assert result.status == "ok"
    assert result.payload == {"player_detail": {"player_uid": "p1"}}
    assert result.selection == SELECTION
    request = captured[0]
    assert request.method == "POST"
    assert request.url == "https://stats.test/player-card"
    assert request.headers["sessionkey"] == "key-123"
    assert request.headers["moduleaccess"] == "7"
    assert json.loads(request.content)["tab_info"] == "graph"


def test_fetch_player_card_server_error_is_reported():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"}))
    with StatsClient(SETTINGS, transport=transport) as client:
        result = client.fetch_player_card(SELECTION)

    assert result.status == "error"
    assert result.payload is None
    assert "500" in result.error


def test_fetch_player_card_transport_error_is_reported():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with StatsClient(SETTINGS, transport=httpx.MockTransport(handler)) as client:
        result = client.fetch_player_card(SELECTION)

    assert result.status == "error"
    assert "connection refused" in result.error


def test_fetch_player_card_without_data_is_empty():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"data": []}))
    with StatsClient(SETTINGS, transport=transport) as client:
        result = client.fetch_player_card(SELECTION)
    assert result.status == "empty"


def test_fetch_player_card_invalid_json_is_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
    with StatsClient(SETTINGS, transport=transport) as client:
        result = client.fetch_player_card(SELECTION)
    assert result.status == "error"


def test_fetch_fixture_reads_bare_document():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"fixture_info": {"home": "MI", "away": "CSK"}})

    with StatsClient(SETTINGS, transport=httpx.MockTransport(handler)) as client:
        result = client.fetch_fixture("m9")

    assert result.status == "ok"
    assert result.payload["fixture_info"]["home"] == "MI"
    assert result.selection.match_uid == "m9"
    assert str(captured[0].url) == "https://static.test/match_m9.json"


@pytest.mark.anyio
async def test_async_fetch_player_card():
    captured = []
    transport = httpx.MockTransport(_card_handler(captured))
    async with AsyncStatsClient(SETTINGS, transport=transport) as client:
        result = await client.fetch_player_card(SELECTION)
        await client.fetch_fixture("m9")

    assert result.status == "ok"
    assert result.payload["player_detail"]["player_uid"] == "p1"
    assert [request.method for request in captured] == ["POST", "GET"]

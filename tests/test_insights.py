import json
import math

import pytest

from crickstats.countdown import LINEUP_OUT, NOT_ANNOUNCED
from crickstats.config import get_board
from crickstats.insights import board_result, build_fixture_insights, build_player_insights
from crickstats.ingest import records_from_rows


def _uids(result):
    return [entry.record.uid for entry in result.entries]


def test_player_insights_header(player_payload):
    insights = build_player_insights(player_payload)

    assert insights.uid == "p1"
    assert insights.name == "Rohit Sharma"
    assert insights.format_label == "T20"
    assert insights.power_rank == 4.0
    assert insights.power_rate == "Elite"


def test_player_insights_form_bars(player_payload):
    bars = build_player_insights(player_payload).form_bars

    assert [bar.label for bar in bars] == ["MI vs CSK", "MI vs RCB", "MI vs KKR"]
    assert [bar.width for bar in bars] == [100.0, 50.0, 0.0]
    assert [bar.band for bar in bars] == ["high", "medium", "low"]
    assert bars[0].date_label == "Apr 2"


def test_player_insights_rates(player_payload):
    insights = build_player_insights(player_payload)

    assert insights.dream_team.percent == pytest.approx(30.0)
    assert insights.dream_team.band == "low"
    assert insights.underperformed.percent == pytest.approx(70.0)
    assert insights.underperformed.band == "high"


def test_player_insights_charts(player_payload):
    insights = build_player_insights(player_payload)

    fantasy = insights.charts["fantasy_points"]
    assert [point.value for point in fantasy.points] == [80, 40]
    assert fantasy.domain == (39.0, 81.0)
    assert insights.recent_matches[0].label == "MI vs RCB"
    assert insights.power_rank_chart.reversed is True
    assert [point.value for point in insights.power_rank_chart.points] == [6, 4]
    assert insights.overview_charts["recent_form"].points[0].value == pytest.approx(0.7)


def test_player_insights_news_most_recent_first(player_payload):
    news = build_player_insights(player_payload).news

    assert [item.headline for item in news] == ["New", "Old", "No date"]
    assert news[0].notes == "Fit again"
    assert news[0].date_label == "April 1, 2024"
    assert news[2].date_label == "Unknown Date"
    assert news[2].team_name == "Unknown Team"


def test_player_insights_competition_year_filter(player_payload):
    assert len(build_player_insights(player_payload).competition) == 2

    rows = build_player_insights(player_payload, year=2024).competition
    assert [row.league for row in rows] == ["Mega Contest"]
    assert rows[0].total_fp == 180.0


def test_player_insights_missing_payload_degrades():
    insights = build_player_insights(None)

    assert insights.uid is None
    assert insights.format_label == "N/A"
    assert insights.form_bars == []
    assert insights.dream_team is None
    assert insights.news == []
    assert all(series.is_empty for series in insights.charts.values())
    assert insights.power_rank_chart.is_empty


def test_fixture_insights_header(fixture_payload, fixed_now):
    insights = build_fixture_insights(fixture_payload, now=fixed_now)

    assert (insights.home, insights.away) == ("MI", "CSK")
    assert insights.countdown == "1d 2h 0m 0s"
    assert insights.status_text == LINEUP_OUT
    toss = build_fixture_insights(fixture_payload, now=fixed_now, show_lineup=False)
    assert toss.status_text == "CSK won the toss and chose to bowl"


def test_fixture_insights_boards(fixture_payload, fixed_now):
    boards = build_fixture_insights(fixture_payload, now=fixed_now).boards

    assert _uids(boards["top_players"]) == ["p2", "p1"]
    assert [entry.value for entry in boards["top_players"].entries] == [90.0, 50.0]
    assert boards["top_players"].entries[1].band == "medium"
    assert _uids(boards["head_to_head"]) == ["p2", "p1", "p3"]
    assert _uids(boards["powerplay_bat"]) == ["p9"]
    assert _uids(boards["recent_form"]) == ["p3", "p1"]
    assert _uids(boards["x_factor_tagged"]) == ["p1"]
    assert boards["x_factor_tagged"].entries[0].width == 0.0
    assert _uids(boards["bottom_20"]) == ["p3"]
    assert boards["batting_first"].is_empty


def test_fixture_insights_venue_leaderboard(fixture_payload, fixed_now):
    boards = build_fixture_insights(fixture_payload, now=fixed_now).boards

    assert _uids(boards["venue_bat"]) == ["v2", "v1", "v3"]
    assert [entry.value for entry in boards["venue_bat"].entries] == [40.0, 30.0, 12.0]
    assert _uids(boards["venue_bowl"]) == ["v2", "v1", "v3"]
    assert _uids(boards["venue_total"]) == ["v2", "v1", "v3"]
    assert _uids(boards["captain_count"]) == ["v3", "v1"]
    assert boards["captain_count"].entries[1].width == pytest.approx(40.0)


def test_fixture_insights_side_boards_follow_fixture_info(fixture_payload, fixed_now):
    boards = build_fixture_insights(fixture_payload, team="CSK", now=fixed_now).boards

    assert _uids(boards["batting_order_home"]) == ["p3", "p1"]
    assert _uids(boards["batting_order_away"]) == ["p2"]
    assert _uids(boards["team_rank_home"]) == ["p3", "p1"]
    assert _uids(boards["team_rank_away"]) == ["p2"]
    assert boards["team_rank_home"].title == "Team Rank (home)"


def test_fixture_insights_side_boards_without_sides_are_empty(fixture_payload, fixed_now):
    fixture_payload["fixture_info"] = {"season_scheduled_date": "2024-05-02 08:30:00"}
    boards = build_fixture_insights(fixture_payload, now=fixed_now).boards

    assert boards["batting_order_home"].is_empty
    assert boards["team_rank_away"].is_empty
    assert not boards["head_to_head"].is_empty


def test_fixture_insights_integer_beyond_float_range(fixed_now):
    payload = json.loads(
        '{"player_list": [{"player_uid": "p1", "full_name": "Alpha", "fantasy_pts": 1' + "0" * 400 + "}]}"
    )
    insights = build_fixture_insights(payload, now=fixed_now)

    assert _uids(insights.boards["total_points"]) == ["p1"]
    assert math.isnan(insights.boards["total_points"].entries[0].value)


def test_fixture_insights_team_tab(fixture_payload, fixed_now):
    boards = build_fixture_insights(fixture_payload, team="MI", now=fixed_now).boards
    assert _uids(boards["head_to_head"]) == ["p1", "p3"]


def test_fixture_insights_breakdowns(fixture_payload, fixed_now):
    insights = build_fixture_insights(fixture_payload, now=fixed_now)

    assert insights.toss_trend.choice.shares == (75.0, 25.0)
    assert insights.venue_results.batting_first.shares == (75.0, 25.0)
    assert insights.win_probability.shares == (60.0, 40.0)
    assert insights.positions.points == (10.0, 50.0, 25.0, 15.0)
    assert insights.positions.leader == "BAT"


def test_fixture_insights_missing_payload_degrades(fixed_now):
    insights = build_fixture_insights(None, now=fixed_now)

    assert insights.home == "HOME"
    assert insights.countdown == "Unknown Date"
    assert insights.status_text == NOT_ANNOUNCED
    assert insights.toss_trend is None
    assert insights.venue_results is None
    assert insights.win_probability is None
    assert insights.positions is None
    assert all(result.is_empty for result in insights.boards.values())


def test_board_result_widths_follow_ranked_values(fixture_payload):
    records = records_from_rows(fixture_payload["player_list"])
    result = board_result(get_board("total_points"), records)

    assert _uids(result) == ["p1", "p2", "p3"]
    assert [entry.width for entry in result.entries] == [100.0, 50.0, pytest.approx(100 / 12)]

import logging
import math
from datetime import date

import pytest

from crickstats.ingest import (
    records_from_rows,
    rows,
    sample_from_row,
    samples_from_rows,
    section,
    toss_trend_from_payload,
    venue_results_from_payload,
)


def _roster_row(**overrides):
    row = {
        "player_uid": "p1",
        "full_name": "Rohit Sharma",
        "team_abbr": "MI",
        "team_uid": "t1",
        "batting_style": "Right-hand bat",
        "child_position": "BAT",
        "category": "Top Form",
        "x_factor": " Powerplay specialist ",
        "fantasy_pts": "120",
        "stats": {"avg_fantasy_points": "40.5"},
        "value": {"value": "8.5"},
    }
    row.update(overrides)
    return row


def test_records_from_rows_builds_identity_and_metrics():
    records = records_from_rows([_roster_row()])

    assert len(records) == 1
    record = records[0]
    assert record.uid == "p1"
    assert record.name == "Rohit Sharma"
    assert record.team == "MI"
    assert record.position == "BAT"
    assert record.x_factor == " Powerplay specialist "
    assert record.metrics["fantasy_pts"] == pytest.approx(120.0)
    assert record.metrics["avg_fantasy_points"] == pytest.approx(40.5)
    assert record.metrics["value"] == pytest.approx(8.5)


def test_records_from_rows_skips_rows_without_identity():
    records = records_from_rows([_roster_row(), {"fantasy_pts": 10}, "junk", None])
    assert [record.uid for record in records] == ["p1"]


@pytest.mark.parametrize("raw", [None, {}, "players", 42])
def test_records_from_rows_malformed_input_is_empty(raw):
    assert records_from_rows(raw) == []


def test_records_from_rows_marks_requested_missing_fields_nan():
    records = records_from_rows([_roster_row()], numeric_fields=("avg_venue_fpts",))
    assert math.isnan(records[0].metric("avg_venue_fpts"))


def test_records_from_rows_does_not_mutate_input():
    row = _roster_row()
    snapshot = dict(row)
    records_from_rows([row])
    assert row == snapshot


def test_section_and_rows_walk_nested_payloads():
    payload = {"stats_data": {"news": [{"headline": "x"}, 3], "form": None}}

    assert section(payload, "stats_data", "form", default={}) == {}
    assert section(payload, "missing", "path") is None
    assert rows(payload, "stats_data", "news") == [{"headline": "x"}]
    assert rows(payload, "stats_data") == []


def test_sample_from_row_reads_date_portion_and_aliases():
    sample = sample_from_row(
        {
            "season_scheduled_date": "2024-04-02 19:30:00",
            "home": "MI",
            "away": "CSK",
            "player_salary": "9",
            "fantasy_points": "55",
            "normalised_recent_form": 0.8,
        }
    )

    assert sample.scheduled == date(2024, 4, 2)
    assert sample.scheduled_raw == "2024-04-02 19:30:00"
    assert sample.label == "MI vs CSK"
    assert sample.salary == pytest.approx(9.0)
    assert sample.fantasy_points == pytest.approx(55.0)
    assert sample.recent_form == pytest.approx(0.8)
    assert math.isnan(sample.power_rank)


def test_samples_from_rows_keeps_undated_rows():
    samples = samples_from_rows([{"fantasy_points": 10}, "bad"])
    assert len(samples) == 1
    assert samples[0].scheduled is None


def test_toss_trend_from_payload_parses_counts():
    counts = toss_trend_from_payload(
        {
            "choose_bat_first": "3",
            "choose_bowl_first": 1,
            "bat_first_win": 1,
            "bat_second_win": 3,
            "toss_win_match_win": 2,
            "total_matches": 4,
        }
    )

    assert counts is not None
    assert counts.choose_bat_first == 3
    assert counts.total_matches == 4


def test_toss_trend_inconsistent_counts_are_discarded(caplog):
    with caplog.at_level(logging.WARNING):
        counts = toss_trend_from_payload({"bat_first_win": 9, "total_matches": 4})
    assert counts is None
    assert "toss trend" in caplog.text


def test_venue_results_from_payload():
    assert venue_results_from_payload({}) is None
    assert venue_results_from_payload(None) is None
    counts = venue_results_from_payload(
        {"bat_first_total": 4, "bat_first_win": 3, "bowl_first_total": 6, "bowl_first_win": 2}
    )
    assert counts.bat_first_win == 3
    assert venue_results_from_payload({"bat_first_total": 1, "bat_first_win": 2}) is None

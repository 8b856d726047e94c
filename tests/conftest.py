import json
from datetime import datetime, timezone

import pytest


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def player_payload():
    return {
        "player_detail": {"player_uid": "p1", "full_name": "Rohit Sharma", "format": "3"},
        "player_power_rank": {"power_rank": "4", "power_rate": "Elite"},
        "stats_data": {
            "form": {
                "format_stats": [
                    {"home": "MI", "away": "CSK", "season_scheduled_date": "2024-04-02 19:30:00", "fantasy_points": "80"},
                    {"home": "MI", "away": "RCB", "season_scheduled_date": "2024-04-06 19:30:00", "fantasy_points": "40"},
                    {"home": "MI", "away": "KKR", "season_scheduled_date": "2024-04-09 19:30:00", "fantasy_points": "0"},
                ]
            },
            "graph": {
                "format_stats": {
                    "dream_team": {"value": 3, "total_matches": 10},
                    "underperformed": {"value": 7, "total_matches": 10},
                }
            },
            "stats": [
                {
                    "season_scheduled_date": "2024-04-06 19:30:00",
                    "home": "MI",
                    "away": "RCB",
                    "player_salary": "9.5",
                    "fantasy_points": 40,
                    "team_rank": 2,
                    "position_rank": 3,
                    "overall_rank": 10,
                    "value": 4.2,
                },
                {
                    "season_scheduled_date": "2024-04-02 19:30:00",
                    "home": "MI",
                    "away": "CSK",
                    "player_salary": "9.0",
                    "fantasy_points": 80,
                    "team_rank": 1,
                    "position_rank": 1,
                    "overall_rank": 2,
                    "value": 8.9,
                },
            ],
            "news": [
                {"headline": "Old", "team_name": "MI", "news_date_time": "2024-03-01 10:00:00"},
                {"headline": "No date"},
                {"headline": "New", "team_name": "MI", "news_date_time": "2024-04-01 10:00:00", "notes": " Fit again "},
            ],
            "competition": {
                "stats": [
                    {
                        "league_display_name": "Mega Contest",
                        "league_schedule_date": "2024-04-02 19:30:00",
                        "team_name": "RS11",
                        "total_fp": "180",
                        "total_rank": "12",
                        "batting_fp": "120",
                        "bowling_fp": "50",
                        "fielding_fp": "10",
                    },
                    {
                        "league_display_name": "Old League",
                        "league_schedule_date": "2023-04-02 19:30:00",
                        "team_name": "RS11",
                        "total_fp": "90",
                    },
                ]
            },
            "power_rank_over_time": [
                {"season_scheduled_date": "2024-04-06 19:30:00", "power_rank": 4},
                {"season_scheduled_date": "2024-04-02 19:30:00", "power_rank": 6},
            ],
            "recent_match_overview": [
                {
                    "season_scheduled_date": "2024-04-06 19:30:00",
                    "home": "MI",
                    "away": "RCB",
                    "player_contribution": "35",
                    "normalised_recent_form": "0.7",
                    "dream_team": 1,
                    "overall_rank": 5,
                    "value": 3.5,
                }
            ],
        },
    }


@pytest.fixture
def fixture_payload():
    return {
        "fixture_info": {
            "home": "MI",
            "away": "CSK",
            "home_uid": "t1",
            "away_uid": "t2",
            "season_scheduled_date": "2024-05-02 08:30:00",
            "win_probability": {"winning_percentage": "40"},
        },
        "toss_data": json.dumps({"text": "CSK won the toss and chose to bowl"}),
        "playing_announce": "1",
        "player_list": [
            {
                "player_uid": "p1",
                "full_name": "Alpha",
                "team_abbr": "MI",
                "team_uid": "t1",
                "child_position": "BAT",
                "player_order": "3",
                "avg_team_rank": 2,
                "category": "Top Form",
                "x_factor": "Powerplay hitter",
                "fantasy_pts": 120,
                "value": 9.0,
                "avg_opp_fpts": 55,
                "avg_fantasy_points": 45,
                "total_fantasy_points": 200,
                "total_matches": 4,
            },
            {
                "player_uid": "p2",
                "full_name": "Bravo",
                "team_abbr": "CSK",
                "team_uid": "t2",
                "child_position": "BOWL",
                "player_order": "1",
                "avg_team_rank": 1,
                "category": "poor form",
                "fantasy_pts": 60,
                "value": 7.5,
                "avg_opp_fpts": 70,
                "avg_fantasy_points": 30,
                "total_fantasy_points": 90,
                "total_matches": 1,
            },
            {
                "player_uid": "p3",
                "full_name": "Charlie",
                "team_abbr": "MI",
                "team_uid": "t1",
                "child_position": "AR",
                "player_order": "1",
                "avg_team_rank": 4,
                "category": "Top Form",
                "x_factor": "  ",
                "fantasy_pts": 10,
                "value": 5.0,
                "avg_opp_fpts": 20,
                "avg_fantasy_points": 50,
                "total_fantasy_points": 0,
                "total_matches": 0,
            },
        ],
        "venue_leaderboard": {
            "position_wise_fpts": {"WK": 10, "BAT": 50, "AR": 25, "BOW": 15},
            "player_list": [
                {
                    "player_uid": "v1",
                    "full_name": "Victor",
                    "bat_pt": 90,
                    "bowl_pt": 30,
                    "total_match_count": "3",
                    "fantasy_points": 100,
                    "captain_count": "2",
                },
                {
                    "player_uid": "v2",
                    "full_name": "Whiskey",
                    "bat_pt": 40,
                    "bowl_pt": 60,
                    "total_match_count": "0",
                    "fantasy_points": 150,
                    "captain_count": "0",
                },
                {
                    "player_uid": "v3",
                    "full_name": "Xray",
                    "bat_pt": 12,
                    "bowl_pt": 0,
                    "fantasy_points": 20,
                    "captain_count": "5",
                },
            ],
        },
        "powerplay_bat": [
            {"player_uid": "p9", "full_name": "Zulu", "team_abbr": "CSK", "avg_fantasy_points": 22},
        ],
        "toss_trend": {
            "choose_bat_first": 3,
            "choose_bowl_first": 1,
            "bat_first_win": 1,
            "bat_second_win": 3,
            "toss_win_match_win": 2,
            "total_matches": 4,
        },
        "win_stats": {"bat_first_total": 4, "bat_first_win": 3, "bowl_first_total": 6, "bowl_first_win": 2},
    }

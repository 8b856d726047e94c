import pytest

from crickstats.navigation import RouteHistory, SelectionContext, format_label, year_options


def test_selection_context_defaults_and_validation():
    selection = SelectionContext(player_uid="p1", match_uid="m1")
    assert selection.tab == "form"
    with pytest.raises(ValueError):
        SelectionContext(tab="fixtures")


def test_route_history_previous_entry():
    history = RouteHistory()
    assert history.previous() is None
    history.push("/fixtures")
    history.push("/fixture/m1")
    history.push("/fixture/m1")
    history.push("/player/p1")

    assert len(history) == 3
    assert history.previous() == "/fixture/m1"


def test_route_history_is_bounded():
    history = RouteHistory(maxlen=2)
    for route in ("/a", "/b", "/c"):
        history.push(route)
    assert len(history) == 2
    assert history.previous() == "/b"
    with pytest.raises(ValueError):
        RouteHistory(maxlen=1)


def test_year_options_newest_first():
    assert year_options(2024) == [2024, 2023, 2022, 2021, 2020]
    assert year_options(2019) == []


@pytest.mark.parametrize("code, label", [("1", "Test"), (2, "ODI"), ("3", "T20"), ("4", "T10"), ("9", "9"), (None, "N/A")])
def test_format_label(code, label):
    assert format_label(code) == label

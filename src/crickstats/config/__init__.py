"""Configuration helpers for the service client, leaderboards and charts."""

from .boards import BoardSpec, get_board, get_board_by_key, iter_boards
from .charts import ChartSpec, get_chart, iter_charts
from .settings import Settings, load_settings

__all__ = [
    "BoardSpec",
    "ChartSpec",
    "Settings",
    "get_board",
    "get_board_by_key",
    "get_chart",
    "iter_boards",
    "iter_charts",
    "load_settings",
]

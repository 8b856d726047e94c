"""Chart series builders."""

from .builder import build_chart, build_charts, build_series, padded_domain, resort

__all__ = ["build_chart", "build_charts", "build_series", "padded_domain", "resort"]

"""Input adapters that normalize raw Statistics Service payloads."""

from .normalize import (
    INVALID_DATE,
    UNKNOWN_DATE,
    coerce,
    format_date,
    is_number,
    parse_date,
    parse_datetime,
    to_float,
    to_int,
    to_percent,
)
from .payload import (
    record_from_row,
    records_from_rows,
    rows,
    sample_from_row,
    samples_from_rows,
    section,
    toss_trend_from_payload,
    venue_results_from_payload,
)

__all__ = [
    "INVALID_DATE",
    "UNKNOWN_DATE",
    "coerce",
    "format_date",
    "is_number",
    "parse_date",
    "parse_datetime",
    "record_from_row",
    "records_from_rows",
    "rows",
    "sample_from_row",
    "samples_from_rows",
    "section",
    "to_float",
    "to_int",
    "to_percent",
    "toss_trend_from_payload",
    "venue_results_from_payload",
]

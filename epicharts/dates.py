from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

import pandas as pd

from epicharts.errors import ValidationError

DayLike = Union[date, datetime, str]

_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
YEAR_WEEK_SEPARATOR = "·"


def parse_day(value: object) -> date:
    """Parse a calendar day, discarding any time-of-day component.

    Accepts ``date``/``datetime``/``pd.Timestamp`` values or a strict
    ``YYYY-MM-DD`` string. Anything else raises ``ValidationError``.
    """
    if value is None or value is pd.NaT:
        raise ValidationError("Invalid date. Provide a date or YYYY-MM-DD string.")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if not _DAY_PATTERN.match(s):
            raise ValidationError(f"Invalid date {value!r}. Expected YYYY-MM-DD.")
        try:
            return date.fromisoformat(s)
        except ValueError as exc:
            raise ValidationError(f"Invalid date {value!r}: {exc}") from exc
    raise ValidationError(f"Invalid date {value!r}. Provide a date or YYYY-MM-DD string.")


def format_day(value: date) -> str:
    return value.isoformat()


def create_date_array(
    start_date: Optional[DayLike],
    end_date: Optional[DayLike],
    num_days: Optional[int] = None,
) -> List[str]:
    """Consecutive ``YYYY-MM-DD`` labels from start to end inclusive.

    With ``num_days`` the range is a trailing window of that many days ending at
    ``end_date``; an explicit ``start_date`` then acts as a floor the window
    never extends past.
    """
    if end_date is None or (isinstance(end_date, str) and not end_date):
        raise ValidationError("end_date is required.")

    start = parse_day(start_date) if start_date else None
    end = parse_day(end_date)

    if start is not None and start > end:
        start, end = end, start

    if num_days is not None:
        if isinstance(num_days, bool) or not isinstance(num_days, int) or num_days < 1:
            raise ValidationError("num_days must be a positive integer.")
        computed_start = end - timedelta(days=num_days - 1)
        start = max(start, computed_start) if start is not None else computed_start

    if start is None:
        raise ValidationError("start_date is required when num_days is not provided.")

    span = (end - start).days
    return [format_day(start + timedelta(days=offset)) for offset in range(span + 1)]


def insert_year_week_separator(week: object) -> str:
    """202107 -> '2021·07'."""
    s = str(week)
    return f"{s[:4]}{YEAR_WEEK_SEPARATOR}{s[4:]}"

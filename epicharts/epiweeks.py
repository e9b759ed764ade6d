from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from epicharts.dates import DayLike, format_day, parse_day
from epicharts.errors import ValidationError

logger = logging.getLogger(__name__)

WeekScheme = Literal["jan1", "mmwr"]
WEEK_SCHEMES: Tuple[str, ...] = ("jan1", "mmwr")

WEEK_STRIDE = timedelta(days=7)


@dataclass(frozen=True)
class WeekInfo:
    week_start: str
    week_end: str
    geo_loc_region: Optional[str]


def mmwr_week_start(year: int) -> date:
    """Sunday that opens MMWR week 1 (the Sunday-Saturday week holding Jan 4)."""
    jan4 = date(year, 1, 4)
    return jan4 - timedelta(days=(jan4.weekday() + 1) % 7)


def _jan1_epiweek(day: date) -> int:
    week_index = (day - date(day.year, 1, 1)).days // 7 + 1
    return day.year * 100 + week_index


def _mmwr_epiweek(day: date) -> int:
    year = day.year
    if day >= mmwr_week_start(year + 1):
        year += 1
    elif day < mmwr_week_start(year):
        year -= 1
    week_index = (day - mmwr_week_start(year)).days // 7 + 1
    return year * 100 + week_index


def epiweek_for_date(value: DayLike, scheme: WeekScheme = "jan1") -> int:
    """Bucket a calendar day into a ``year*100 + week`` identifier.

    ``jan1`` counts whole 7-day blocks from January 1st, so the last one or two
    days of a year fall into a short week 53. ``mmwr`` follows the CDC MMWR
    calendar (Sunday start, week 1 contains January 4th).
    """
    day = parse_day(value)
    if scheme == "jan1":
        return _jan1_epiweek(day)
    if scheme == "mmwr":
        return _mmwr_epiweek(day)
    raise ValidationError(f"Unknown week scheme {scheme!r}. Expected one of {WEEK_SCHEMES}.")


def _synthesized_id(day: date, scheme: WeekScheme, previous: Optional[int], next_observed: int) -> int:
    """Scheme id for ``day`` when it fits strictly between its neighbours, else ``previous + 1``."""
    week = epiweek_for_date(day, scheme)
    if previous is not None and previous < week < next_observed:
        return week
    fallback = (previous or week) + 1
    if fallback >= next_observed:
        raise ValidationError(
            f"No free epiweek id for the week starting {format_day(day)} between "
            f"{previous} and {next_observed}; observed ids do not follow the {scheme!r} scheme."
        )
    logger.warning(
        "Week starting %s maps to %s under the %r scheme, outside (%s, %s); using %s",
        day,
        week,
        scheme,
        previous,
        next_observed,
        fallback,
    )
    return fallback


def build_week_grid(
    observations: Sequence[Mapping[str, object]],
    scheme: WeekScheme = "jan1",
) -> Dict[int, WeekInfo]:
    """Complete, ascending epiweek -> WeekInfo grid spanning the observed weeks.

    Walks forward in 7-day strides from the earliest observed week's start to the
    latest observed week's end. Walk dates inside an observed week reuse that
    week's id; other dates get a synthesized week (end = start + 6 days) carrying
    the region of the first observation. A synthesized id always lies strictly
    between the previous week's id and the next observed id, so id order matches
    date order; when the scheme's id does not fit, the previous id + 1 is used.
    """
    if not observations:
        return {}
    if scheme not in WEEK_SCHEMES:
        raise ValidationError(f"Unknown week scheme {scheme!r}. Expected one of {WEEK_SCHEMES}.")

    grid: Dict[int, WeekInfo] = {}
    for obs in observations:
        grid[int(obs["epiweek"])] = WeekInfo(
            week_start=format_day(parse_day(obs["week_start"])),
            week_end=format_day(parse_day(obs["week_end"])),
            geo_loc_region=obs.get("geo_loc_region"),
        )

    spans: List[Tuple[date, date, int]] = sorted(
        (parse_day(info.week_start), parse_day(info.week_end), week) for week, info in grid.items()
    )
    span_ids = [w for _, _, w in spans]
    if span_ids != sorted(span_ids):
        raise ValidationError("Observed epiweek ids are not in calendar order of their week_start dates.")
    region = observations[0].get("geo_loc_region")

    current = spans[0][0]
    end = parse_day(grid[max(grid)].week_end)
    previous: Optional[int] = None
    synthesized = 0
    while current <= end:
        week = next((w for start, stop, w in spans if start <= current <= stop), None)
        if week is None:
            next_observed = next(w for start, _, w in spans if start > current)
            week = _synthesized_id(current, scheme, previous, next_observed)
            grid[week] = WeekInfo(
                week_start=format_day(current),
                week_end=format_day(current + timedelta(days=6)),
                geo_loc_region=region,
            )
            synthesized += 1
            logger.debug("Synthesized week %s starting %s", week, current)
        previous = week
        current += WEEK_STRIDE

    if synthesized:
        logger.debug("Week grid: %d observed, %d synthesized", len(grid) - synthesized, synthesized)
    return {week: grid[week] for week in sorted(grid)}

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from operator import itemgetter
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Union

import numpy as np
import pandas as pd
from pydantic import ValidationError as SchemaError

from epicharts.dates import parse_day
from epicharts.epiweeks import WeekScheme, build_week_grid
from epicharts.errors import ValidationError
from epicharts.schemas import ObservationModel

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
Accessor = Callable[[Row], Any]
Observations = Union[Sequence[Row], pd.DataFrame]

WEEK_FIELD = "epiweek"
LABEL_FIELD = "name"
VALUE_FIELD = "mean_lineage_prevalence"
WEEK_START_FIELD = "week_start"
WEEK_END_FIELD = "week_end"
WEEK_END_DATE_FIELD = "week_end_date"
REGION_FIELD = "geo_loc_region"


class DiagnosticsSink(Protocol):
    def warning(self, msg: str, *args: Any) -> None:
        ...


@dataclass(frozen=True)
class NormalizedSeries:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows)


def _records(observations: Optional[Observations]) -> List[Any]:
    if observations is None:
        return []
    if isinstance(observations, pd.DataFrame):
        if observations.empty:
            return []
        return [
            {k: (None if pd.api.types.is_scalar(v) and pd.isna(v) else v) for k, v in rec.items()}
            for rec in observations.to_dict(orient="records")
        ]
    return list(observations)


def _validate_observation(index: int, record: object) -> Dict[str, Any]:
    if not isinstance(record, Mapping):
        raise ValidationError(f"Invalid observation at index {index}: expected a mapping")
    record = dict(record)
    try:
        model = ObservationModel.model_validate(record)
    except SchemaError as exc:
        raise ValidationError(f"Invalid observation at index {index}: {exc}") from exc
    out = record
    out.update(model.model_dump())
    return out


def _require_callable(name: str, accessor: object) -> Accessor:
    if not callable(accessor):
        raise ValidationError(f"{name} accessor must be callable, got {type(accessor).__name__}")
    return accessor


# ---------------- Normalization ----------------
def normalize_observations(
    observations: Optional[Observations],
    *,
    scheme: WeekScheme = "jan1",
) -> NormalizedSeries:
    """Fill every (epiweek, category) gap with a zero-value row.

    Rows come back sorted by epiweek; within a week categories keep their
    first-seen order. Each row carries ``week_end_date`` parsed from ``week_end``.
    """
    records = [_validate_observation(i, r) for i, r in enumerate(_records(observations))]
    if not records:
        return NormalizedSeries()

    categories = list(dict.fromkeys(r[LABEL_FIELD] for r in records))
    grid = build_week_grid(records, scheme=scheme)

    existing: Dict[tuple, Dict[str, Any]] = {}
    for r in records:
        existing[(r[WEEK_FIELD], r[LABEL_FIELD])] = r

    rows: List[Dict[str, Any]] = []
    for week, info in grid.items():
        for name in categories:
            original = existing.get((week, name))
            if original is not None:
                rows.append({**original, WEEK_END_DATE_FIELD: parse_day(original[WEEK_END_FIELD])})
                continue
            rows.append(
                {
                    WEEK_FIELD: week,
                    LABEL_FIELD: name,
                    VALUE_FIELD: 0,
                    WEEK_START_FIELD: info.week_start,
                    WEEK_END_FIELD: info.week_end,
                    REGION_FIELD: info.geo_loc_region,
                    WEEK_END_DATE_FIELD: parse_day(info.week_end),
                }
            )

    rows.sort(key=itemgetter(WEEK_FIELD))
    logger.debug(
        "Normalized %d observations into %d rows (%d weeks x %d categories)",
        len(records),
        len(rows),
        len(grid),
        len(categories),
    )
    return NormalizedSeries(rows=rows, categories=categories)


# ---------------- Wide pivot ----------------
def build_wide_rows(
    rows: Iterable[Row],
    labels: Optional[Iterable[str]] = None,
    *,
    week: Accessor = itemgetter(WEEK_FIELD),
    week_start: Accessor = itemgetter(WEEK_START_FIELD),
    week_end: Accessor = itemgetter(WEEK_END_FIELD),
    label: Accessor = itemgetter(LABEL_FIELD),
    value: Accessor = itemgetter(VALUE_FIELD),
) -> List[Dict[str, Any]]:
    """One record per week with a numeric field per category.

    Every category (``labels`` first, then any other label found in ``rows``)
    starts at 0 for every week. A repeated (week, category) pair overwrites the
    earlier value.
    """
    week = _require_callable("week", week)
    week_start = _require_callable("week_start", week_start)
    week_end = _require_callable("week_end", week_end)
    label = _require_callable("label", label)
    value = _require_callable("value", value)

    rows = list(rows)
    categories = list(dict.fromkeys([*(labels or []), *(label(r) for r in rows)]))

    wide: Dict[Any, Dict[str, Any]] = {}
    for r in rows:
        key = week(r)
        if key not in wide:
            entry = {WEEK_FIELD: key, WEEK_START_FIELD: week_start(r), WEEK_END_FIELD: week_end(r)}
            entry.update(dict.fromkeys(categories, 0))
            wide[key] = entry
        wide[key][label(r)] = value(r)
    return list(wide.values())


def wide_frame(rows: Iterable[Row], labels: Optional[Iterable[str]] = None, **accessors: Accessor) -> pd.DataFrame:
    return pd.DataFrame(build_wide_rows(rows, labels, **accessors))


def find_week_end(week: Any, rows: Iterable[Row], week_accessor: Accessor, week_end_accessor: Accessor) -> Any:
    week_accessor = _require_callable("week", week_accessor)
    week_end_accessor = _require_callable("week_end", week_end_accessor)
    match = next((r for r in rows if week_accessor(r) == week), None)
    return week_end_accessor(match) if match is not None else None


def find_week(week_end: Any, rows: Iterable[Row], week_accessor: Accessor, week_end_accessor: Accessor) -> Any:
    week_accessor = _require_callable("week", week_accessor)
    week_end_accessor = _require_callable("week_end", week_end_accessor)
    match = next((r for r in rows if week_end_accessor(r) == week_end), None)
    return week_accessor(match) if match is not None else None


# ---------------- Scaling ----------------
def _is_number(value: object) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    if not isinstance(value, (int, float, np.number)):
        return False
    return not pd.isna(value)


def scale_values(
    series: List[Dict[str, Any]],
    factor: float = 100,
    *accessors: Union[str, Accessor],
    sink: Optional[DiagnosticsSink] = None,
) -> List[Dict[str, Any]]:
    """Multiply selected fields of every point in ``series[i]["data"]`` by ``factor``.

    A string accessor names the field to scale. A callable accessor returns a
    value, and the first field of the point (in key order) holding an equal
    number is scaled; when two fields share that value the earlier key wins.
    Accessors that raise are reported to ``sink`` and skipped.
    """
    if not isinstance(series, list) or not series:
        raise ValidationError("series must be a non-empty list")
    if not accessors:
        raise ValidationError("At least one accessor must be provided")
    if any(not (isinstance(acc, str) or callable(acc)) for acc in accessors):
        raise ValidationError("Accessors must be field names or callables")
    for idx, item in enumerate(series):
        if not isinstance(item, Mapping) or not isinstance(item.get("data"), list):
            raise ValidationError(f"series[{idx}] must be a mapping with a 'data' list")

    sink = sink or logger

    def _scale_point(point: Dict[str, Any]) -> Dict[str, Any]:
        scaled = dict(point)
        for acc in accessors:
            if isinstance(acc, str):
                if _is_number(point.get(acc)):
                    scaled[acc] = point[acc] * factor
                else:
                    sink.warning("Skipping non-numeric value %r for field %r", point.get(acc), acc)
                continue
            try:
                val = acc(point)
            except Exception as exc:
                sink.warning("Accessor failed for data point %r: %s", point, exc)
                continue
            if not _is_number(val):
                sink.warning("Skipping non-numeric value %r from accessor %s", val, getattr(acc, "__name__", acc))
                continue
            key = next((k for k, v in point.items() if _is_number(v) and v == val), None)
            if key is not None:
                scaled[key] = val * factor
        return scaled

    return [{**item, "data": [_scale_point(p) for p in item["data"]]} for item in series]

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from epicharts.data import (
    WEEK_END_FIELD,
    WEEK_FIELD,
    Observations,
    build_wide_rows,
    normalize_observations,
    scale_values,
)
from epicharts.dates import create_date_array, insert_year_week_separator
from epicharts.options import ChartOptions, normalize_options
from epicharts.palettes import order_other_last, select_color_palette
from epicharts.ticks import filter_x_ticks

logger = logging.getLogger(__name__)


def compute_prevalence_chart(
    options: Optional[dict | ChartOptions],
    observations: Optional[Observations],
) -> Dict[str, Any]:
    """Stacked-area payload: long rows, wide rows, x ticks and colours."""
    if not isinstance(options, ChartOptions):
        options = normalize_options(options)

    normalized = normalize_observations(observations, scheme=options.week_scheme)  # type: ignore[arg-type]
    if not normalized.rows:
        return {
            "options": asdict(options),
            "categories": [],
            "rows": [],
            "wide": [],
            "ticks": [],
            "tick_labels": [],
            "palette": [],
            "colors": {},
        }

    rows = normalized.rows
    if options.window_days:
        last_end = max(r[WEEK_END_FIELD] for r in rows)
        window = set(create_date_array(None, last_end, options.window_days))
        rows = [r for r in rows if r[WEEK_END_FIELD] in window]
        logger.debug("Window of %d days kept %d of %d rows", options.window_days, len(rows), len(normalized.rows))

    categories = order_other_last(normalized.categories, options.other_label)
    wide = build_wide_rows(rows, categories)
    if wide and options.scale_factor != 1:
        wide = scale_values([{"data": wide}], options.scale_factor, *categories)[0]["data"]

    ticks = filter_x_ticks([r[WEEK_FIELD] for r in wide], options.width)
    palette = select_color_palette(categories, other_label=options.other_label)

    return {
        "options": asdict(options),
        "categories": categories,
        "rows": rows,
        "wide": wide,
        "ticks": ticks,
        "tick_labels": [insert_year_week_separator(t) for t in ticks],
        "palette": palette,
        "colors": dict(zip(categories, palette)),
    }

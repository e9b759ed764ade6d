"""
Accessible categorical palettes for stacked prevalence charts.

The tables are curated colour-vision-deficiency-safe sequences keyed by the
number of categories. When an "Other" bucket is shown it always takes the
neutral grey in the last slot, so callers should put "Other" last as well
(see ``order_other_last``).
"""
from __future__ import annotations

from itertools import cycle, islice
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

OTHER_LABEL = "Other"
OTHER_GREY = "#b8b8b8"
MAX_CURATED = 10

# --- With an "Other" bucket (grey last) ---
PALETTES_WITH_OTHER: Dict[int, Tuple[str, ...]] = {
    1: (OTHER_GREY,),
    2: ("#1a80bb", OTHER_GREY),
    3: ("#1a80bb", "#ea801c", OTHER_GREY),
    4: ("#4a2377", "#f55f74", "#0d7087", OTHER_GREY),
    5: ("#082a54", "#e02b35", "#59a89c", "#a559aa", OTHER_GREY),
    6: ("#082a54", "#e02b35", "#59a89c", "#a559aa", "#f0c571", "#e8e8e8"),
    7: ("#4477aa", "#66ccee", "#228833", "#ccbb44", "#ee6677", "#aa3377", "#bbbbbb"),
    8: ("#88ccee", "#cc6677", "#117733", "#ddcc77", "#882255", "#44aa99", "#999933", "#dddddd"),
    9: ("#332288", "#cc6677", "#ddcc77", "#117733", "#88ccee", "#882255", "#44aa99", "#999933", "#dddddd"),
}
DEFAULT_WITH_OTHER: Tuple[str, ...] = (
    "#332288", "#cc6677", "#ddcc77", "#117733", "#88ccee",
    "#882255", "#44aa99", "#999933", "#aa4499", "#dddddd",
)

# --- Without an "Other" bucket ---
PALETTES_WITHOUT_OTHER: Dict[int, Tuple[str, ...]] = {
    1: ("#1a80bb",),
    2: ("#1a80bb", "#ea801c"),
    3: ("#0f2080", "#f5793a", "#85c0f9"),
    4: ("#8cc5e3", "#f55f74", "#4a2377", "#0d7087"),
    5: ("#082a54", "#e02b35", "#f0c571", "#59a89c", "#a559aa"),
    6: ("#4477aa", "#66ccee", "#228833", "#ccbb44", "#ee6677", "#aa3377"),
    7: ("#88ccee", "#cc6677", "#117733", "#ddcc77", "#882255", "#44aa99", "#999933"),
    8: ("#88ccee", "#cc6677", "#117733", "#ddcc77", "#882255", "#44aa99", "#999933", "#aa4499"),
    9: ("#332288", "#cc6677", "#ddcc77", "#117733", "#88ccee", "#882255", "#44aa99", "#999933", "#aa4499"),
}
DEFAULT_WITHOUT_OTHER: Tuple[str, ...] = DEFAULT_WITH_OTHER


def select_color_palette(
    labels: Union[Sequence[str], int],
    *,
    has_other: Optional[bool] = None,
    other_label: str = OTHER_LABEL,
) -> List[str]:
    """Palette for ``labels`` (or a category count), one colour per category.

    Past ten categories the chromatic colours of the default table are cycled;
    the "Other" grey, when present, stays last and appears nowhere else.
    """
    if isinstance(labels, int):
        count = labels
        other = bool(has_other)
    else:
        count = len(labels)
        other = (other_label in labels) if has_other is None else bool(has_other)

    if count <= 0:
        return []
    table = PALETTES_WITH_OTHER if other else PALETTES_WITHOUT_OTHER
    if count in table:
        return list(table[count])

    base = DEFAULT_WITH_OTHER if other else DEFAULT_WITHOUT_OTHER
    if count == MAX_CURATED:
        return list(base)
    chromatic = base[:-1]
    if other:
        return list(islice(cycle(chromatic), count - 1)) + [base[-1]]
    return list(islice(cycle(chromatic), count))


def order_other_last(labels: Iterable[str], other_label: str = OTHER_LABEL) -> List[str]:
    labels = list(labels)
    if other_label not in labels:
        return labels
    return [label for label in labels if label != other_label] + [other_label]


def assign_colors(labels: Iterable[str], other_label: str = OTHER_LABEL) -> Dict[str, str]:
    """Label -> colour, with "Other" moved last before lookup."""
    ordered = order_other_last(labels, other_label)
    return dict(zip(ordered, select_color_palette(ordered, other_label=other_label)))

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from epicharts.epiweeks import WEEK_SCHEMES
from epicharts.palettes import OTHER_LABEL


@dataclass(frozen=True)
class ChartOptions:
    width: float = 800.0
    scale_factor: float = 100.0
    other_label: str = OTHER_LABEL
    week_scheme: str = "jan1"
    window_days: Optional[int] = None


def _as_float(value: object, default: float) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except Exception:
        return default


def _as_window(value: object) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        days = int(value)  # type: ignore[arg-type]
    except Exception:
        return None
    return days if days >= 1 else None


def normalize_options(raw: Optional[dict]) -> ChartOptions:
    raw = raw or {}

    width = max(0.0, _as_float(raw.get("width", 800.0), 800.0))
    scale_factor = _as_float(raw.get("scale_factor", 100.0), 100.0)

    other_label = str(raw.get("other_label") or OTHER_LABEL).strip() or OTHER_LABEL

    week_scheme = str(raw.get("week_scheme") or "jan1").strip().lower()
    if week_scheme not in WEEK_SCHEMES:
        week_scheme = "jan1"

    return ChartOptions(
        width=width,
        scale_factor=scale_factor,
        other_label=other_label,
        week_scheme=week_scheme,
        window_days=_as_window(raw.get("window_days")),
    )

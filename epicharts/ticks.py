from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TickTier:
    min_ticks: int
    intervals: Tuple[Tuple[int, int], ...]
    default: int


# (width breakpoint, interval) pairs are checked widest first; width must exceed the breakpoint.
TICK_TIERS: Tuple[TickTier, ...] = (
    TickTier(min_ticks=270, intervals=((700, 60), (550, 90)), default=210),
    TickTier(min_ticks=210, intervals=((700, 30), (550, 60)), default=90),
    TickTier(min_ticks=120, intervals=((700, 21), (550, 30)), default=60),
    TickTier(min_ticks=0, intervals=((700, 14), (550, 21), (400, 30)), default=45),
)


def select_tick_interval(num_ticks: int, width: Optional[float]) -> int:
    width = width or 0
    tier = next((t for t in TICK_TIERS if num_ticks > t.min_ticks), TICK_TIERS[-1])
    interval = next((step for breakpoint, step in tier.intervals if width > breakpoint), tier.default)
    return max(1, int(interval))


def filter_x_ticks(ticks: Iterable[T], width: Optional[float]) -> List[T]:
    """Keep every n-th tick, n chosen from the tick count and the chart width."""
    ticks = list(ticks)
    interval = select_tick_interval(len(ticks), width)
    return [tick for idx, tick in enumerate(ticks) if idx % interval == 0]

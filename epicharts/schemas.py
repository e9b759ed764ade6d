from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, field_validator

from epicharts.dates import format_day, parse_day


class ObservationModel(BaseModel):
    epiweek: int
    name: str
    mean_lineage_prevalence: Union[int, float]
    week_start: str
    week_end: str
    geo_loc_region: Optional[str]

    @field_validator("week_start", "week_end", mode="before")
    @classmethod
    def _strict_day(cls, value: object) -> str:
        return format_day(parse_day(value))

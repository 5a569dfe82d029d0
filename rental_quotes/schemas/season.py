from datetime import date
from typing import Optional

from pydantic import BaseModel, field_validator


class SeasonWindow(BaseModel):
    high_season_start: Optional[date] = None
    high_season_end: Optional[date] = None

    @field_validator("high_season_start", "high_season_end", mode="before")
    @classmethod
    def blank_as_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_set(self) -> bool:
        return self.high_season_start is not None and self.high_season_end is not None

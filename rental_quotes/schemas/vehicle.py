from pydantic import BaseModel, Field
from typing import Optional, Tuple
from rental_quotes.core.enums import Season


class Vehicle(BaseModel):
    id: str
    name: str
    type: Optional[str] = None
    fuel: Optional[str] = None
    seats: Optional[int] = Field(default=None, gt=0)
    deposit: Optional[float] = Field(default=None, ge=0)
    low_season_price: float = Field(default=0.0, ge=0)
    high_season_price: float = Field(default=0.0, ge=0)

    def rate_for(self, season: Season) -> float:
        return self.high_season_price if season == Season.HIGH else self.low_season_price


class VehicleFilters(BaseModel):
    type: str = ""
    fuel: str = ""
    seats: str = ""
    price_range: Optional[Tuple[float, float]] = None
    search_term: str = ""

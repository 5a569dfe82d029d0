from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional, Tuple
from datetime import date, datetime
from rental_quotes.core.enums import Season


class SelectionEntry(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    vehicle_id: str
    vehicle_name: str
    vehicle_type: Optional[str] = None
    vehicle_fuel: Optional[str] = None
    price_per_day: float
    original_price_per_day: float
    season: Season
    manually_edited: bool = False


class DraftQuote(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    client_name: str = ""
    reservation_number: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days_override: Optional[int] = Field(default=None, ge=0)
    selection: Dict[str, SelectionEntry] = Field(default_factory=dict)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_as_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class QuoteLineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_id: str
    vehicle_name: str
    vehicle_type: Optional[str] = None
    vehicle_fuel: Optional[str] = None
    price_per_day: float
    original_price_per_day: float
    line_total: float
    season: Season
    manually_edited: bool = False


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    reservation_number: str
    client_name: str
    start_date: date
    end_date: date
    days: int = Field(ge=0)
    items: Tuple[QuoteLineItem, ...]
    total: float
    created_at: datetime
    document_b64: Optional[str] = None
    image_b64: Optional[str] = None

    @property
    def has_artifacts(self) -> bool:
        return bool(self.document_b64 or self.image_b64)


class QuoteSummary(BaseModel):
    count: int
    total_value: float
    average: float


class FinalizeResult(BaseModel):
    quote: Quote
    warnings: List[str] = Field(default_factory=list)

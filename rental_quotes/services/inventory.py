"""Inventory normalization and filtering.

Vehicle records come from a hand-edited inventory and from imported price
lists, so field names and value types vary. ``normalize`` maps any of the
known aliases onto the canonical ``Vehicle`` shape and never raises.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from rental_quotes.core.config import settings
from rental_quotes.schemas.vehicle import Vehicle, VehicleFilters
from rental_quotes.utils.coercion import to_number
from rental_quotes.utils.ids import new_vehicle_id

logger = logging.getLogger(__name__)

# Alias priority lists; the first alias holding a non-zero number wins.
LOW_PRICE_ALIASES = ("lowSeasonPrice", "low_season_price", "priceLow", "precioBaja", "price", "pricePerDay")
HIGH_PRICE_ALIASES = ("highSeasonPrice", "high_season_price", "priceHigh", "precioAlta")
ID_ALIASES = ("id", "_id")
NAME_ALIASES = ("name", "modelo", "title")
TYPE_ALIASES = ("type", "tipo", "category")
FUEL_ALIASES = ("fuel", "combustible")
SEATS_ALIASES = ("seats", "plazas")
DEPOSIT_ALIASES = ("deposit", "deposito")


def _first_price(raw: Mapping[str, Any], aliases: Sequence[str]) -> float:
    for alias in aliases:
        value = to_number(raw.get(alias), 0.0)
        if value:
            return value
    return 0.0


def _first_present(raw: Mapping[str, Any], aliases: Sequence[str]) -> Optional[Any]:
    for alias in aliases:
        value = raw.get(alias)
        if value is not None and value != "":
            return value
    return None


def _optional_text(raw: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    value = _first_present(raw, aliases)
    return str(value) if value is not None else None


def normalize(raw: Any) -> Vehicle:
    if not isinstance(raw, Mapping):
        logger.debug(f"Vehicle record of type {type(raw).__name__} treated as empty")
        raw = {}

    low = max(_first_price(raw, LOW_PRICE_ALIASES), 0.0)
    high = _first_price(raw, HIGH_PRICE_ALIASES) or low

    seats = to_number(_first_present(raw, SEATS_ALIASES), None)
    deposit = to_number(_first_present(raw, DEPOSIT_ALIASES), None)

    vehicle_id = _first_present(raw, ID_ALIASES)
    name = _first_present(raw, NAME_ALIASES)

    return Vehicle(
        id=str(vehicle_id) if vehicle_id is not None else new_vehicle_id(),
        name=str(name) if name is not None else settings.DEFAULT_VEHICLE_NAME,
        type=_optional_text(raw, TYPE_ALIASES),
        fuel=_optional_text(raw, FUEL_ALIASES),
        seats=int(seats) if seats is not None and seats >= 1 else None,
        deposit=deposit if deposit is not None and deposit >= 0 else None,
        low_season_price=low,
        high_season_price=max(high, low),
    )


def normalize_inventory(raw_items: Any) -> List[Vehicle]:
    if not isinstance(raw_items, (list, tuple)):
        if raw_items is not None:
            logger.warning(f"Inventory is a {type(raw_items).__name__}, expected a list; using empty inventory")
        return []
    return [normalize(item) for item in raw_items]


def filter_vehicles(vehicles: Iterable[Vehicle], filters: VehicleFilters) -> List[Vehicle]:
    term = filters.search_term.strip().lower()
    result = []
    for vehicle in vehicles:
        if filters.type and vehicle.type != filters.type:
            continue
        if filters.fuel and vehicle.fuel != filters.fuel:
            continue
        if filters.seats and str(vehicle.seats) != filters.seats.strip():
            continue
        if filters.price_range is not None:
            low, high = filters.price_range
            if not low <= vehicle.low_season_price <= high:
                continue
        if term:
            haystack = f"{vehicle.name} {vehicle.type or ''}".lower()
            if term not in haystack:
                continue
        result.append(vehicle)
    return result


def price_ceiling(vehicles: Iterable[Vehicle]) -> float:
    """Upper bound for a low-season price range picker."""
    return max([settings.PRICE_CEILING_FLOOR] + [v.low_season_price for v in vehicles])

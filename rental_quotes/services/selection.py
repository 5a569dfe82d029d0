"""Vehicles chosen for the quote being edited, with their daily prices.

Each entry starts at the vehicle's table rate for the season of the draft's
dates. Editing the price by hand marks the entry as manually edited, and from
then on season changes relabel it without touching the price.

Changing the draft dates does not reprice entries that are already selected:
the current classification only seeds vehicles toggled on afterwards. New
inventory rates from `update_vehicles` follow the same rule: existing entries
keep their price until `set_season` reprices them, and only vehicles toggled
on afterwards start at the new rate.
"""
import logging
from typing import Dict, Iterable, List, Optional, Union

from rental_quotes.core.enums import Season
from rental_quotes.core.exceptions import UnknownVehicleError
from rental_quotes.schemas.quote import DraftQuote, SelectionEntry
from rental_quotes.schemas.season import SeasonWindow
from rental_quotes.schemas.vehicle import Vehicle
from rental_quotes.services.season import classify
from rental_quotes.utils.coercion import to_number

logger = logging.getLogger(__name__)


class SelectionLedger:

    def __init__(
        self,
        vehicles: Iterable[Vehicle],
        season_window: SeasonWindow,
        draft: Optional[DraftQuote] = None,
    ):
        self._vehicles: Dict[str, Vehicle] = {v.id: v for v in vehicles}
        self.season_window = season_window
        self.draft = draft if draft is not None else DraftQuote()

    @property
    def current_season(self) -> Season:
        return classify(self.draft.start_date, self.draft.end_date, self.season_window)

    def update_vehicles(self, vehicles: Iterable[Vehicle]) -> None:
        self._vehicles = {v.id: v for v in vehicles}

    def is_selected(self, vehicle_id: str) -> bool:
        return vehicle_id in self.draft.selection

    def toggle(self, vehicle_id: str) -> Optional[SelectionEntry]:
        """Select the vehicle, or drop it if it is already selected.

        Returns the new entry, or ``None`` when the vehicle was removed.
        """
        selection = self.draft.selection
        if vehicle_id in selection:
            del selection[vehicle_id]
            logger.debug(f"Vehicle {vehicle_id} removed from draft")
            return None

        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            raise UnknownVehicleError(vehicle_id)

        season = self.current_season
        rate = vehicle.rate_for(season)
        entry = SelectionEntry(
            vehicle_id=vehicle.id,
            vehicle_name=vehicle.name,
            vehicle_type=vehicle.type,
            vehicle_fuel=vehicle.fuel,
            price_per_day=rate,
            original_price_per_day=rate,
            season=season,
            manually_edited=False,
        )
        selection[vehicle_id] = entry
        logger.debug(f"Vehicle {vehicle_id} added to draft at {rate} ({season})")
        return entry

    def set_price(self, vehicle_id: str, price) -> SelectionEntry:
        entry = self._entry(vehicle_id)
        entry.price_per_day = to_number(price, 0.0)
        entry.manually_edited = True
        return entry

    def set_season(self, vehicle_id: str, season: Union[Season, str]) -> SelectionEntry:
        entry = self._entry(vehicle_id)
        season = Season(season)
        entry.season = season

        if entry.manually_edited:
            return entry

        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            # Entry copied from an old quote whose vehicle has since been removed.
            logger.debug(f"Vehicle {vehicle_id} not in inventory, keeping price {entry.price_per_day}")
            return entry

        rate = vehicle.rate_for(season)
        entry.price_per_day = rate
        entry.original_price_per_day = rate
        return entry

    def entries(self) -> List[SelectionEntry]:
        return list(self.draft.selection.values())

    def clear(self) -> None:
        self.draft.selection.clear()

    def _entry(self, vehicle_id: str) -> SelectionEntry:
        try:
            return self.draft.selection[vehicle_id]
        except KeyError:
            raise UnknownVehicleError(vehicle_id) from None

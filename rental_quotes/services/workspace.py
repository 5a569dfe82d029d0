"""Process-wide state loaded from the key-value store at startup."""
import copy
import logging
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError as SchemaError

from rental_quotes.core.config import settings
from rental_quotes.core.store import KeyValueStore
from rental_quotes.data.initial_inventory import INITIAL_INVENTORY
from rental_quotes.schemas.season import SeasonWindow
from rental_quotes.schemas.vehicle import Vehicle
from rental_quotes.services.history import QuoteHistoryStore
from rental_quotes.services.inventory import normalize_inventory
from rental_quotes.services.reservations import ReservationSequencer

logger = logging.getLogger(__name__)


class Workspace:

    def __init__(
        self,
        store: KeyValueStore,
        vehicles: List[Vehicle],
        season_window: SeasonWindow,
        sequencer: ReservationSequencer,
        history: QuoteHistoryStore,
        logo: Optional[str] = None,
    ):
        self.store = store
        self.vehicles = vehicles
        self.season_window = season_window
        self.sequencer = sequencer
        self.history = history
        self.logo = logo

    @classmethod
    async def load(cls, store: KeyValueStore) -> "Workspace":
        raw_inventory = await store.get(settings.INVENTORY_KEY)
        if raw_inventory is None and settings.SEED_INITIAL_INVENTORY:
            logger.info("No stored inventory, seeding the initial price list")
            raw_inventory = copy.deepcopy(INITIAL_INVENTORY)
            await store.set(settings.INVENTORY_KEY, raw_inventory)

        logo = await store.get(settings.LOGO_KEY)

        workspace = cls(
            store,
            vehicles=normalize_inventory(raw_inventory),
            season_window=_season_window(await store.get(settings.SEASON_KEY)),
            sequencer=await ReservationSequencer.load(store),
            history=await QuoteHistoryStore.load(store),
            logo=logo if isinstance(logo, str) and logo else None,
        )
        logger.info(
            f"Workspace loaded: {len(workspace.vehicles)} vehicles, "
            f"{len(workspace.history)} quotes, next reservation {workspace.sequencer.next()}"
        )
        return workspace

    async def save_inventory(self, raw_vehicles: Iterable[Any]) -> List[Vehicle]:
        vehicles = normalize_inventory(list(raw_vehicles))
        await self.store.set(settings.INVENTORY_KEY, [v.model_dump(mode="json") for v in vehicles])
        self.vehicles = vehicles
        return vehicles

    async def set_season_window(self, window: SeasonWindow) -> None:
        await self.store.set(settings.SEASON_KEY, window.model_dump(mode="json"))
        self.season_window = window

    async def set_logo(self, logo: Optional[str]) -> None:
        if logo:
            await self.store.set(settings.LOGO_KEY, logo)
        else:
            await self.store.delete(settings.LOGO_KEY)
        self.logo = logo or None


def _season_window(raw: Any) -> SeasonWindow:
    if raw is None:
        return SeasonWindow()
    try:
        return SeasonWindow.model_validate(raw)
    except SchemaError as e:
        logger.warning(f"Stored season window is invalid, treating as unset: {e.error_count()} errors")
        return SeasonWindow()

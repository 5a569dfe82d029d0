"""Reservation numbering and the last client name.

Both values live in the key-value store. Writes are fire-and-forget: a failed
write is logged and the in-memory value stays authoritative for the session.
"""
import logging
from typing import Any

from rental_quotes.core.config import settings
from rental_quotes.core.metrics import reservation_counter
from rental_quotes.core.store import KeyValueStore
from rental_quotes.utils.coercion import to_int

logger = logging.getLogger(__name__)


def format_reservation_number(counter: int) -> str:
    return f"{settings.RESERVATION_PREFIX}{counter:0{settings.RESERVATION_WIDTH}d}"


class ReservationSequencer:

    def __init__(self, store: KeyValueStore, counter: int = settings.COUNTER_START, last_client_name: str = ""):
        self._store = store
        self._counter = counter
        self._last_client_name = last_client_name
        reservation_counter.set(counter)

    @classmethod
    async def load(cls, store: KeyValueStore) -> "ReservationSequencer":
        counter = to_int(await store.get(settings.COUNTER_KEY), settings.COUNTER_START)
        last_client = await store.get(settings.LAST_CLIENT_KEY)
        return cls(
            store,
            counter=counter,
            last_client_name=last_client if isinstance(last_client, str) else "",
        )

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def last_client_name(self) -> str:
        return self._last_client_name

    def next(self) -> str:
        """Reservation number the next quote will get. Does not advance."""
        return format_reservation_number(self._counter)

    async def advance(self) -> str:
        self._counter += 1
        reservation_counter.set(self._counter)
        await self._persist(settings.COUNTER_KEY, self._counter)
        logger.info(f"Reservation counter advanced to {self._counter}")
        return self.next()

    async def set_last_client_name(self, name: str) -> None:
        if name == self._last_client_name:
            return
        self._last_client_name = name
        await self._persist(settings.LAST_CLIENT_KEY, name)

    async def _persist(self, key: str, value: Any) -> None:
        try:
            await self._store.set(key, value)
        except Exception as e:
            logger.warning(f"Could not persist {key}: {e}")

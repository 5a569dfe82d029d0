"""Append-only history of finalized quotes."""
import logging
from typing import Iterator, List, Optional

from pydantic import ValidationError as SchemaError

from rental_quotes.core.config import settings
from rental_quotes.core.store import KeyValueStore
from rental_quotes.schemas.quote import DraftQuote, Quote, QuoteSummary, SelectionEntry
from rental_quotes.services.duration import days as rental_days
from rental_quotes.services.reservations import ReservationSequencer, format_reservation_number

logger = logging.getLogger(__name__)


class QuoteHistoryStore:

    def __init__(self, store: KeyValueStore, quotes: Optional[List[Quote]] = None):
        self._store = store
        self._quotes: List[Quote] = list(quotes or [])

    @classmethod
    async def load(cls, store: KeyValueStore) -> "QuoteHistoryStore":
        raw = await store.get(settings.HISTORY_KEY)
        quotes = []
        if isinstance(raw, list):
            for index, record in enumerate(raw):
                try:
                    quotes.append(Quote.model_validate(record))
                except SchemaError as e:
                    logger.warning(f"Skipping unreadable quote #{index} in history: {e.error_count()} errors")
        elif raw is not None:
            logger.warning(f"Quote history is a {type(raw).__name__}, expected a list; starting empty")
        return cls(store, quotes)

    def __len__(self) -> int:
        return len(self._quotes)

    def __iter__(self) -> Iterator[Quote]:
        return iter(self._quotes)

    async def append(self, quote: Quote) -> None:
        quotes = self._quotes + [quote]
        await self._store.set(settings.HISTORY_KEY, [q.model_dump(mode="json") for q in quotes])
        self._quotes = quotes
        logger.info(f"Quote {quote.reservation_number} ({quote.id}) added to history")

    def list(self) -> List[Quote]:
        """Newest first."""
        return sorted(self._quotes, key=lambda q: q.created_at, reverse=True)

    def get(self, quote_id: str) -> Optional[Quote]:
        for quote in self._quotes:
            if quote.id == quote_id:
                return quote
        return None

    def summary(self) -> QuoteSummary:
        count = len(self._quotes)
        total_value = sum(q.total for q in self._quotes)
        return QuoteSummary(
            count=count,
            total_value=total_value,
            average=total_value / count if count else 0.0,
        )

    def duplicate(self, quote: Quote, sequencer: ReservationSequencer) -> DraftQuote:
        """Editable draft copied from a past quote, under a new reservation number."""
        selection = {
            item.vehicle_id: SelectionEntry(
                vehicle_id=item.vehicle_id,
                vehicle_name=item.vehicle_name,
                vehicle_type=item.vehicle_type,
                vehicle_fuel=item.vehicle_fuel,
                price_per_day=item.price_per_day,
                original_price_per_day=item.original_price_per_day,
                season=item.season,
                manually_edited=item.manually_edited,
            )
            for item in quote.items
        }
        reservation_number = sequencer.next()
        if reservation_number == quote.reservation_number:
            reservation_number = format_reservation_number(sequencer.counter + 1)
        computed = rental_days(quote.start_date, quote.end_date)
        return DraftQuote(
            client_name=quote.client_name,
            reservation_number=reservation_number,
            start_date=quote.start_date,
            end_date=quote.end_date,
            days_override=quote.days if quote.days != computed else None,
            selection=selection,
        )

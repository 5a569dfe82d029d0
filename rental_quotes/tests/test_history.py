import pytest
from datetime import date, datetime, timedelta, timezone
from rental_quotes.core.config import settings
from rental_quotes.core.enums import Season
from rental_quotes.core.store import MemoryStore
from rental_quotes.schemas.quote import DraftQuote, SelectionEntry
from rental_quotes.services.history import QuoteHistoryStore
from rental_quotes.services.pricing import finalize
from rental_quotes.services.reservations import ReservationSequencer

BASE_TIME = datetime(2025, 5, 1, 9, 0, tzinfo=timezone.utc)


def make_quote(reservation_number, prices, minutes=0, client="Ana Perez", days=3):
    selection = {
        f"v{i}": SelectionEntry(
            vehicle_id=f"v{i}",
            vehicle_name=f"Vehicle {i}",
            vehicle_fuel="Gasoline",
            price_per_day=price,
            original_price_per_day=price,
            season=Season.HIGH if i % 2 else Season.LOW,
            manually_edited=bool(i % 2),
        )
        for i, price in enumerate(prices)
    }
    draft = DraftQuote(
        client_name=client,
        reservation_number=reservation_number,
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 1) + timedelta(days=days),
        selection=selection,
    )
    return finalize(draft, now=BASE_TIME + timedelta(minutes=minutes))


class TestQuoteHistoryStore:

    @pytest.mark.asyncio
    async def test_missing_history_is_empty(self, memory_store):
        history = await QuoteHistoryStore.load(memory_store)
        assert len(history) == 0
        assert history.list() == []

    @pytest.mark.asyncio
    async def test_append_keeps_insertion_order_and_lists_newest_first(self, memory_store):
        history = await QuoteHistoryStore.load(memory_store)
        first = make_quote("#0001", [50], minutes=10)
        second = make_quote("#0002", [60], minutes=0)
        third = make_quote("#0003", [70], minutes=20)
        for quote in (first, second, third):
            await history.append(quote)

        assert [q.reservation_number for q in history] == ["#0001", "#0002", "#0003"]
        assert [q.reservation_number for q in history.list()] == ["#0003", "#0001", "#0002"]

    @pytest.mark.asyncio
    async def test_round_trip_preserves_total_and_order(self, memory_store):
        history = await QuoteHistoryStore.load(memory_store)
        quote = make_quote("#0004", [80, 50, 65.5])
        await history.append(quote)

        reloaded = await QuoteHistoryStore.load(memory_store)
        restored = reloaded.get(quote.id)
        assert restored == quote
        assert restored.total == quote.total
        assert [i.vehicle_id for i in restored.items] == [i.vehicle_id for i in quote.items]

    @pytest.mark.asyncio
    async def test_unreadable_records_are_skipped(self):
        good = make_quote("#0001", [50])
        store = MemoryStore({settings.HISTORY_KEY: [{"id": "broken"}, good.model_dump(mode="json")]})
        history = await QuoteHistoryStore.load(store)
        assert [q.id for q in history] == [good.id]

    @pytest.mark.asyncio
    async def test_failed_write_leaves_history_unchanged(self):
        class BrokenStore(MemoryStore):
            async def set(self, key, value):
                raise ConnectionError("store offline")

        history = QuoteHistoryStore(BrokenStore())
        with pytest.raises(ConnectionError):
            await history.append(make_quote("#0001", [50]))
        assert len(history) == 0

    def test_get_unknown(self, memory_store):
        assert QuoteHistoryStore(memory_store).get("nope") is None


class TestSummary:

    def test_empty(self, memory_store):
        summary = QuoteHistoryStore(memory_store).summary()
        assert summary.count == 0
        assert summary.total_value == 0
        assert summary.average == 0

    def test_totals(self, memory_store):
        quotes = [make_quote("#0001", [50]), make_quote("#0002", [100])]
        summary = QuoteHistoryStore(memory_store, quotes).summary()
        assert summary.count == 2
        assert summary.total_value == 450.0
        assert summary.average == 225.0


class TestDuplicate:

    @pytest.mark.asyncio
    async def test_duplicate_copies_quote_under_new_reservation_number(self, memory_store):
        sequencer = ReservationSequencer(memory_store, counter=1)
        quote = make_quote(sequencer.next(), [80, 50])
        await sequencer.advance()

        draft = QuoteHistoryStore(memory_store, [quote]).duplicate(quote, sequencer)

        assert draft.reservation_number == "#0002"
        assert draft.reservation_number != quote.reservation_number
        assert draft.client_name == quote.client_name
        assert draft.start_date == quote.start_date
        assert draft.end_date == quote.end_date
        assert draft.days_override is None
        assert [e.vehicle_id for e in draft.selection.values()] == [i.vehicle_id for i in quote.items]
        for item in quote.items:
            entry = draft.selection[item.vehicle_id]
            assert entry.price_per_day == item.price_per_day
            assert entry.season == item.season
            assert entry.manually_edited == item.manually_edited

    def test_duplicate_skips_number_already_used_by_source(self, memory_store):
        sequencer = ReservationSequencer(memory_store, counter=2)
        quote = make_quote("#0002", [50])
        draft = QuoteHistoryStore(memory_store, [quote]).duplicate(quote, sequencer)
        assert draft.reservation_number == "#0003"
        assert draft.reservation_number != quote.reservation_number
        assert sequencer.next() == "#0002"

    def test_duplicate_refinalizes_to_same_total(self, memory_store):
        sequencer = ReservationSequencer(memory_store, counter=9)
        quote = make_quote("#0008", [80, 50, 72])
        draft = QuoteHistoryStore(memory_store).duplicate(quote, sequencer)
        again = finalize(draft)
        assert again.total == quote.total
        assert [i.vehicle_id for i in again.items] == [i.vehicle_id for i in quote.items]

    def test_duplicate_keeps_overridden_day_count(self, memory_store):
        sequencer = ReservationSequencer(memory_store, counter=2)
        quote = make_quote("#0001", [50])
        quote = quote.model_copy(update={"days": 5})
        draft = QuoteHistoryStore(memory_store).duplicate(quote, sequencer)
        assert draft.days_override == 5

    def test_duplicate_is_independent_of_source(self, memory_store):
        sequencer = ReservationSequencer(memory_store, counter=2)
        quote = make_quote("#0001", [50])
        draft = QuoteHistoryStore(memory_store).duplicate(quote, sequencer)
        draft.selection["v0"].price_per_day = 1
        assert quote.items[0].price_per_day == 50.0

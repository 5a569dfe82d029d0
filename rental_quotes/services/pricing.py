import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from rental_quotes.core.exceptions import ValidationError
from rental_quotes.schemas.quote import DraftQuote, Quote, QuoteLineItem, SelectionEntry
from rental_quotes.services.duration import days as rental_days
from rental_quotes.utils.ids import new_quote_id

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("client_name", "reservation_number", "start_date", "end_date")


def validate_draft(draft: DraftQuote) -> None:
    missing = []
    for field in REQUIRED_FIELDS:
        value = getattr(draft, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    empty_selection = not draft.selection
    if missing or empty_selection:
        raise ValidationError(missing=missing, empty_selection=empty_selection)


def quote_days(draft: DraftQuote) -> int:
    if draft.days_override is not None:
        return draft.days_override
    return rental_days(draft.start_date, draft.end_date)


def build_line_items(entries: Iterable[SelectionEntry], days: int) -> List[QuoteLineItem]:
    """Line items ordered by daily price, cheapest first.

    Entries with the same daily price keep their selection order.
    """
    items = [
        QuoteLineItem(
            vehicle_id=entry.vehicle_id,
            vehicle_name=entry.vehicle_name,
            vehicle_type=entry.vehicle_type,
            vehicle_fuel=entry.vehicle_fuel,
            price_per_day=entry.price_per_day,
            original_price_per_day=entry.original_price_per_day,
            line_total=entry.price_per_day * days,
            season=entry.season,
            manually_edited=entry.manually_edited,
        )
        for entry in entries
    ]
    return sorted(items, key=lambda item: item.price_per_day)


def finalize(
    draft: DraftQuote,
    now: Optional[datetime] = None,
    quote_id: Optional[str] = None,
) -> Quote:
    validate_draft(draft)

    days = quote_days(draft)
    items = build_line_items(draft.selection.values(), days)
    total = sum(item.line_total for item in items)

    quote = Quote(
        id=quote_id or new_quote_id(),
        reservation_number=draft.reservation_number.strip(),
        client_name=draft.client_name.strip(),
        start_date=draft.start_date,
        end_date=draft.end_date,
        days=days,
        items=tuple(items),
        total=total,
        created_at=now or datetime.now(timezone.utc),
    )
    logger.info(
        f"Quote {quote.reservation_number} built for {quote.client_name}: "
        f"{len(items)} vehicles x {days} days = {total}"
    )
    return quote

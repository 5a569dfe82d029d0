"""The quote being edited and the finalize workflow around it."""
import logging
from typing import Any, List, Optional, Union

from rental_quotes.core.enums import Season
from rental_quotes.core.exceptions import (
    FinalizeInProgressError,
    RenderingFailure,
    ValidationError,
)
from rental_quotes.core.metrics import (
    quote_total_amount,
    quote_validation_failures,
    quotes_finalized,
    rendering_failures,
)
from rental_quotes.schemas.quote import DraftQuote, FinalizeResult, Quote, SelectionEntry
from rental_quotes.services import pricing
from rental_quotes.services.rendering import Renderer, RenderedArtifacts, attach_artifacts
from rental_quotes.services.selection import SelectionLedger
from rental_quotes.services.workspace import Workspace
from rental_quotes.utils.coercion import to_int
from rental_quotes.utils.dates import to_date

logger = logging.getLogger(__name__)


class QuoteSession:

    def __init__(self, workspace: Workspace, renderer: Optional[Renderer] = None):
        self.workspace = workspace
        self.renderer = renderer
        self._finalizing = False
        self.ledger = SelectionLedger(workspace.vehicles, workspace.season_window, self._fresh_draft())

    @property
    def draft(self) -> DraftQuote:
        return self.ledger.draft

    @property
    def finalizing(self) -> bool:
        return self._finalizing

    @property
    def current_season(self) -> Season:
        return self.ledger.current_season

    def _fresh_draft(self) -> DraftQuote:
        sequencer = self.workspace.sequencer
        return DraftQuote(
            client_name=sequencer.last_client_name,
            reservation_number=sequencer.next(),
        )

    def new_draft(self) -> DraftQuote:
        self.ledger.draft = self._fresh_draft()
        return self.ledger.draft

    def load_draft(self, draft: DraftQuote) -> DraftQuote:
        self.ledger.draft = draft
        return draft

    def duplicate(self, quote_id: str) -> DraftQuote:
        quote = self.workspace.history.get(quote_id)
        if quote is None:
            raise KeyError(f"Quote {quote_id} not found in history")
        draft = self.workspace.history.duplicate(quote, self.workspace.sequencer)
        logger.info(f"Quote {quote.reservation_number} duplicated as {draft.reservation_number}")
        return self.load_draft(draft)

    def sync_workspace(self) -> None:
        """Pick up inventory or season window changes made through the workspace."""
        self.ledger.update_vehicles(self.workspace.vehicles)
        self.ledger.season_window = self.workspace.season_window

    async def set_client_name(self, name: str) -> None:
        self.draft.client_name = name
        await self.workspace.sequencer.set_last_client_name(name)

    def set_reservation_number(self, reservation_number: str) -> None:
        self.draft.reservation_number = reservation_number

    def set_dates(self, start: Any, end: Any) -> Season:
        self.draft.start_date = to_date(start)
        self.draft.end_date = to_date(end)
        return self.current_season

    def set_days_override(self, days: Any) -> None:
        value = to_int(days)
        self.draft.days_override = max(value, 0) if value is not None else None

    def toggle(self, vehicle_id: str) -> Optional[SelectionEntry]:
        return self.ledger.toggle(vehicle_id)

    def set_price(self, vehicle_id: str, price: Any) -> SelectionEntry:
        return self.ledger.set_price(vehicle_id, price)

    def set_season(self, vehicle_id: str, season: Union[Season, str]) -> SelectionEntry:
        return self.ledger.set_season(vehicle_id, season)

    def entries(self) -> List[SelectionEntry]:
        return self.ledger.entries()

    def preview(self) -> Quote:
        """Priced snapshot of the current draft without storing it."""
        return pricing.finalize(self.draft)

    async def finalize(self) -> FinalizeResult:
        """Price, render and store the current draft, then start a new one.

        The quote reaches history only after rendering has finished. A render
        failure is reported as a warning and the quote is stored without
        artifacts.
        """
        if self._finalizing:
            raise FinalizeInProgressError("A quote is already being finalized")

        self._finalizing = True
        try:
            try:
                quote = pricing.finalize(self.draft)
            except ValidationError as e:
                reason = "empty_selection" if e.empty_selection and not e.missing else "missing_fields"
                quote_validation_failures.labels(reason=reason).inc()
                logger.info(f"Finalize rejected: {e}")
                raise

            warnings = []
            try:
                artifacts = await self._render(quote)
            except RenderingFailure as failure:
                logger.warning(f"Quote {quote.reservation_number} stored without artifacts: {failure.reason}")
                rendering_failures.inc()
                warnings.append(str(failure))
                artifacts = RenderedArtifacts()

            quote = attach_artifacts(quote, artifacts)
            await self.workspace.history.append(quote)
            await self.workspace.sequencer.advance()
            await self.workspace.sequencer.set_last_client_name(quote.client_name)

            quotes_finalized.inc()
            quote_total_amount.observe(quote.total)

            self.new_draft()
            return FinalizeResult(quote=quote, warnings=warnings)
        finally:
            self._finalizing = False

    async def _render(self, quote: Quote) -> RenderedArtifacts:
        if self.renderer is None:
            return RenderedArtifacts()
        try:
            artifacts = await self.renderer.render(quote, self.workspace.logo)
        except Exception as e:
            raise RenderingFailure(str(e) or type(e).__name__) from e
        return artifacts if artifacts is not None else RenderedArtifacts()

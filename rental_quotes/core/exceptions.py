"""Error taxonomy for the quoting core"""
from typing import Iterable, Optional


class QuoteError(Exception):
    pass


class ValidationError(QuoteError):
    """Draft is missing required fields or has nothing selected.

    Raised before any state is touched, so the draft can be corrected and
    finalized again.
    """

    def __init__(self, missing: Optional[Iterable[str]] = None, empty_selection: bool = False):
        self.missing = list(missing or [])
        self.empty_selection = empty_selection
        parts = []
        if self.missing:
            parts.append(f"missing required fields: {', '.join(self.missing)}")
        if empty_selection:
            parts.append("no vehicles selected")
        super().__init__("; ".join(parts) or "invalid draft")


class UnknownVehicleError(QuoteError, KeyError):
    def __init__(self, vehicle_id: str):
        self.vehicle_id = vehicle_id
        super().__init__(vehicle_id)

    def __str__(self):
        return f"Unknown vehicle: {self.vehicle_id}"


class FinalizeInProgressError(QuoteError):
    pass


class RenderingFailure(QuoteError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Rendering failed: {reason}")


class StoreError(QuoteError):
    pass

"""Boundary to the document/image renderer.

Rendering itself happens outside this package. The workflow awaits a
``Renderer`` and stores whatever it returns on the quote, base64-encoded.
"""
import base64
from typing import Optional, Protocol

from pydantic import BaseModel

from rental_quotes.core.config import settings
from rental_quotes.core.enums import ArtifactKind
from rental_quotes.schemas.quote import Quote

EXTENSIONS = {
    ArtifactKind.DOCUMENT: "pdf",
    ArtifactKind.IMAGE: "png",
}


class RenderedArtifacts(BaseModel):
    document: Optional[bytes] = None
    image: Optional[bytes] = None


class Renderer(Protocol):
    async def render(self, quote: Quote, logo: Optional[str]) -> RenderedArtifacts:
        ...


def _encode(blob: Optional[bytes]) -> Optional[str]:
    if not blob:
        return None
    return base64.b64encode(blob).decode("ascii")


def attach_artifacts(quote: Quote, artifacts: RenderedArtifacts) -> Quote:
    return quote.model_copy(update={
        "document_b64": _encode(artifacts.document),
        "image_b64": _encode(artifacts.image),
    })


def read_artifact(quote: Quote, kind: ArtifactKind) -> Optional[bytes]:
    encoded = quote.document_b64 if kind == ArtifactKind.DOCUMENT else quote.image_b64
    return base64.b64decode(encoded) if encoded else None


def artifact_filename(quote: Quote, kind: ArtifactKind) -> str:
    token = quote.reservation_number.lstrip(settings.RESERVATION_PREFIX) or quote.id
    return f"quote-{token}.{EXTENSIONS[ArtifactKind(kind)]}"

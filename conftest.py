import pytest
from datetime import date

from rental_quotes.core.config import settings
from rental_quotes.core.store import MemoryStore
from rental_quotes.schemas.season import SeasonWindow
from rental_quotes.schemas.quote import DraftQuote
from rental_quotes.services.inventory import normalize_inventory
from rental_quotes.services.rendering import RenderedArtifacts
from rental_quotes.services.selection import SelectionLedger
from rental_quotes.services.workspace import Workspace


class RecordingRenderer:
    def __init__(self, document=b"%PDF-1.4 quote", image=b"\x89PNG quote"):
        self.document = document
        self.image = image
        self.rendered = []

    async def render(self, quote, logo):
        self.rendered.append((quote, logo))
        return RenderedArtifacts(document=self.document, image=self.image)


class FailingRenderer:
    async def render(self, quote, logo):
        raise RuntimeError("canvas exploded")


@pytest.fixture
def raw_inventory():
    return [
        {"id": "cx5", "name": "Mazda CX-5", "type": "Econ", "fuel": "Gasoline", "lowSeasonPrice": 60, "highSeasonPrice": 72},
        {"id": "camry", "name": "Toyota Camry", "type": "Sedan", "fuel": "Gasoline", "lowSeasonPrice": 50, "highSeasonPrice": 80},
        {"id": "tesla", "name": "Tesla Model 3", "type": "Electric", "fuel": "Electric", "lowSeasonPrice": 75, "highSeasonPrice": 87, "seats": 5},
        {"id": "van", "name": "Kia Carnival", "type": "Suv Family", "fuel": "Gasoline", "price": "95,5", "seats": 8},
    ]


@pytest.fixture
def vehicles(raw_inventory):
    return normalize_inventory(raw_inventory)


@pytest.fixture
def season_window():
    return SeasonWindow(high_season_start=date(2025, 3, 1), high_season_end=date(2025, 4, 30))


@pytest.fixture
def ledger(vehicles, season_window):
    return SelectionLedger(vehicles, season_window, DraftQuote())


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
async def workspace(memory_store, raw_inventory, season_window):
    await memory_store.set(settings.INVENTORY_KEY, raw_inventory)
    await memory_store.set(settings.SEASON_KEY, season_window.model_dump(mode="json"))
    return await Workspace.load(memory_store)


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()


@pytest.fixture
def failing_renderer():
    return FailingRenderer()


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "history: marks tests related to quote history"
    )
    config.addinivalue_line(
        "markers", "store: marks tests related to persistence"
    )

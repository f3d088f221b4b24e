from datetime import UTC, datetime

import pytest

from src.adapters.clock import FixedClock
from src.adapters.events import EventBus
from src.adapters.memory_surface import InMemorySurface
from src.components.history import HistoryConfig, HistoryEngine


@pytest.fixture
def events() -> EventBus:
    return EventBus(record=True)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC))


@pytest.fixture
def surface() -> InMemorySurface:
    """Surface holding one paragraph, nothing selected."""
    return InMemorySurface("<p>hello world</p>")


@pytest.fixture
def history(surface: InMemorySurface, events: EventBus) -> HistoryEngine:
    return HistoryEngine(surface, events, HistoryConfig(capacity=100))

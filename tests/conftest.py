"""Shared test doubles for the injected collaborators."""

from datetime import UTC, datetime, timedelta

import pytest

from detox_navigator.adapters.clipboard import InMemoryClipboard
from detox_navigator.adapters.storage import InMemoryStorage
from detox_navigator.config import AppConfig, SummaryConfig
from detox_navigator.domain.errors import ClipboardError, StorageError

START = datetime(2026, 10, 17, 8, 0, tzinfo=UTC)


class SteppingClock:
    """Returns ``start``, then advances by ``step`` on every call."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(minutes=30)) -> None:
        self.current = start
        self.step = step

    def now(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


class SequentialIds:
    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self.count = 0

    def new_id(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


class FailingStorage:
    """Storage medium whose reads and writes always fail."""

    def __init__(self) -> None:
        self.set_calls = 0

    def get(self, key: str) -> str | None:
        raise StorageError(key, "medium unavailable")

    def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        raise StorageError(key, "quota exceeded")


class FailingClipboard:
    async def write_text(self, text: str) -> None:
        raise ClipboardError("permission denied")


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def clipboard() -> InMemoryClipboard:
    return InMemoryClipboard()


@pytest.fixture
def failing_clipboard() -> FailingClipboard:
    return FailingClipboard()


@pytest.fixture
def app_config() -> AppConfig:
    """Defaults, with summaries rendered in UTC so expected text is host independent."""
    return AppConfig(summary=SummaryConfig(timezone="UTC"))

"""
Clock and id-generator collaborators.

Both are Protocols so tests can pass fakes with a fixed instant or a
predictable id sequence.
"""

import uuid
from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


class IdGenerator(Protocol):
    """Source of statistically unique opaque identifiers."""

    def new_id(self) -> str: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class UuidGenerator:
    """Random UUID4 strings; uniqueness is not verified locally."""

    def new_id(self) -> str:
        return str(uuid.uuid4())

"""
Domain models for home detox documentation.

These models represent the records a nurse keeps per client. They use Pydantic
for validation and for the camelCase blob shape shared with storage.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_RECORD_CONFIG = ConfigDict(
    frozen=True,  # Records are append-only, never edited
    alias_generator=to_camel,
    populate_by_name=True,
)


class SeverityTier(str, Enum):
    """CIWA severity bands used as a display hint."""

    NORMAL = "normal"
    WATCH = "watch"
    ESCALATE = "escalate"


class Client(BaseModel):
    """A person undergoing supervised home detox."""

    model_config = _RECORD_CONFIG

    id: str
    name: str


class Entry(BaseModel):
    """One time-stamped vitals/medication/notes observation for a client."""

    model_config = _RECORD_CONFIG

    id: str
    client_id: str
    timestamp: datetime
    bp: str | None = None
    hr: str | None = None
    ciwa: int | float | None = None
    meds: str | None = None
    notes: str | None = None

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Naive instants cannot be ordered against aware ones
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("ciwa")
    @classmethod
    def whole_score_as_int(cls, value: int | float | None) -> int | float | None:
        # Whole scores are stored as 16, not 16.0
        if isinstance(value, float) and value.is_integer() and abs(value) < 2**53:
            return int(value)
        return value

    def to_blob(self) -> dict[str, Any]:
        """Serialize for storage: absent text fields are omitted, ciwa is always written."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data["ciwa"] = self.ciwa
        return data


class EntryDraft(BaseModel):
    """Transient form input for the next entry, kept as raw text."""

    bp: str = ""
    hr: str = ""
    ciwa: str = ""
    meds: str = ""
    notes: str = ""

    def clear(self) -> None:
        """Reset every input field after a successful save."""
        for name in type(self).model_fields:
            setattr(self, name, "")


class Classification(BaseModel):
    """Severity hint derived from a CIWA score."""

    model_config = ConfigDict(frozen=True)

    tier: SeverityTier
    score: float
    label: str = Field(description="Short chip text, e.g. 'CIWA 16 – escalate'")


class StoreSnapshot(BaseModel):
    """Full observable state of the record store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    clients: list[Client] = Field(default_factory=list)
    entries: list[Entry] = Field(default_factory=list)
    selected_client_id: str = ""

    def to_blob(self) -> dict[str, Any]:
        return {
            "clients": [client.model_dump(mode="json", by_alias=True) for client in self.clients],
            "entries": [entry.to_blob() for entry in self.entries],
            "selectedClientId": self.selected_client_id,
        }

"""
In-memory record store for clients and their entry logs.

The store exclusively owns every Client and Entry. Views (timeline, summary)
receive fresh lists and never hold on to store state. When a persistence
adapter is attached, the full store is saved after every mutation.
"""

import math
import re
from typing import Literal

import structlog

from detox_navigator.domain.models import Client, Entry, EntryDraft, StoreSnapshot
from detox_navigator.services.collaborators import Clock, IdGenerator, SystemClock, UuidGenerator
from detox_navigator.services.persistence import PersistenceAdapter
from detox_navigator.services.timeline import timeline_for

logger = structlog.get_logger(__name__)

ClientStatus = Literal["active", "new"]

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_ciwa(text: str) -> float | None:
    """Parse a CIWA score; empty or non-numeric text yields None (no range check)."""
    text = text.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def _optional_text(text: str) -> str | None:
    return text.strip() or None


class RecordStore:
    """Append-only store of clients and entries plus the current selection."""

    def __init__(
        self,
        clock: Clock | None = None,
        ids: IdGenerator | None = None,
        persistence: PersistenceAdapter | None = None,
        snapshot: StoreSnapshot | None = None,
    ) -> None:
        self.clock = clock or SystemClock()
        self.ids = ids or UuidGenerator()
        self.persistence = persistence
        self.logger = logger.bind(component="record_store")

        snapshot = snapshot or StoreSnapshot()
        self._clients: list[Client] = list(snapshot.clients)
        self._entries: list[Entry] = list(snapshot.entries)
        self._selected_client_id: str = snapshot.selected_client_id

    @classmethod
    def open(
        cls,
        persistence: PersistenceAdapter,
        clock: Clock | None = None,
        ids: IdGenerator | None = None,
    ) -> "RecordStore":
        """Restore the store from storage. Call once, before any mutation."""
        return cls(clock=clock, ids=ids, persistence=persistence, snapshot=persistence.load())

    @property
    def clients(self) -> list[Client]:
        """Clients in insertion order."""
        return list(self._clients)

    @property
    def entries(self) -> list[Entry]:
        """Every entry in storage order (newest first)."""
        return list(self._entries)

    @property
    def selected_client_id(self) -> str:
        return self._selected_client_id

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            clients=list(self._clients),
            entries=list(self._entries),
            selected_client_id=self._selected_client_id,
        )

    def _persist(self) -> None:
        if self.persistence is not None:
            self.persistence.save(self.snapshot())

    def add_client(self, name: str) -> Client | None:
        """Create a client from a trimmed name and select it. Blank names are ignored."""
        name = name.strip()
        if not name:
            self.logger.debug("client_rejected", reason="blank_name")
            return None

        client = Client(id=self.ids.new_id(), name=name)
        self._clients.append(client)
        self._selected_client_id = client.id
        self.logger.info("client_added", client_id=client.id)
        self._persist()
        return client

    def add_entry(self, client_id: str, draft: EntryDraft) -> Entry | None:
        """
        Record a new time-stamped entry for ``client_id`` from the draft's text.

        Ignored when no client is selected or the id does not name a client;
        the draft is then left as is. On success the draft is cleared.
        """
        if not client_id:
            self.logger.debug("entry_rejected", reason="no_client_selected")
            return None
        if self.get_client(client_id) is None:
            self.logger.debug("entry_rejected", reason="unknown_client", client_id=client_id)
            return None

        entry = Entry(
            id=self.ids.new_id(),
            client_id=client_id,
            timestamp=self.clock.now(),
            bp=_optional_text(draft.bp),
            hr=_optional_text(draft.hr),
            ciwa=parse_ciwa(draft.ciwa),
            meds=_optional_text(draft.meds),
            notes=_optional_text(draft.notes),
        )
        self._entries.insert(0, entry)
        draft.clear()

        self.logger.info(
            "entry_added",
            client_id=client_id,
            entry_id=entry.id,
            has_ciwa=entry.ciwa is not None,
        )
        self._persist()
        return entry

    def select_client(self, client_id: str) -> None:
        """Change the selection. The id is not validated; a stale id selects nobody."""
        self._selected_client_id = client_id
        self.logger.debug("client_selected", client_id=client_id)
        self._persist()

    def get_client(self, client_id: str) -> Client | None:
        return next((c for c in self._clients if c.id == client_id), None)

    def current_client(self) -> Client | None:
        return self.get_client(self._selected_client_id)

    def has_activity(self, client_id: str) -> bool:
        return any(entry.client_id == client_id for entry in self._entries)

    def client_status(self, client_id: str) -> ClientStatus:
        return "active" if self.has_activity(client_id) else "new"

    def timeline_for(self, client_id: str) -> list[Entry]:
        return timeline_for(self._entries, client_id)

"""
Navigator session: the controller a front end drives.

Wires the record store, its persistence mirror, the derived views and the
clipboard together. State is loaded once at construction; each user action is
one synchronous store mutation followed by a save. Views are recomputed on
every call.
"""

from pathlib import Path

import structlog

from detox_navigator.adapters.clipboard import ClipboardSink, copy_text
from detox_navigator.adapters.storage import JsonFileStorage, KeyValueStorage
from detox_navigator.config import AppConfig, get_config
from detox_navigator.domain.models import Classification, Client, Entry, EntryDraft
from detox_navigator.services.collaborators import Clock, IdGenerator, SystemClock
from detox_navigator.services.persistence import PersistenceAdapter
from detox_navigator.services.record_store import ClientStatus, RecordStore
from detox_navigator.services.severity import SeverityClassifier
from detox_navigator.services.summary import SummaryGenerator

logger = structlog.get_logger(__name__)


class NavigatorSession:
    """One local user's documentation session over a single storage medium."""

    def __init__(
        self,
        storage: KeyValueStorage,
        config: AppConfig | None = None,
        clock: Clock | None = None,
        ids: IdGenerator | None = None,
        clipboard: ClipboardSink | None = None,
    ) -> None:
        self.config = config or get_config()
        clock = clock or SystemClock()

        self.persistence = PersistenceAdapter(storage, key=self.config.storage.key)
        self.store = RecordStore.open(self.persistence, clock=clock, ids=ids)
        self.classifier = SeverityClassifier(self.config.severity)
        self.summaries = SummaryGenerator(self.config.summary, clock=clock)
        self.clipboard = clipboard
        self.draft = EntryDraft()
        self.logger = logger.bind(component="navigator_session")

    @classmethod
    def from_config(cls, config: AppConfig | None = None, **kwargs) -> "NavigatorSession":
        """Open a session on the JSON file named by the storage config."""
        config = config or get_config()
        storage = JsonFileStorage(Path(config.storage.path))
        return cls(storage, config=config, **kwargs)

    # Actions

    def add_client(self, name: str) -> Client | None:
        return self.store.add_client(name)

    def select_client(self, client_id: str) -> None:
        self.store.select_client(client_id)

    def save_entry(self) -> Entry | None:
        """Save the current draft for the selected client."""
        return self.store.add_entry(self.store.selected_client_id, self.draft)

    # Views

    @property
    def clients(self) -> list[Client]:
        return self.store.clients

    def current_client(self) -> Client | None:
        return self.store.current_client()

    def client_status(self, client_id: str) -> ClientStatus:
        return self.store.client_status(client_id)

    def timeline(self) -> list[Entry]:
        """Entries of the current client, most recent first; empty when nobody is selected."""
        client = self.current_client()
        if client is None:
            return []
        return self.store.timeline_for(client.id)

    def classify(self, entry: Entry) -> Classification | None:
        return self.classifier.classify(entry.ciwa)

    def summary_text(self) -> str:
        client = self.current_client()
        return self.summaries.generate(client, self.timeline() if client else [])

    async def copy_summary(self) -> bool:
        """Copy the current summary to the clipboard sink, if one is attached."""
        if self.clipboard is None:
            self.logger.warning("clipboard_unavailable")
            return False
        return await copy_text(self.clipboard, self.summary_text())

"""
Persistence adapter mirroring the record store to a key-value medium.

The whole store is written as one JSON blob under a single versioned key:

    {"clients": [...], "entries": [...], "selectedClientId": "..."}

Loading is defensive. Every top-level field is optional and decoded on its
own. A field present in the blob replaces the caller's default, except an
empty `selectedClientId`. Lists are validated item by item, so one malformed
entry is dropped without losing the rest of the history. A field of the wrong
shape is dropped and its default is kept. Nothing here raises to the caller.

The blob carries no schema version of its own. The storage key suffix is the
only marker, and there is no migration path if the entry shape changes.
"""

import json
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from detox_navigator.adapters.storage import KeyValueStorage
from detox_navigator.config import DEFAULT_STORAGE_KEY
from detox_navigator.domain.errors import BlobDecodeError
from detox_navigator.domain.models import Client, Entry, StoreSnapshot
from detox_navigator.services.result import Result

logger = structlog.get_logger(__name__)

# Blob key -> (snapshot field, item validator)
_LIST_FIELDS: dict[str, tuple[str, TypeAdapter[Any]]] = {
    "clients": ("clients", TypeAdapter(Client)),
    "entries": ("entries", TypeAdapter(Entry)),
}


def encode_blob(snapshot: StoreSnapshot) -> str:
    return json.dumps(snapshot.to_blob(), ensure_ascii=False)


def decode_blob(raw: str) -> Result[dict[str, Any], BlobDecodeError]:
    """Parse the raw blob into its top-level mapping without validating nested shapes."""
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        return Result.err(BlobDecodeError(f"blob is not valid JSON: {e}"))

    if not isinstance(parsed, dict):
        return Result.err(BlobDecodeError(f"blob is a {type(parsed).__name__}, expected an object"))
    return Result.ok(parsed)


class PersistenceAdapter:
    """Loads the store once at startup and saves it after every mutation."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self.logger = logger.bind(component="persistence", key=key)

    def save(self, snapshot: StoreSnapshot) -> bool:
        """Write the full snapshot. Best effort: failures are logged and reported as False."""
        try:
            self.storage.set(self.key, encode_blob(snapshot))
        except Exception as e:
            self.logger.exception("persistence_save_failed", error=str(e))
            return False

        self.logger.debug(
            "persistence_saved",
            clients=len(snapshot.clients),
            entries=len(snapshot.entries),
        )
        return True

    def load(self, defaults: StoreSnapshot | None = None) -> StoreSnapshot:
        """
        Read the stored snapshot.

        Args:
            defaults: State to keep for any field that is missing or unreadable.
                An empty store when omitted.

        Returns:
            A new snapshot: ``defaults`` overlaid with every readable field.
        """
        base = defaults.model_copy(deep=True) if defaults is not None else StoreSnapshot()

        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            self.logger.exception("persistence_load_failed", error=str(e))
            return base

        if not raw:
            self.logger.info("persistence_empty")
            return base

        decoded = decode_blob(raw)
        if decoded.is_err():
            self.logger.error("persistence_load_failed", error=str(decoded.unwrap_err()))
            return base

        fields = decoded.unwrap()
        updates: dict[str, Any] = {}
        for blob_key, (field_name, adapter) in _LIST_FIELDS.items():
            if blob_key not in fields:
                continue
            items = self._load_items(blob_key, fields[blob_key], adapter)
            if items is not None:
                updates[field_name] = items

        # An empty selection in the blob keeps the default
        selected = fields.get("selectedClientId")
        if selected:
            if isinstance(selected, str):
                updates["selected_client_id"] = selected
            else:
                self.logger.warning(
                    "persistence_field_rejected",
                    field="selectedClientId",
                    error=f"expected a string, got {type(selected).__name__}",
                )

        snapshot = base.model_copy(update=updates)
        self.logger.info(
            "persistence_loaded",
            clients=len(snapshot.clients),
            entries=len(snapshot.entries),
            restored_fields=sorted(updates),
        )
        return snapshot

    def _load_items(self, blob_key: str, value: Any, adapter: TypeAdapter[Any]) -> list[Any] | None:
        """Validate a stored list one item at a time, keeping every readable item."""
        if not isinstance(value, list):
            self.logger.warning(
                "persistence_field_rejected",
                field=blob_key,
                error=f"expected a list, got {type(value).__name__}",
            )
            return None

        items = []
        for index, item in enumerate(value):
            try:
                items.append(adapter.validate_python(item))
            except ValidationError as e:
                self.logger.warning(
                    "persistence_item_rejected",
                    field=blob_key,
                    index=index,
                    errors=e.error_count(),
                    error=str(e),
                )
        return items

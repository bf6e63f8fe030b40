"""Per-client timeline derived from the entry log."""

from collections.abc import Iterable

from detox_navigator.domain.models import Entry


def timeline_for(entries: Iterable[Entry], client_id: str) -> list[Entry]:
    """
    Return the client's entries, most recent first.

    Recomputed on every call. The sort is stable, so entries sharing a
    timestamp keep their relative order from ``entries`` (newest-first storage
    order puts the most recently added one first).
    """
    owned = [entry for entry in entries if entry.client_id == client_id]
    return sorted(owned, key=lambda entry: entry.timestamp, reverse=True)

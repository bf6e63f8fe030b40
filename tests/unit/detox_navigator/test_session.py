"""
End-to-end tests through the navigator session.

These drive the same path a front end does: add a client, fill the draft,
save, then read the timeline, classification and summary back.
"""

import pytest
from structlog.testing import capture_logs

from detox_navigator.adapters.storage import InMemoryStorage
from detox_navigator.config import AppConfig
from detox_navigator.domain.models import SeverityTier
from detox_navigator.session import NavigatorSession


@pytest.fixture
def session(storage, app_config, clock, ids, clipboard) -> NavigatorSession:
    return NavigatorSession(storage, config=app_config, clock=clock, ids=ids, clipboard=clipboard)


def test_documenting_one_client_end_to_end(session: NavigatorSession) -> None:
    client = session.add_client("A")
    assert client is not None

    session.draft.ciwa = "16"
    session.draft.bp = "130/80"
    entry = session.save_entry()

    timeline = session.timeline()
    assert timeline == [entry]
    assert timeline[0].ciwa == 16

    classification = session.classify(timeline[0])
    assert classification is not None
    assert classification.tier is SeverityTier.ESCALATE

    summary = session.summary_text()
    assert "Client: A" in summary
    assert "BP 130/80" in summary
    assert "CIWA: 16" in summary
    assert "Meds:" not in summary


def test_save_entry_without_client_keeps_draft(session: NavigatorSession) -> None:
    session.draft.notes = "arrived"

    assert session.save_entry() is None
    assert session.draft.notes == "arrived"


def test_views_are_empty_for_stale_selection(session: NavigatorSession) -> None:
    client = session.add_client("A")
    session.draft.notes = "intake"
    session.save_entry()

    session.select_client("removed-elsewhere")

    assert session.current_client() is None
    assert session.timeline() == []
    assert session.summary_text() == ""

    session.select_client(client.id)  # type: ignore[union-attr]
    assert len(session.timeline()) == 1


def test_timeline_and_summary_follow_selection(session: NavigatorSession) -> None:
    a = session.add_client("A")
    session.draft.notes = "for A"
    session.save_entry()
    session.add_client("B")
    session.draft.notes = "for B"
    session.save_entry()

    assert [e.notes for e in session.timeline()] == ["for B"]
    assert session.client_status(a.id) == "active"  # type: ignore[union-attr]

    session.select_client(a.id)  # type: ignore[union-attr]
    assert "Notes: for A" in session.summary_text()
    assert "for B" not in session.summary_text()


def test_state_survives_a_new_session(storage, app_config, clock, ids) -> None:
    first = NavigatorSession(storage, config=app_config, clock=clock, ids=ids)
    first.add_client("A")
    first.draft.hr = "92"
    first.save_entry()

    second = NavigatorSession(storage, config=app_config)

    assert second.clients == first.clients
    assert second.current_client() == first.current_client()
    assert second.timeline() == first.timeline()


def test_custom_storage_key_is_used(app_config: AppConfig) -> None:
    storage = InMemoryStorage()
    config = app_config.model_copy(
        update={"storage": app_config.storage.model_copy(update={"key": "navigator_v2"})}
    )

    NavigatorSession(storage, config=config).add_client("A")

    assert storage.get("navigator_v2") is not None
    assert storage.get("home_detox_navigator_v1") is None


class TestCopySummary:
    async def test_copies_summary_text(self, session: NavigatorSession, clipboard) -> None:
        session.add_client("A")

        assert await session.copy_summary() is True
        assert clipboard.text == session.summary_text()

    async def test_nothing_to_copy_without_client(self, session: NavigatorSession, clipboard) -> None:
        assert await session.copy_summary() is False
        assert clipboard.text is None

    async def test_clipboard_failure_is_logged(
        self, storage, app_config, failing_clipboard
    ) -> None:
        with capture_logs() as logs:
            session = NavigatorSession(storage, config=app_config, clipboard=failing_clipboard)
            session.add_client("A")
            copied = await session.copy_summary()

        assert copied is False
        assert any(log["event"] == "clipboard_write_failed" for log in logs)

    async def test_without_clipboard_sink(self, storage, app_config) -> None:
        session = NavigatorSession(storage, config=app_config)
        session.add_client("A")

        assert await session.copy_summary() is False

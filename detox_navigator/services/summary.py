"""
Aftercare summary rendering.

The summary is plain text meant to be pasted into a letter or secure email for
the client's ongoing clinician:

    Home Detox Summary
    Client: J.D.
    Generated: 10/18/2026 02:05 PM

    10/17/2026 08:00 AM
    Vitals: BP 130/80 | HR 88 | Meds: librium 25mg | CIWA: 16

The generator only reads the client and timeline it is given; it never touches
the record store.
"""

from collections.abc import Sequence
from datetime import datetime, tzinfo

from detox_navigator.config import SummaryConfig
from detox_navigator.domain.models import Client, Entry
from detox_navigator.services.collaborators import Clock, SystemClock
from detox_navigator.services.severity import format_score

PART_SEPARATOR = " | "


def format_timestamp(
    value: datetime,
    tz: tzinfo | None = None,
    date_format: str = "%m/%d/%Y",
    time_format: str = "%I:%M %p",
) -> str:
    """Format an instant as local date plus hour:minute."""
    local = value.astimezone(tz)
    return f"{local.strftime(date_format)} {local.strftime(time_format)}"


def entry_parts(entry: Entry) -> list[str]:
    """Summary line parts for one entry, in fixed order, skipping absent fields."""
    vitals = [
        text
        for text in (
            f"BP {entry.bp}" if entry.bp else "",
            f"HR {entry.hr}" if entry.hr else "",
        )
        if text
    ]

    parts = []
    if vitals:
        parts.append("Vitals: " + PART_SEPARATOR.join(vitals))
    if entry.meds:
        parts.append(f"Meds: {entry.meds}")
    if entry.notes:
        parts.append(f"Notes: {entry.notes}")
    if entry.ciwa is not None:
        parts.append(f"CIWA: {format_score(entry.ciwa)}")
    return parts


class SummaryGenerator:
    """Renders a client's timeline into the fixed-format summary text."""

    def __init__(self, config: SummaryConfig | None = None, clock: Clock | None = None) -> None:
        self.config = config or SummaryConfig()
        self.clock = clock or SystemClock()
        self._tz = self.config.tzinfo()

    def format_time(self, value: datetime) -> str:
        return format_timestamp(
            value,
            tz=self._tz,
            date_format=self.config.date_format,
            time_format=self.config.time_format,
        )

    def generate(self, client: Client | None, timeline: Sequence[Entry]) -> str:
        """
        Render the summary for ``client``.

        Args:
            client: The selected client, or None when nothing is selected.
            timeline: The client's entries, most recent first (as produced by
                ``timeline_for``). The body lists them oldest first.

        Returns:
            The summary text, or an empty string when no client is selected.
        """
        if client is None:
            return ""

        generated_at = self.format_time(self.clock.now())
        header = f"{self.config.title}\nClient: {client.name}\nGenerated: {generated_at}\n\n"

        blocks = [
            f"{self.format_time(entry.timestamp)}\n{PART_SEPARATOR.join(entry_parts(entry))}\n"
            for entry in reversed(timeline)
        ]
        return header + "\n".join(blocks)

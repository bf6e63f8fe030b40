"""
Clipboard sinks for the generated summary.

Copying is fire-and-forget: a failure is logged and reported back as False,
never raised, and never retried.
"""

import asyncio
from pathlib import Path
from typing import Protocol

import structlog

from detox_navigator.domain.errors import ClipboardError

logger = structlog.get_logger(__name__)


class ClipboardSink(Protocol):
    """Write-only destination for a single text payload."""

    async def write_text(self, text: str) -> None: ...


class InMemoryClipboard:
    """Keeps the last payload written; useful in tests."""

    def __init__(self) -> None:
        self.text: str | None = None

    async def write_text(self, text: str) -> None:
        self.text = text


class FileClipboard:
    """Writes the payload to a text file, for terminals without a system clipboard."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def write_text(self, text: str) -> None:
        try:
            await asyncio.to_thread(self._write, text)
        except OSError as e:
            raise ClipboardError(f"cannot write {self.path}: {e}") from e

    def _write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")


async def copy_text(sink: ClipboardSink, text: str) -> bool:
    """Copy ``text`` to ``sink``. Returns False when empty or when the sink fails."""
    if not text:
        return False
    try:
        await sink.write_text(text)
    except Exception as e:
        logger.exception("clipboard_write_failed", sink=type(sink).__name__, error=str(e))
        return False
    logger.info("clipboard_write_succeeded", sink=type(sink).__name__, size=len(text))
    return True

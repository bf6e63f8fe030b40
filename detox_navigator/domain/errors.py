"""Domain-specific exceptions."""


class NavigatorError(Exception):
    """Base class for every error raised inside the navigator."""


class StorageError(NavigatorError):
    """Raised by a storage medium that cannot read or write a value."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"storage key '{key}': {message}")


class BlobDecodeError(NavigatorError):
    """Raised when a persisted blob cannot be decoded at all."""


class ClipboardError(NavigatorError):
    """Raised by a clipboard sink that refused the payload."""

from __future__ import annotations

from typing import Protocol


class StorageWriteError(Exception):
    """A durable write or delete failed. Persistence is best-effort."""


class CookieStoragePort(Protocol):
    """Durable home of the serialized cookie jar (a single record)."""

    def read(self) -> str | None:
        """Returns the stored payload, or None when no record exists.

        Any other failure to read raises StorageCorrupt.
        """
        ...

    def write(self, payload: str) -> None:
        """Replaces the record. Raises StorageWriteError on failure."""
        ...

    def clear(self) -> None:
        """Deletes the record. A missing record is not an error."""
        ...

from __future__ import annotations

from typing import Protocol


class StorageProbePort(Protocol):
    """Tells whether the deployment has writable local storage."""

    def has_persistent_storage(self) -> bool: ...

from __future__ import annotations

from mealime_pipeline.application.ports.cookie_storage_port import CookieStoragePort


class InMemoryCookieStorage(CookieStoragePort):
    """Simple in-memory record for development and tests. Not persistent."""

    def __init__(self, payload: str | None = None) -> None:
        self.payload = payload
        self.reads = 0
        self.writes = 0

    def read(self) -> str | None:
        self.reads += 1
        return self.payload

    def write(self, payload: str) -> None:
        self.writes += 1
        self.payload = payload

    def clear(self) -> None:
        self.payload = None

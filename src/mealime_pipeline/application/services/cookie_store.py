from __future__ import annotations

from collections.abc import Iterable

from mealime_pipeline.application.ports.cookie_storage_port import CookieStoragePort, StorageWriteError
from mealime_pipeline.application.ports.environment_port import StorageProbePort
from mealime_pipeline.domain.entities.cookie import Cookie
from mealime_pipeline.domain.entities.cookie_jar import CookieJar


class CookieStore:
    """Cookie jar bound to its durable storage.

    - load() restores the jar once; an absent record yields an empty jar
    - save() is best-effort and never raises
    - when the probe reports no persistent storage, storage is never touched
    """

    def __init__(
        self,
        storage: CookieStoragePort,
        probe: StorageProbePort,
        jar: CookieJar | None = None,
    ) -> None:
        self._storage = storage
        self._persistent = probe.has_persistent_storage()
        self.jar = jar if jar is not None else CookieJar()

    def _log(self, msg: str) -> None:
        print(f"[CookieStore] {msg}")

    @property
    def persistent(self) -> bool:
        return self._persistent

    @classmethod
    def load(cls, storage: CookieStoragePort, probe: StorageProbePort) -> "CookieStore":
        store = cls(storage, probe)
        if not store.persistent:
            store._log("no persistent storage, starting with an empty cookie jar")
            return store
        payload = storage.read()
        if payload is None:
            store._log("creating a new cookie jar")
            return store
        store.jar = CookieJar.loads(payload)
        store._log(f"cookie jar found, loaded {len(store.jar)} cookies")
        return store

    def get(self, domain: str, path: str, name: str) -> Cookie | None:
        return self.jar.get(domain, path, name)

    def merge(self, cookies: Iterable[Cookie]) -> None:
        self.jar.merge(cookies)

    def matching(self, url: str) -> list[Cookie]:
        return self.jar.matching(url)

    def save(self) -> None:
        if not self._persistent:
            return
        try:
            self._storage.write(self.jar.dumps())
        except StorageWriteError as e:
            self._log(f"could not persist cookie jar: {e}")

    def reset(self) -> None:
        """Drops the durable record and starts over with an empty jar."""
        if self._persistent:
            try:
                self._storage.clear()
            except StorageWriteError as e:
                self._log(f"could not delete cookie jar: {e}")
        self.jar = CookieJar()

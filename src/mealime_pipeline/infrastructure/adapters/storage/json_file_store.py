from __future__ import annotations

import os
from pathlib import Path

from mealime_pipeline.application.ports.cookie_storage_port import CookieStoragePort, StorageWriteError
from mealime_pipeline.domain.errors import StorageCorrupt


class JsonFileCookieStorage(CookieStoragePort):
    """Keeps the serialized cookie jar in a single JSON file (cookiejar.json)."""

    def __init__(self, path: str = "cookiejar.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageCorrupt(f"unknown cookie jar loading error: {e}") from e

    def write(self, payload: str) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageWriteError(str(e)) from e

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(str(e)) from e

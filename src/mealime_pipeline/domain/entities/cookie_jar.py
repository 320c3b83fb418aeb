from __future__ import annotations

import json
import time
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime

from mealime_pipeline.domain.entities.cookie import Cookie, CookieKey
from mealime_pipeline.domain.errors import StorageCorrupt


class CookieJar:
    """In-memory cookie collection keyed by (domain, path, name)."""

    def __init__(self, cookies: Iterable[Cookie] = ()) -> None:
        self._cookies: dict[CookieKey, Cookie] = {}
        self.merge(cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies.values()))

    def get(self, domain: str, path: str, name: str) -> Cookie | None:
        return self._cookies.get((domain.lstrip(".").lower(), path, name))

    def merge(self, cookies: Iterable[Cookie]) -> int:
        """Upsert by identity key. Returns how many entries changed."""
        changed = 0
        for cookie in cookies:
            if self._cookies.get(cookie.key) != cookie:
                self._cookies[cookie.key] = cookie
                changed += 1
        return changed

    def matching(self, url: str, now: float | None = None) -> list[Cookie]:
        now = time.time() if now is None else now
        found = [c for c in self._cookies.values() if c.matches(url, now)]
        # RFC 6265: longer paths first
        return sorted(found, key=lambda c: len(c.path), reverse=True)

    def clear(self) -> None:
        self._cookies.clear()

    # ---------- Serialization ----------
    def dumps(self) -> str:
        return json.dumps(
            {
                "cookies": [c.to_record() for c in self._cookies.values()],
                "saved_at": datetime.now(UTC).isoformat(),
            },
            indent=2,
        )

    @classmethod
    def loads(cls, payload: str) -> "CookieJar":
        try:
            data = json.loads(payload)
            records = data["cookies"]
            return cls(Cookie.from_record(r) for r in records)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageCorrupt(f"cookie jar could not be parsed: {e}") from e

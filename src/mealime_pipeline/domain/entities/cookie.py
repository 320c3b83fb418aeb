from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any
from urllib.parse import urlsplit

CookieKey = tuple[str, str, str]


@dataclass(frozen=True)
class Cookie:
    """One browser cookie. Identity is (domain, path, name)."""

    domain: str
    path: str
    name: str
    value: str
    expires: int | None = None  # epoch seconds, None for session cookies
    secure: bool = False
    http_only: bool = False
    host_only: bool = False
    same_site: str | None = None

    def __post_init__(self) -> None:
        # Domain-attribute cookies arrive as ".example.com"
        object.__setattr__(self, "domain", self.domain.lstrip(".").lower())
        if not self.path:
            object.__setattr__(self, "path", "/")

    @property
    def key(self) -> CookieKey:
        return (self.domain, self.path, self.name)

    def is_expired(self, now: float) -> bool:
        return self.expires is not None and self.expires <= now

    def matches(self, url: str, now: float) -> bool:
        """True when a browser would send this cookie with a request to url."""
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
        if self.host_only:
            if host != self.domain:
                return False
        elif host != self.domain and not host.endswith("." + self.domain):
            return False
        request_path = parts.path or "/"
        if not (
            request_path == self.path
            or (request_path.startswith(self.path) and (self.path.endswith("/") or request_path[len(self.path)] == "/"))
        ):
            return False
        if self.secure and parts.scheme != "https":
            return False
        return not self.is_expired(now)

    def to_record(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Cookie":
        expires = record.get("expires")
        return cls(
            domain=str(record["domain"]),
            path=str(record["path"]),
            name=str(record["name"]),
            value=str(record["value"]),
            expires=int(expires) if expires is not None else None,
            secure=bool(record.get("secure", False)),
            http_only=bool(record.get("http_only", False)),
            host_only=bool(record.get("host_only", False)),
            same_site=record.get("same_site"),
        )

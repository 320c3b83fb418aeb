from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from requests.structures import CaseInsensitiveDict

from mealime_pipeline.domain.entities.cookie import Cookie


class TransportError(Exception):
    """Network or protocol level failure; no HTTP status was obtained."""


@dataclass(frozen=True)
class HttpRequest:
    url: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Mapping[str, str] | None = None
    cookies: tuple[Cookie, ...] = ()

    def with_default_headers(self, defaults: Mapping[str, str]) -> "HttpRequest":
        """Adds headers not already present (case-insensitive)."""
        merged: CaseInsensitiveDict[str] = CaseInsensitiveDict(defaults)
        merged.update(self.headers)
        return replace(self, headers=dict(merged.items()))

    def with_cookies(self, cookies: tuple[Cookie, ...]) -> "HttpRequest":
        return replace(self, cookies=cookies)


class HttpResponse:
    def __init__(
        self,
        status_code: int,
        text: str,
        url: str,
        headers: Mapping[str, str],
        *,
        cookies: list[Cookie] | None = None,
    ) -> None:
        self.status_code = status_code
        self.text = text
        self.url = url
        self.headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(headers)
        # every cookie known after the exchange, redirects included
        self.cookies = list(cookies or [])

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


# A client sends one request and returns its response.
Client = Callable[[HttpRequest], HttpResponse]


class ClientLayer(Protocol):
    """Cross-cutting behaviour wrapped around a client."""

    def __call__(self, request: HttpRequest, send: Client) -> HttpResponse: ...


class TransportPort(Protocol):
    """Base client: performs the exchange, follows redirects, reports cookies."""

    def __call__(self, request: HttpRequest) -> HttpResponse: ...
    def close(self) -> None: ...

"""Composable request clients.

A client is a plain callable ``HttpRequest -> HttpResponse``. ``wrap`` puts a
layer around a client and returns a new client; nothing is mutated, so a
session swaps chains by rebinding a single reference. Layers never alter the
response handed back to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import reduce

from mealime_pipeline.application.ports.http_client_port import Client, ClientLayer, HttpRequest, HttpResponse
from mealime_pipeline.application.services.cookie_store import CookieStore


def wrap(client: Client, layer: ClientLayer) -> Client:
    def layered(request: HttpRequest) -> HttpResponse:
        return layer(request, client)

    return layered


def compose(base: Client, *layers: ClientLayer) -> Client:
    """compose(t, a, b) == wrap(wrap(t, a), b): the first layer sits closest to the transport."""
    return reduce(wrap, layers, base)


class CookieLayer(ClientLayer):
    """Attaches stored cookies to the request and records the ones the response set."""

    def __init__(self, store: CookieStore) -> None:
        self.store = store

    def __call__(self, request: HttpRequest, send: Client) -> HttpResponse:
        response = send(request.with_cookies(tuple(self.store.matching(request.url))))
        self.store.merge(response.cookies)
        return response


class HeadersLayer(ClientLayer):
    """Default headers; a header the caller already set wins."""

    def __init__(self, headers: Mapping[str, str]) -> None:
        self.headers = dict(headers)

    def __call__(self, request: HttpRequest, send: Client) -> HttpResponse:
        return send(request.with_default_headers(self.headers))


def csrf_layer(token: str) -> HeadersLayer:
    return HeadersLayer({"x-csrf-token": token, "x-requested-with": "XMLHttpRequest"})

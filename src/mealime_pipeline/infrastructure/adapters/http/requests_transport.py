from __future__ import annotations

import requests

from mealime_pipeline.application.ports.http_client_port import HttpRequest, HttpResponse, TransportError, TransportPort
from mealime_pipeline.infrastructure.adapters.http.cookie_conversion import from_jar_cookie, to_jar_cookie


class RequestsTransport(TransportPort):
    """Base transport backed by a persistent requests.Session.

    Same contract as HttpxTransport: cookies are seeded per exchange and
    reported back on the response, redirects are followed, no retries.
    """

    def __init__(self, timeout: float = 30.0, *, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()
        self._timeout = timeout

    def _log(self, msg: str) -> None:
        print(f"[RequestsTransport] {msg}")

    def __call__(self, request: HttpRequest) -> HttpResponse:
        self.session.cookies.clear()
        for cookie in request.cookies:
            self.session.cookies.set_cookie(to_jar_cookie(cookie))
        try:
            resp = self.session.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=dict(request.data) if request.data is not None else None,
                timeout=self._timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            raise TransportError(f"{request.method} {request.url} -> {e}") from e
        if resp.history:
            self._log(f"{request.method} {request.url} | redirected {len(resp.history)}x to {resp.url}")
        cookies = [from_jar_cookie(c) for c in self.session.cookies]
        return HttpResponse(resp.status_code, resp.text, str(resp.url), resp.headers, cookies=cookies)

    def close(self) -> None:
        self.session.close()

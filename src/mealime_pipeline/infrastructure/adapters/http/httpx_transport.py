from __future__ import annotations

import httpx

from mealime_pipeline.application.ports.http_client_port import HttpRequest, HttpResponse, TransportError, TransportPort
from mealime_pipeline.infrastructure.adapters.http.cookie_conversion import from_jar_cookie, to_jar_cookie


class HttpxTransport(TransportPort):
    def __init__(self, timeout: float = 30.0, *, client: httpx.Client | None = None) -> None:
        """Base transport backed by a persistent httpx.Client.

        - Follows redirects like a browser fetch does
        - The client jar only lives for one exchange: it is seeded with the
          request's cookies so every redirect hop carries them, then dumped
          into the response so the cookie layer can record what was set
        - No retries: a failed exchange raises TransportError

        Args:
            timeout (float, optional): Timeout for requests. Defaults to 30.0.
            client (httpx.Client | None, optional): Preconfigured client, mainly for
                tests with httpx.MockTransport. Defaults to None.
        """
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        self._client.cookies.clear()
        for cookie in request.cookies:
            self._client.cookies.jar.set_cookie(to_jar_cookie(cookie))
        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=dict(request.data) if request.data is not None else None,
                follow_redirects=True,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{request.method} {request.url} -> {e}") from e
        cookies = [from_jar_cookie(c) for c in self._client.cookies.jar]
        return HttpResponse(resp.status_code, resp.text, str(resp.url), resp.headers, cookies=cookies)

    def close(self) -> None:
        self._client.close()

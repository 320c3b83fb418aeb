"""Bridges domain cookies and the stdlib CookieJar both httpx and requests use."""

from __future__ import annotations

from http.cookiejar import Cookie as JarCookie

from mealime_pipeline.domain.entities.cookie import Cookie


def _nonstandard_attr(cookie: JarCookie, name: str) -> str | None:
    for key in (name, name.lower()):
        if cookie.has_nonstandard_attr(key):
            return cookie.get_nonstandard_attr(key) or ""
    return None


def to_jar_cookie(cookie: Cookie) -> JarCookie:
    rest: dict[str, str | None] = {}
    if cookie.http_only:
        rest["HttpOnly"] = None
    if cookie.same_site:
        rest["SameSite"] = cookie.same_site
    domain = cookie.domain if cookie.host_only else f".{cookie.domain}"
    return JarCookie(
        version=0,
        name=cookie.name,
        value=cookie.value,
        port=None,
        port_specified=False,
        domain=domain,
        domain_specified=not cookie.host_only,
        domain_initial_dot=not cookie.host_only,
        path=cookie.path,
        path_specified=True,
        secure=cookie.secure,
        expires=cookie.expires,
        discard=cookie.expires is None,
        comment=None,
        comment_url=None,
        rest=rest,
    )


def from_jar_cookie(cookie: JarCookie) -> Cookie:
    same_site = _nonstandard_attr(cookie, "SameSite")
    return Cookie(
        domain=cookie.domain,
        path=cookie.path,
        name=cookie.name,
        value=cookie.value or "",
        expires=int(cookie.expires) if cookie.expires is not None else None,
        secure=bool(cookie.secure),
        http_only=_nonstandard_attr(cookie, "HttpOnly") is not None,
        # the stdlib jar keeps host-only cookies under the bare request host
        host_only=not cookie.domain.startswith("."),
        same_site=same_site or None,
    )

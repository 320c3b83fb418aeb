from __future__ import annotations

from bs4 import BeautifulSoup  # type: ignore[import-untyped]


def extract_authenticity_token(html: str) -> str | None:
    """Hidden anti-forgery input of the Rails login form."""
    soup = BeautifulSoup(html, "html.parser")
    inp = soup.find("input", {"name": "authenticity_token"})
    if not inp or not inp.get("value"):
        return None
    return inp["value"]


def extract_csrf_token(html: str) -> str | None:
    """<meta name="csrf-token" content="..."> of the Angular app shell.

    Unrelated to the XSRF-TOKEN cookie, which the cookie layer carries anyway.
    """
    soup = BeautifulSoup(html, "html.parser")
    meta = soup.find("meta", {"name": "csrf-token"})
    if not meta or not meta.get("content"):
        return None
    return meta["content"]

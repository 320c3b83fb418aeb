from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mealime_pipeline.application.ports.cookie_storage_port import CookieStoragePort
from mealime_pipeline.application.ports.environment_port import StorageProbePort
from mealime_pipeline.application.ports.http_client_port import (
    Client,
    HttpRequest,
    HttpResponse,
    TransportError,
    TransportPort,
)
from mealime_pipeline.application.services.cookie_store import CookieStore
from mealime_pipeline.domain.entities.cookie import Cookie
from mealime_pipeline.domain.entities.credentials import Credentials
from mealime_pipeline.domain.errors import AuthenticationFailed, CsrfError, MealimeError, TokenExtractionError
from mealime_pipeline.infrastructure.adapters.http.client_chain import (
    CookieLayer,
    HeadersLayer,
    compose,
    csrf_layer,
    wrap,
)
from mealime_pipeline.infrastructure.adapters.mealime.endpoints import (
    APP_PATH,
    AUTH_COOKIE_DOMAIN,
    AUTH_COOKIE_NAME,
    AUTH_COOKIE_PATH,
    BROWSER_HEADERS,
    LOGIN_PATH,
    MEALIME_BASE,
    SESSIONS_PATH,
    login_form_headers,
)
from mealime_pipeline.infrastructure.adapters.mealime.pages import extract_authenticity_token, extract_csrf_token


class AuthState(str, Enum):
    UNINITIALIZED = "Uninitialized"
    JAR_READY = "JarReady"
    NEEDS_LOGIN = "NeedsLogin"
    LOGIN_ATTEMPTED = "LoginAttempted"
    HAS_AUTH_COOKIE = "HasAuthCookie"
    CSRF_PENDING = "CsrfPending"
    READY = "Ready"
    FAILED = "Failed"


@dataclass
class SessionState:
    credentials: Credentials
    client: Client
    csrf_token: str | None = None


class MealimeAuthFlow:
    """
    Drives cookie jar + client chain from nothing to an authenticated,
    CSRF-armed session.

    1) load the cookie jar (once), build cookies + browser headers chain
    2) no auth_token cookie: GET /login, POST /sessions, re-check the cookie
    3) no cached CSRF token: GET / and read the csrf-token meta tag
    4) wrap the chain with the CSRF layer → Ready
    """

    def __init__(
        self,
        transport: TransportPort,
        storage: CookieStoragePort,
        probe: StorageProbePort,
        *,
        base_url: str = MEALIME_BASE,
    ) -> None:
        self.transport = transport
        self.storage = storage
        self.probe = probe
        self.base_url = base_url.rstrip("/")
        self.store: CookieStore | None = None
        self.state = AuthState.UNINITIALIZED
        self.failure: MealimeError | TransportError | None = None

    def _log(self, msg: str) -> None:
        print(f"[MealimeAuthFlow] {msg}")

    def _transition(self, state: AuthState) -> None:
        self.state = state

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def persist(self) -> None:
        if self.store is not None:
            self.store.save()

    def auth_cookie(self) -> Cookie | None:
        if self.store is None:
            return None
        return self.store.get(AUTH_COOKIE_DOMAIN, AUTH_COOKIE_PATH, AUTH_COOKIE_NAME)

    # ---------- API ----------
    def run(self, session: SessionState) -> bool:
        """Brings the session to Ready. Returns True or raises."""
        if self.state is AuthState.READY and session.csrf_token:
            return True
        try:
            self._run(session)
        except (MealimeError, TransportError) as e:
            self.failure = e
            self._transition(AuthState.FAILED)
            self._log(f"login: failed with {type(e).__name__}: {e}")
            raise
        self.failure = None
        return True

    def reset(self, session: SessionState) -> bool:
        """Forgets everything (durable jar, chain, CSRF token) and logs in again."""
        store = self.store or CookieStore(self.storage, self.probe)
        store.reset()
        self.store = None
        session.client = self.transport
        session.csrf_token = None
        self._transition(AuthState.UNINITIALIZED)
        self._log("reset: cookie jar and CSRF token discarded")
        return self.run(session)

    # ---------- Transitions ----------
    def _run(self, session: SessionState) -> None:
        if self.store is None:
            self._log("login: initializing cookie jar")
            self.store = CookieStore.load(self.storage, self.probe)
        self._transition(AuthState.JAR_READY)
        session.client = compose(self.transport, CookieLayer(self.store), HeadersLayer(BROWSER_HEADERS))

        if self.auth_cookie() is None:
            self._transition(AuthState.NEEDS_LOGIN)
            authenticity_token = self._fetch_authenticity_token(session)
            self._attempt_credentials_post(session, authenticity_token)
            self._transition(AuthState.LOGIN_ATTEMPTED)
            if self.auth_cookie() is None:
                raise AuthenticationFailed("No auth possible, failed initial login")
        else:
            self._log("login: auth cookie present, skipping credentials")
        self._transition(AuthState.HAS_AUTH_COOKIE)

        if session.csrf_token is None:
            self._transition(AuthState.CSRF_PENDING)
            session.csrf_token = self._fetch_csrf_token(session)
            self._log("login: csrf token found")
        session.client = wrap(session.client, csrf_layer(session.csrf_token))
        self._transition(AuthState.READY)
        self._log("login: csrf token and cookies loaded")

    def _get(self, session: SessionState, path: str) -> HttpResponse:
        try:
            return session.client(HttpRequest(self._url(path)))
        finally:
            self.persist()

    def _fetch_authenticity_token(self, session: SessionState) -> str:
        resp = self._get(session, LOGIN_PATH)
        token = extract_authenticity_token(resp.text)
        if not token:
            raise TokenExtractionError(f"no authenticity token found on {LOGIN_PATH} (status={resp.status_code})")
        return token

    def _attempt_credentials_post(self, session: SessionState, authenticity_token: str) -> None:
        """Submits the login form. Outcome is judged by the auth cookie only.

        /sessions answers with a 404 even when it did authenticate and set
        auth_token, and it is known to break the connection at times.
        Whatever happens here is discarded; the jar is saved either way.
        """
        creds = session.credentials
        try:
            resp = session.client(
                HttpRequest(
                    self._url(SESSIONS_PATH),
                    method="POST",
                    headers=login_form_headers(self.base_url),
                    data={
                        "utf8": "✓",
                        "authenticity_token": authenticity_token,
                        "email": creds.email,
                        "password": creds.password,
                        "hp2": "",
                        "remember_me": "1",
                        "commit": "Log in",
                    },
                )
            )
            self._log(f"login: POST {SESSIONS_PATH} -> status={resp.status_code} (ignored)")
        except TransportError as e:
            self._log(f"login: POST {SESSIONS_PATH} failed ({e}), checking auth cookie anyway")
        finally:
            self.persist()

    def _fetch_csrf_token(self, session: SessionState) -> str:
        resp = self._get(session, APP_PATH)
        token = extract_csrf_token(resp.text)
        if not token:
            self._log("login: no csrf token found")
            raise CsrfError()
        return token

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter
from tenacity.wait import wait_base

from mealime_pipeline.application.ports.http_client_port import TransportError
from mealime_pipeline.domain.errors import CsrfError, MealimeError


class SessionLoginPort(Protocol):
    def login(self) -> bool: ...


@dataclass(frozen=True)
class EnsureSessionResult:
    status: str  # "READY" | "ERROR"
    message: str
    error: str | None = None


class EnsureMealimeSessionUseCase:
    """Logs the session in and reports the outcome instead of raising.

    A missing CSRF token is the one failure worth trying again later (the
    session itself is authenticated); with csrf_retries > 0 login() is
    retried on CsrfError only. Nothing is retried by default.
    """

    def __init__(
        self,
        session: SessionLoginPort,
        *,
        csrf_retries: int = 0,
        wait: wait_base | None = None,
    ) -> None:
        self.session = session
        self.csrf_retries = max(0, csrf_retries)
        self.wait = wait or wait_exponential_jitter(initial=1, max=8)

    def _log(self, msg: str) -> None:
        print(f"[EnsureMealimeSessionUseCase] {msg}")

    def execute(self) -> EnsureSessionResult:
        retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(self.csrf_retries + 1),
            wait=self.wait,
            retry=retry_if_exception_type(CsrfError),
            before_sleep=lambda rs: self._log(f"CSRF token missing, retry {rs.attempt_number}/{self.csrf_retries}"),
        )
        try:
            for attempt in retrying:
                with attempt:
                    self.session.login()
        except (MealimeError, TransportError) as e:
            return EnsureSessionResult("ERROR", f"Login failed: {e}", type(e).__name__)
        return EnsureSessionResult("READY", "Session authenticated, CSRF token loaded")

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mealime_pipeline.application.dtos.submission_dto import SubmissionReport


class MealimeError(RuntimeError):
    """Base class for every failure the Mealime session can surface."""


class InvalidCredentials(ValueError):
    pass


class StorageCorrupt(MealimeError):
    """The durable cookie record exists but cannot be read or parsed."""


class TokenExtractionError(MealimeError):
    """The login page carried no authenticity_token input."""


class AuthenticationFailed(MealimeError):
    """No auth cookie after the credentials were submitted."""


class CsrfError(MealimeError):
    """Authenticated, but the app page exposed no csrf-token meta tag."""

    def __init__(self, message: str = "No CSRF token found") -> None:
        super().__init__(message)


class UpstreamRejected(MealimeError):
    def __init__(
        self,
        endpoint: str,
        status_code: int,
        body: str,
        *,
        report: SubmissionReport | None = None,
    ) -> None:
        super().__init__(f"{endpoint} API call failed: ({status_code}) {body[:200]}")
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        self.report = report


class MalformedResponse(MealimeError):
    pass


class SessionNotReady(MealimeError):
    def __init__(self) -> None:
        super().__init__("login() must complete before calling data endpoints")


class SessionBusy(MealimeError):
    def __init__(self) -> None:
        super().__init__("another operation is running on this Mealime session")

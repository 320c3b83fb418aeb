from tenacity import wait_none

from mealime_pipeline.application.ports.http_client_port import TransportError
from mealime_pipeline.application.use_cases.ensure_mealime_session import EnsureMealimeSessionUseCase
from mealime_pipeline.domain.errors import AuthenticationFailed, CsrfError
from tests.unit._fakes_mealime import FakeTransport, make_session, mealime_routes, response


class ScriptedLogin:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def login(self) -> bool:
        self.calls += 1
        outcome = self.outcomes.pop(0) if self.outcomes else True
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def test_ready_on_successful_login():
    result = EnsureMealimeSessionUseCase(ScriptedLogin(True)).execute()
    assert result.status == "READY"
    assert result.error is None


def test_failure_is_reported_not_raised():
    session = ScriptedLogin(AuthenticationFailed("No auth possible, failed initial login"))
    result = EnsureMealimeSessionUseCase(session, csrf_retries=3, wait=wait_none()).execute()

    assert result.status == "ERROR"
    assert result.error == "AuthenticationFailed"
    assert "failed initial login" in result.message
    assert session.calls == 1  # only CSRF failures are retried


def test_transport_error_is_reported():
    result = EnsureMealimeSessionUseCase(ScriptedLogin(TransportError("timeout"))).execute()
    assert result.error == "TransportError"


def test_no_retry_by_default():
    session = ScriptedLogin(CsrfError(), True)
    result = EnsureMealimeSessionUseCase(session, wait=wait_none()).execute()
    assert result.error == "CsrfError"
    assert session.calls == 1


def test_csrf_error_retried_when_asked():
    session = ScriptedLogin(CsrfError(), CsrfError(), True)
    result = EnsureMealimeSessionUseCase(session, csrf_retries=2, wait=wait_none()).execute()
    assert result.status == "READY"
    assert session.calls == 3


def test_csrf_retries_exhausted():
    session = ScriptedLogin(CsrfError(), CsrfError(), CsrfError())
    result = EnsureMealimeSessionUseCase(session, csrf_retries=1, wait=wait_none()).execute()
    assert result.error == "CsrfError"
    assert session.calls == 2


def test_retry_against_real_session_refetches_only_the_app_page():
    transport = FakeTransport(
        mealime_routes(
            {("GET", "/"): [response(200, "<html></html>"), response(200, '<meta name="csrf-token" content="t2">')]}
        )
    )
    session = make_session(transport)

    result = EnsureMealimeSessionUseCase(session, csrf_retries=1, wait=wait_none()).execute()

    assert result.status == "READY"
    assert session.csrf_token == "t2"
    assert transport.paths == [("GET", "/login"), ("POST", "/sessions"), ("GET", "/"), ("GET", "/")]

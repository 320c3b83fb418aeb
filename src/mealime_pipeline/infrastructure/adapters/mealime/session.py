from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from mealime_pipeline.application.dtos.submission_dto import SubmissionReport, SubmissionResult
from mealime_pipeline.application.ports.cookie_storage_port import CookieStoragePort
from mealime_pipeline.application.ports.environment_port import StorageProbePort
from mealime_pipeline.application.ports.http_client_port import Client, HttpRequest, TransportPort
from mealime_pipeline.application.ports.section_classifier_port import SectionClassifierPort
from mealime_pipeline.application.use_cases.submit_grocery_query import SubmitGroceryQueryUseCase
from mealime_pipeline.domain.entities.credentials import Credentials
from mealime_pipeline.domain.errors import MalformedResponse, SessionBusy, SessionNotReady, UpstreamRejected
from mealime_pipeline.domain.value_objects.sections import section_name
from mealime_pipeline.infrastructure.adapters.mealime.auth_flow import AuthState, MealimeAuthFlow, SessionState
from mealime_pipeline.infrastructure.adapters.mealime.endpoints import (
    GROCERY_ITEMS_PATH,
    MEAL_PLAN_PATH,
    MEALIME_BASE,
    xhr_headers,
)


class MealimeSession:
    """One logged-in Mealime browser session.

    Owns the credentials, the cached CSRF token and the current client chain.
    Call login() first; data operations on a session that is not Ready raise
    SessionNotReady. Operations never overlap: a call made while another one
    is running raises SessionBusy.
    """

    def __init__(
        self,
        email: str | None,
        password: str | None,
        *,
        transport: TransportPort,
        storage: CookieStoragePort,
        probe: StorageProbePort,
        classifier: SectionClassifierPort,
        base_url: str = MEALIME_BASE,
    ) -> None:
        credentials = Credentials(email or "", password or "")
        self.flow = MealimeAuthFlow(transport, storage, probe, base_url=base_url)
        self.state = SessionState(credentials=credentials, client=transport)
        self.classifier = classifier
        self.base_url = self.flow.base_url
        self._lock = threading.Lock()

    def _log(self, msg: str) -> None:
        print(f"[MealimeSession] {msg}")

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise SessionBusy()
        try:
            yield
        finally:
            self._lock.release()

    @property
    def ready(self) -> bool:
        return self.flow.state is AuthState.READY

    @property
    def csrf_token(self) -> str | None:
        return self.state.csrf_token

    def _client(self) -> Client:
        if not self.ready:
            raise SessionNotReady()
        return self.state.client

    # ---------- Auth ----------
    def login(self) -> bool:
        with self._exclusive():
            return self.flow.run(self.state)

    def reset(self) -> bool:
        with self._exclusive():
            return self.flow.reset(self.state)

    # ---------- Grocery list ----------
    def submit_query(self, query: str) -> SubmissionReport:
        """Adds each item of e.g. "milk, eggs and bread" in order."""
        with self._exclusive():
            return SubmitGroceryQueryUseCase(self._submit_item).execute(query)

    def submit_item(self, item: str) -> SubmissionResult:
        with self._exclusive():
            return self._submit_item(item)

    def _submit_item(self, item: str) -> SubmissionResult:
        client = self._client()
        section = self.classifier.category_of(item)
        self._log(f'adding item "{item}" to section "{section_name(section)}"')
        headers = xhr_headers(self.base_url)
        headers["content-type"] = "application/x-www-form-urlencoded; charset=UTF-8"
        try:
            resp = client(
                HttpRequest(
                    f"{self.base_url}{GROCERY_ITEMS_PATH}",
                    method="POST",
                    headers=headers,
                    data={
                        "grocery_list_item[is_complete]": "false",
                        "grocery_list_item[section_id]": str(section),
                        "grocery_list_item[quantity]": "",
                        "grocery_list_item[ingredient_name]": item,
                    },
                )
            )
        finally:
            self.flow.persist()
        if not resp.ok:
            self._log(f"{GROCERY_ITEMS_PATH} API call failed: ({resp.status_code}) {resp.text[:200]}")
            raise UpstreamRejected(GROCERY_ITEMS_PATH, resp.status_code, resp.text)
        return SubmissionResult.added(item, section)

    # ---------- Meal plan ----------
    def get_meal_plan(self) -> Any:
        with self._exclusive():
            client = self._client()
            self._log("fetching meal plan")
            try:
                resp = client(
                    HttpRequest(
                        f"{self.base_url}{MEAL_PLAN_PATH}",
                        headers=xhr_headers(self.base_url, accept="application/json, text/javascript, */*; q=0.01"),
                    )
                )
            finally:
                self.flow.persist()
            if not resp.ok:
                self._log(f"{MEAL_PLAN_PATH} API call failed: ({resp.status_code}) {resp.text[:200]}")
                raise UpstreamRejected(MEAL_PLAN_PATH, resp.status_code, resp.text)
            try:
                return resp.json()
            except ValueError as e:
                raise MalformedResponse(f"{MEAL_PLAN_PATH} did not return JSON: {e}") from e

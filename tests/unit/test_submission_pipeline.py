from urllib.parse import urlsplit

import pytest

from mealime_pipeline.application.dtos.submission_dto import SubmissionReport, SubmissionResult
from mealime_pipeline.application.use_cases.submit_grocery_query import SubmitGroceryQueryUseCase
from mealime_pipeline.domain.errors import SessionBusy, UpstreamRejected
from mealime_pipeline.domain.value_objects.category_id import CategoryId
from mealime_pipeline.infrastructure.adapters.storage.memory_store import InMemoryCookieStorage
from tests.unit._fakes_mealime import (
    FakeTransport,
    FixedClassifier,
    make_session,
    mealime_routes,
    response,
)

GROCERY = ("POST", "/api/grocery_list_items")


def _reject_on(name: str, status: int = 422):
    def handler(request):
        if request.data["grocery_list_item[ingredient_name]"] == name:
            return response(status, '{"error":"nope"}')
        return response(200, "{}")

    return handler


def _ready_session(routes=None, **kwargs):
    transport = FakeTransport(mealime_routes(routes))
    session = make_session(transport, **kwargs)
    session.login()
    transport.requests.clear()
    return session, transport


def test_use_case_submits_in_order_and_builds_report():
    seen = []

    def submit(item):
        seen.append(item)
        return SubmissionResult.added(item, CategoryId(1))

    report = SubmitGroceryQueryUseCase(submit).execute("milk, eggs and bread")

    assert seen == ["milk", "eggs", "bread"]
    assert report.text == "milk added!\neggs added!\nbread added!"
    assert report.items == ["milk", "eggs", "bread"]


def test_use_case_stops_at_first_rejection_with_partial_report():
    seen = []

    def submit(item):
        seen.append(item)
        if item == "eggs":
            raise UpstreamRejected("/api/grocery_list_items", 500, "boom")
        return SubmissionResult.added(item, CategoryId(1))

    with pytest.raises(UpstreamRejected) as exc:
        SubmitGroceryQueryUseCase(submit).execute("milk & eggs & bread")

    assert seen == ["milk", "eggs"]
    assert exc.value.report.text == "milk added!"


def test_empty_report_text():
    assert SubmissionReport().text == ""


def test_query_items_are_posted_one_by_one_with_section():
    classifier = FixedClassifier(section=3)
    session, transport = _ready_session(classifier=classifier)

    report = session.submit_query("milk, eggs and bread")

    assert report.text == "milk added!\neggs added!\nbread added!"
    assert classifier.seen == ["milk", "eggs", "bread"]
    posts = [r for r in transport.requests if (r.method, urlsplit(r.url).path) == GROCERY]
    assert [p.data["grocery_list_item[ingredient_name]"] for p in posts] == ["milk", "eggs", "bread"]
    assert all(p.data["grocery_list_item[section_id]"] == "3" for p in posts)
    assert all(p.data["grocery_list_item[is_complete]"] == "false" for p in posts)
    assert all(p.data["grocery_list_item[quantity]"] == "" for p in posts)


def test_rejected_item_aborts_remaining_items():
    session, transport = _ready_session({GROCERY: _reject_on("eggs")})

    with pytest.raises(UpstreamRejected) as exc:
        session.submit_query("milk, eggs and bread")

    assert exc.value.status_code == 422
    assert exc.value.report.items == ["milk"]
    assert "/api/grocery_list_items API call failed: (422)" in str(exc.value)
    assert transport.calls(*GROCERY) == 2


def test_single_item_result():
    session, _ = _ready_session(classifier=FixedClassifier(section=8))
    result = session.submit_item("coffee")
    assert result == SubmissionResult("coffee", CategoryId(8), True, "coffee added!")


def test_any_2xx_is_success():
    session, _ = _ready_session({GROCERY: response(201, "{}")})
    assert session.submit_item("tofu").success


def test_jar_is_saved_after_every_item():
    storage = InMemoryCookieStorage()
    session, _ = _ready_session(storage=storage)
    before = storage.writes

    session.submit_query("milk and eggs")

    assert storage.writes == before + 2


def test_jar_is_saved_even_when_item_is_rejected():
    storage = InMemoryCookieStorage()
    session, _ = _ready_session({GROCERY: response(500, "down")}, storage=storage)
    before = storage.writes

    with pytest.raises(UpstreamRejected):
        session.submit_item("milk")
    assert storage.writes == before + 1


def test_overlapping_operation_is_refused():
    session, transport = _ready_session()
    session._lock.acquire()
    try:
        with pytest.raises(SessionBusy):
            session.submit_query("milk")
        with pytest.raises(SessionBusy):
            session.login()
    finally:
        session._lock.release()
    assert transport.requests == []
    assert session.submit_item("milk").success

import json

import pytest
from typer.testing import CliRunner

from mealime_pipeline.infrastructure.adapters.storage.memory_store import InMemoryCookieStorage
from mealime_pipeline.presentation.cli import main as cli
from tests.unit._fakes_mealime import AUTH_COOKIE, FakeTransport, make_session, mealime_routes, response, stored_jar

runner = CliRunner()


@pytest.fixture
def transport(monkeypatch):
    transport = FakeTransport(mealime_routes())
    storage = InMemoryCookieStorage()
    monkeypatch.setattr(cli, "build_session", lambda: make_session(transport, storage))
    return transport


def test_login_command(transport):
    result = runner.invoke(cli.app, ["login"])
    assert result.exit_code == 0
    assert "READY" in result.output


def test_login_command_failure_exits_1(transport):
    transport.routes[("GET", "/login")] = response(200, "<html></html>")
    result = runner.invoke(cli.app, ["login"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_add_prints_report(transport):
    result = runner.invoke(cli.app, ["add", "milk, eggs and bread"])
    assert result.exit_code == 0
    assert "milk added!\neggs added!\nbread added!" in result.output


def test_add_item(transport):
    result = runner.invoke(cli.app, ["add-item", "coffee"])
    assert result.exit_code == 0
    assert "coffee added!" in result.output


def test_add_stops_on_rejection(transport):
    transport.routes[("POST", "/api/grocery_list_items")] = [response(200, "{}"), response(500, "boom")]
    result = runner.invoke(cli.app, ["add", "milk and eggs and bread"])
    assert result.exit_code == 1
    assert "milk added!" in result.output
    assert "bread" not in result.output


def test_meal_plan_prints_json(transport):
    result = runner.invoke(cli.app, ["meal-plan"])
    assert result.exit_code == 0
    assert json.dumps({"recipes": [{"id": 7, "name": "Tofu bowl"}]}, indent=2) in result.output


def test_reset_logs_in_from_scratch(monkeypatch):
    transport = FakeTransport(mealime_routes())
    storage = InMemoryCookieStorage(stored_jar(AUTH_COOKIE))
    monkeypatch.setattr(cli, "build_session", lambda: make_session(transport, storage))

    result = runner.invoke(cli.app, ["reset"])

    assert result.exit_code == 0
    assert transport.calls("POST", "/sessions") == 1

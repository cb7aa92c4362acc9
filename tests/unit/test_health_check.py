import json
from unittest.mock import MagicMock

from handlers import dependencies, health_check
from utils.error_handling import StoreUnavailableError


def test_health_check_returns_ok(monkeypatch):
    store = MagicMock()
    monkeypatch.setattr(dependencies, "get_store", lambda: store)

    resp = health_check.lambda_handler({}, None)

    assert resp["statusCode"] == 200
    body = json.loads(resp["body"])
    assert body["status"] == "ok"
    assert body["store"] == "ok"
    store.ping.assert_called_once()


def test_health_check_reports_store_outage(monkeypatch):
    store = MagicMock()
    store.ping.side_effect = StoreUnavailableError("describe tables failed")
    monkeypatch.setattr(dependencies, "get_store", lambda: store)

    resp = health_check.lambda_handler({}, None)

    assert resp["statusCode"] == 503
    assert json.loads(resp["body"])["store"] == "unavailable"

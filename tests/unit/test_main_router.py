import json

import pytest

from handlers import main


def test_main_routes_health(monkeypatch):
    monkeypatch.setattr(main.health_check, "lambda_handler", lambda e, c: {"status": "ok"})
    event = {"requestContext": {"http": {"method": "GET", "path": "/health"}}}
    resp = main.lambda_handler(event, None)
    assert resp["status"] == "ok"


def test_main_routes_apply(monkeypatch):
    marker = {}

    def fake_handler(event, context):
        marker["called"] = True
        return {"statusCode": 200}

    monkeypatch.setattr(main.apply, "lambda_handler", fake_handler)
    event = {"requestContext": {"http": {"method": "POST", "path": "/apply"}}}
    resp = main.lambda_handler(event, None)
    assert resp["statusCode"] == 200
    assert marker["called"] is True


@pytest.mark.parametrize(
    "path, attr",
    [
        ("/verify/9000000001", "verify_handler"),
        ("/applicant/3f2a9c1e5b7d4e8fa1c2d3e4f5a6b7c8", "record_handler"),
        ("/getApplicant/TSRTC-48213907", "pass_handler"),
    ],
)
def test_main_routes_lookups(monkeypatch, path, attr):
    monkeypatch.setattr(main.applicant_lookup, attr, lambda e, c: {"handler": attr})
    event = {"requestContext": {"http": {"method": "GET", "path": path}}}
    assert main.lambda_handler(event, None) == {"handler": attr}


def test_main_routes_booking(monkeypatch):
    monkeypatch.setattr(main.booking, "lambda_handler", lambda e, c: {"booked": True})
    event = {"requestContext": {"http": {"method": "POST", "path": "/bookTicket"}}}
    assert main.lambda_handler(event, None)["booked"] is True


def test_main_routes_ticket_listing(monkeypatch):
    monkeypatch.setattr(main.booking, "list_handler", lambda e, c: {"listed": True})
    event = {"requestContext": {"http": {"method": "GET", "path": "/tickets/applicant/abc"}}}
    assert main.lambda_handler(event, None)["listed"] is True


def test_main_method_must_match():
    event = {"requestContext": {"http": {"method": "GET", "path": "/bookTicket"}}}
    assert main.lambda_handler(event, None)["statusCode"] == 404


def test_main_unknown_route():
    event = {"requestContext": {"http": {"method": "GET", "path": "/unknown"}}}
    resp = main.lambda_handler(event, None)
    assert resp["statusCode"] == 404
    body = json.loads(resp["body"])
    assert body["message"] == "Route not found"

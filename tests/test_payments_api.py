"""
API tests for payments. Stripe is never called: checkout creation is patched, and webhook
payloads are signed locally the way Stripe signs them (t=<ts>,v1=HMAC-SHA256(secret, "<ts>.<body>")).
"""
import asyncio
import hashlib
import hmac
import json
import time
import uuid
from types import SimpleNamespace

import pytest
import stripe

from quizora.services.payments import StripeGateway, get_payment_gateway

WEBHOOK_SECRET = "whsec_test_secret"


def _gateway(secret_key: str = "sk_test_123") -> StripeGateway:
    return StripeGateway(
        secret_key=secret_key,
        webhook_secret=WEBHOOK_SECRET,
        client_url="http://localhost:3000",
        amount_cents=1000,
        currency="usd",
        product_name="Quiz access",
    )


def _sign(payload: bytes, secret: str = WEBHOOK_SECRET) -> str:
    ts = int(time.time())
    mac = hmac.new(secret.encode(), f"{ts}.{payload.decode()}".encode(), hashlib.sha256).hexdigest()
    return f"t={ts},v1={mac}"


def _event(event_type: str, user_id, quiz_id) -> bytes:
    body = {
        "id": f"evt_{uuid.uuid4().hex[:12]}",
        "object": "event",
        "type": event_type,
        "data": {
            "object": {
                "id": "cs_test_1",
                "object": "checkout.session",
                "client_reference_id": str(user_id),
                "metadata": {"userId": str(user_id), "quizId": str(quiz_id)},
            }
        },
    }
    return json.dumps(body).encode()


def _post_webhook(client, payload: bytes, signature: str | None):
    headers = {"Content-Type": "application/json"}
    if signature is not None:
        headers["Stripe-Signature"] = signature
    return client.post("/api/payments/webhook", content=payload, headers=headers)


@pytest.fixture
def gateway_client(client):
    client.app.dependency_overrides[get_payment_gateway] = _gateway
    return client


def test_checkout_requires_quiz_id(gateway_client, user_headers):
    r = gateway_client.post("/api/payments/create-checkout-session", json={}, headers=user_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "quizId is required"


def test_checkout_unknown_quiz(gateway_client, user_headers):
    r = gateway_client.post(
        "/api/payments/create-checkout-session", json={"quizId": str(uuid.uuid4())}, headers=user_headers
    )
    assert r.status_code == 404


def test_checkout_requires_auth(gateway_client, quiz):
    r = gateway_client.post("/api/payments/create-checkout-session", json={"quizId": quiz["id"]})
    assert r.status_code == 401


def test_checkout_creates_session_with_metadata(gateway_client, quiz, user, user_headers, monkeypatch):
    captured = {}

    def fake_create(**params):
        captured.update(params)
        return SimpleNamespace(id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    r = gateway_client.post(
        "/api/payments/create-checkout-session", json={"quizId": quiz["id"]}, headers=user_headers
    )
    assert r.status_code == 200, r.text
    assert r.json() == {"id": "cs_test_1", "url": "https://checkout.stripe.com/c/pay/cs_test_1"}
    assert captured["metadata"] == {"userId": str(user.id), "quizId": quiz["id"]}
    assert captured["api_key"] == "sk_test_123"
    assert captured["mode"] == "payment"
    assert captured["line_items"][0]["price_data"]["unit_amount"] == 1000
    assert captured["success_url"].startswith("http://localhost:3000/payment-success")


def test_checkout_stripe_failure_is_500(gateway_client, quiz, user_headers, monkeypatch):
    def failing_create(**params):
        raise stripe.APIConnectionError("network down")

    monkeypatch.setattr(stripe.checkout.Session, "create", failing_create)
    r = gateway_client.post(
        "/api/payments/create-checkout-session", json={"quizId": quiz["id"]}, headers=user_headers
    )
    assert r.status_code == 500
    assert r.json()["message"] == "Payment service is currently unavailable"


def test_checkout_without_stripe_key_is_500(client, quiz, user_headers):
    client.app.dependency_overrides[get_payment_gateway] = lambda: _gateway(secret_key="")
    r = client.post("/api/payments/create-checkout-session", json={"quizId": quiz["id"]}, headers=user_headers)
    assert r.status_code == 500


def test_webhook_completed_grants_access_once(gateway_client, quiz, user, user_headers):
    payload = _event("checkout.session.completed", user.id, quiz["id"])
    for _ in range(2):
        r = _post_webhook(gateway_client, payload, _sign(payload))
        assert r.status_code == 200, r.text
        assert r.json() == {"received": True}
    status = gateway_client.get("/api/payments/status", params={"quizId": quiz["id"]}, headers=user_headers).json()
    assert status["paid"] is True
    assert status["purchasedQuizzes"] == [quiz["id"]]


def test_webhook_invalid_signature_rejected(gateway_client, quiz, user, user_headers):
    payload = _event("checkout.session.completed", user.id, quiz["id"])
    r = _post_webhook(gateway_client, payload, _sign(payload, secret="whsec_wrong"))
    assert r.status_code == 400
    assert r.json()["message"].startswith("Webhook Error")
    status = gateway_client.get("/api/payments/status", headers=user_headers).json()
    assert status == {"paid": False, "purchasedQuizzes": []}


def test_webhook_tampered_body_rejected(gateway_client, quiz, user, user_headers):
    payload = _event("checkout.session.completed", user.id, quiz["id"])
    signature = _sign(payload)
    tampered = payload.replace(b"checkout.session", b"checkout.sessionX", 1)
    assert _post_webhook(gateway_client, tampered, signature).status_code == 400


def test_webhook_missing_signature_rejected(gateway_client, quiz, user):
    payload = _event("checkout.session.completed", user.id, quiz["id"])
    assert _post_webhook(gateway_client, payload, None).status_code == 400


def test_webhook_other_events_acknowledged(gateway_client, quiz, user, user_headers):
    payload = _event("payment_intent.created", user.id, quiz["id"])
    r = _post_webhook(gateway_client, payload, _sign(payload))
    assert r.status_code == 200
    assert gateway_client.get("/api/payments/status", headers=user_headers).json()["paid"] is False


def test_webhook_processing_failure_still_acknowledged(gateway_client, quiz):
    payload = _event("checkout.session.completed", uuid.uuid4(), quiz["id"])
    r = _post_webhook(gateway_client, payload, _sign(payload))
    assert r.status_code == 200
    assert r.json() == {"received": True}


def test_status_without_purchases(gateway_client, user_headers, quiz):
    r = gateway_client.get("/api/payments/status", params={"quizId": quiz["id"]}, headers=user_headers)
    assert r.json() == {"paid": False, "purchasedQuizzes": []}


def test_checkout_refused_when_quiz_already_purchased(gateway_client, quiz, user, user_headers, monkeypatch):
    payload = _event("checkout.session.completed", user.id, quiz["id"])
    assert _post_webhook(gateway_client, payload, _sign(payload)).status_code == 200
    calls = []
    monkeypatch.setattr(stripe.checkout.Session, "create", lambda **params: calls.append(params))
    r = gateway_client.post(
        "/api/payments/create-checkout-session", json={"quizId": quiz["id"]}, headers=user_headers
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Quiz already purchased"
    assert calls == []


def test_webhook_event_handled_off_the_event_loop_as_plain_dict(gateway_client, quiz, user, monkeypatch):
    from quizora.api import payments as payments_api

    seen = {}

    def recording_handler(db, event):
        try:
            asyncio.get_running_loop()
            seen["on_loop"] = True
        except RuntimeError:
            seen["on_loop"] = False
        seen["event"] = event

    monkeypatch.setattr(payments_api, "handle_webhook_event", recording_handler)
    payload = _event("checkout.session.completed", user.id, quiz["id"])
    assert _post_webhook(gateway_client, payload, _sign(payload)).status_code == 200
    assert seen["on_loop"] is False
    event = seen["event"]
    assert type(event) is dict
    assert type(event["data"]["object"]["metadata"]) is dict
    assert event["data"]["object"]["metadata"]["quizId"] == quiz["id"]

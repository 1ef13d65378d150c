"""Payment signatures and subscription webhook events."""

import hashlib
import hmac
import json

import pytest

from petra import storage
from petra.payments import (
    PaymentVerificationError,
    WebhookSignatureError,
    apply_webhook_event,
    verify_payment_signature,
    verify_webhook_signature,
)

SECRET = "test_secret"


def _sign(body: bytes, secret: str = SECRET) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def test_payment_signature_valid():
    sig = _sign(b"order_1|pay_1")
    assert verify_payment_signature("order_1", "pay_1", sig, SECRET) is True


def test_payment_signature_wrong():
    sig = _sign(b"order_1|pay_2")
    assert verify_payment_signature("order_1", "pay_1", sig, SECRET) is False


def test_payment_signature_reads_env_secret(monkeypatch):
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", SECRET)
    assert verify_payment_signature("order_1", "pay_1", _sign(b"order_1|pay_1"))


def test_payment_signature_missing_secret(monkeypatch):
    monkeypatch.delenv("RAZORPAY_KEY_SECRET", raising=False)
    with pytest.raises(PaymentVerificationError):
        verify_payment_signature("order_1", "pay_1", "abc")


def test_payment_signature_missing_fields():
    with pytest.raises(PaymentVerificationError):
        verify_payment_signature("order_1", "", "abc", SECRET)


def test_webhook_signature_over_raw_body():
    body = b'{"event": "subscription.activated"}'
    verify_webhook_signature(body, _sign(body), SECRET)
    with pytest.raises(WebhookSignatureError, match="Invalid signature"):
        verify_webhook_signature(body + b" ", _sign(body), SECRET)


def test_payment_signature_not_a_string():
    with pytest.raises(PaymentVerificationError, match="signature must be a string"):
        verify_payment_signature("order_1", "pay_1", 123, SECRET)


def test_payment_signature_non_ascii_is_just_wrong():
    assert verify_payment_signature("order_1", "pay_1", "caf\u00e9", SECRET) is False


def test_webhook_signature_non_ascii_or_not_a_string():
    body = b"{}"
    with pytest.raises(WebhookSignatureError, match="Invalid signature"):
        verify_webhook_signature(body, "caf\u00e9", SECRET)
    with pytest.raises(WebhookSignatureError, match="Invalid signature"):
        verify_webhook_signature(body, 42, SECRET)


def test_webhook_signature_missing(monkeypatch):
    monkeypatch.delenv("RAZORPAY_WEBHOOK_SECRET", raising=False)
    with pytest.raises(WebhookSignatureError, match="Missing signature or secret"):
        verify_webhook_signature(b"{}", "sig")
    with pytest.raises(WebhookSignatureError):
        verify_webhook_signature(b"{}", "", SECRET)


@pytest.fixture
def subscription(data_dir):
    return storage.save_subscription({
        "user_id": "user-1",
        "plan_id": "basic",
        "gateway_subscription_id": "sub_123",
        "status": "created",
    })


def _sub_event(name, **entity):
    return {"event": name, "payload": {"subscription": {"entity": {"id": "sub_123", **entity}}}}


def _payment_event(name):
    return {
        "event": name,
        "payload": {
            "payment": {
                "entity": {
                    "id": "pay_9",
                    "order_id": "order_9",
                    "subscription_id": "sub_123",
                    "amount": 19900,
                    "currency": "INR",
                    "method": "upi",
                }
            }
        },
    }


def _stored(sub_id):
    return next(s for s in storage.load_subscriptions() if s["id"] == sub_id)


def test_activated_sets_active_and_period(subscription):
    outcome = apply_webhook_event(_sub_event("subscription.activated", current_start=1700000000, current_end=1702592000))
    assert outcome == "handled"
    row = _stored(subscription["id"])
    assert row["status"] == "active"
    assert row["current_period_start"].startswith("2023-11-14T22:13:20")
    assert row["current_period_end"].startswith("2023-12-14")
    assert storage.active_subscription("user-1")["plan"]["id"] == "basic"


@pytest.mark.parametrize(
    "event,status",
    [
        ("subscription.cancelled", "cancelled"),
        ("subscription.paused", "paused"),
        ("subscription.resumed", "active"),
        ("subscription.charged", "active"),
    ],
)
def test_subscription_status_transitions(subscription, event, status):
    apply_webhook_event(_sub_event(event))
    assert _stored(subscription["id"])["status"] == status


def test_payment_captured_records_succeeded_payment(subscription):
    apply_webhook_event(_payment_event("payment.captured"))
    payments = storage.load_payments()
    assert len(payments) == 1
    assert payments[0]["status"] == "succeeded"
    assert payments[0]["user_id"] == "user-1"
    assert payments[0]["amount"] == 19900
    assert _stored(subscription["id"])["status"] == "created"


def test_payment_failed_marks_past_due(subscription):
    apply_webhook_event(_payment_event("payment.failed"))
    assert storage.load_payments()[0]["status"] == "failed"
    assert _stored(subscription["id"])["status"] == "past_due"


def test_unknown_subscription_is_ignored_quietly(data_dir):
    assert apply_webhook_event(_sub_event("subscription.cancelled")) == "handled"
    assert storage.load_subscriptions() == []


def test_unhandled_event_is_ignored(subscription):
    assert apply_webhook_event({"event": "invoice.paid", "payload": {}}) == "ignored"
    assert _stored(subscription["id"])["status"] == "created"


def test_signed_event_roundtrip(subscription):
    """What the gateway sends: sign the serialized body, verify, then apply."""
    body = json.dumps(_sub_event("subscription.paused")).encode()
    verify_webhook_signature(body, _sign(body), SECRET)
    apply_webhook_event(json.loads(body))
    assert _stored(subscription["id"])["status"] == "paused"

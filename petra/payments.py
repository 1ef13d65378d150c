"""Payment signature checks and subscription webhook handling (Razorpay)."""

import hashlib
import hmac
import logging
import os
from datetime import datetime, timezone

from petra import storage

log = logging.getLogger("petra.payments")


class PaymentVerificationError(ValueError):
    """Checkout payment signature missing or wrong."""


class WebhookSignatureError(ValueError):
    """Webhook body signature missing or wrong."""


def _hmac_hex(secret: str, body: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def _digest_matches(expected: str, signature: str) -> bool:
    # compare_digest rejects non-ASCII str, bytes take anything
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: str | None = None) -> bool:
    """
    Check a checkout signature: HMAC-SHA256 of "order_id|payment_id" with the key secret.
    Returns True when authentic. Raises PaymentVerificationError if the secret or a field is missing
    or the signature is not a string.
    """
    secret = secret or os.environ.get("RAZORPAY_KEY_SECRET", "")
    if not secret:
        raise PaymentVerificationError("RAZORPAY_KEY_SECRET is not set")
    if not (order_id and payment_id and signature):
        raise PaymentVerificationError("order_id, payment_id and signature are required")
    if not isinstance(signature, str):
        raise PaymentVerificationError("signature must be a string")
    expected = _hmac_hex(secret, f"{order_id}|{payment_id}".encode("utf-8"))
    return _digest_matches(expected, signature)


def verify_webhook_signature(raw_body: bytes, signature: str, secret: str | None = None) -> None:
    """Raise WebhookSignatureError unless signature is the HMAC-SHA256 of the raw request body."""
    secret = secret or os.environ.get("RAZORPAY_WEBHOOK_SECRET", "")
    if not signature or not secret:
        raise WebhookSignatureError("Missing signature or secret")
    if not isinstance(signature, str) or not _digest_matches(_hmac_hex(secret, raw_body), signature):
        raise WebhookSignatureError("Invalid signature")


def _iso_from_epoch(value) -> str | None:
    if not value:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc).isoformat()


def _subscription_entity(event: dict) -> dict:
    return ((event.get("payload") or {}).get("subscription") or {}).get("entity") or {}


def _payment_entity(event: dict) -> dict:
    return ((event.get("payload") or {}).get("payment") or {}).get("entity") or {}


def _set_status(entity: dict, status: str, **fields) -> dict | None:
    sub = storage.find_subscription(entity.get("id", ""))
    if not sub:
        log.warning("Webhook for unknown subscription %s", entity.get("id"))
        return None
    return storage.update_subscription(sub["id"], status=status, **fields)


def _record_payment(entity: dict, status: str) -> dict | None:
    sub = storage.find_subscription(entity.get("subscription_id", ""))
    if not sub:
        log.warning("Payment %s is not linked to a known subscription", entity.get("id"))
        return None
    storage.record_payment({
        "user_id": sub.get("user_id"),
        "subscription_id": sub["id"],
        "gateway_payment_id": entity.get("id"),
        "gateway_order_id": entity.get("order_id"),
        "amount": entity.get("amount"),
        "currency": entity.get("currency"),
        "status": status,
        "payment_method": entity.get("method"),
    })
    return sub


def apply_webhook_event(event: dict) -> str:
    """
    Apply a verified gateway event to stored subscriptions and payments.
    Returns "handled" or "ignored".
    """
    name = event.get("event")

    if name in ("subscription.activated", "subscription.charged"):
        entity = _subscription_entity(event)
        _set_status(
            entity,
            "active",
            current_period_start=_iso_from_epoch(entity.get("current_start")),
            current_period_end=_iso_from_epoch(entity.get("current_end")),
        )
    elif name == "subscription.cancelled":
        _set_status(_subscription_entity(event), "cancelled")
    elif name == "subscription.paused":
        _set_status(_subscription_entity(event), "paused")
    elif name == "subscription.resumed":
        _set_status(_subscription_entity(event), "active")
    elif name == "payment.captured":
        _record_payment(_payment_entity(event), "succeeded")
    elif name == "payment.failed":
        sub = _record_payment(_payment_entity(event), "failed")
        if sub:
            storage.update_subscription(sub["id"], status="past_due")
    else:
        log.info("Unhandled webhook event: %s", name)
        return "ignored"

    log.info("Webhook event applied: %s", name)
    return "handled"

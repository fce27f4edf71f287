import hashlib
import hmac
import json
import time

WEBHOOK_SECRET = "whsec_test_monument"


def sign_payload(
    payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None
) -> str:
    """Build a Stripe-Signature header for the given body."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed_payload = f"{timestamp}.".encode() + payload
    signature = hmac.new(secret.encode(), signed_payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def make_session_event(
    session_id: str = "sess_123",
    metadata: dict | None = None,
    event_type: str = "checkout.session.completed",
    payment_status: str | None = "paid",
) -> dict:
    """Build a checkout session webhook event."""
    if metadata is None:
        metadata = {
            "dream_title": "See the ocean",
            "dream_description": "Hear the waves for the first time.",
            "dream_author": "Ana",
            "dream_country": "Brazil",
            "dream_language": "",
        }

    session = {
        "id": session_id,
        "object": "checkout.session",
        "mode": "payment",
        "amount_total": 100,
        "currency": "usd",
        "metadata": metadata,
    }
    if payment_status is not None:
        session["payment_status"] = payment_status

    return {
        "id": f"evt_{session_id}",
        "object": "event",
        "type": event_type,
        "created": int(time.time()),
        "livemode": False,
        "data": {"object": session},
    }


def encode_event(event: dict) -> bytes:
    return json.dumps(event).encode()

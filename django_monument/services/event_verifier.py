import json
import logging
import time

import stripe
from django.core.exceptions import ImproperlyConfigured

from django_monument.exceptions import (
    MalformedEvent,
    SignatureInvalid,
    TimestampExpired,
)
from django_monument.payloads import StripeEvent

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 300


class EventVerifier:
    """
    Verifies Stripe webhook signatures and turns the body into a StripeEvent.

    The payload must be the raw request body exactly as received. Decoding
    it as JSON and re-serialising it before verification changes the bytes
    and breaks the signature.
    """

    def __init__(self, secret: str | None, tolerance: int = DEFAULT_TOLERANCE):
        if not secret:
            raise ImproperlyConfigured(
                "DJANGO_MONUMENT_STRIPE_WEBHOOK_SECRET must be set in Django settings"
            )
        self.secret = secret
        self.tolerance = tolerance

    @classmethod
    def from_config(cls, config) -> "EventVerifier":
        return cls(config.stripe_webhook_secret, config.webhook_tolerance)

    @staticmethod
    def _parse_timestamp(sig_header: str) -> int:
        for item in sig_header.split(","):
            key, _, value = item.strip().partition("=")
            if key == "t":
                try:
                    return int(value)
                except ValueError:
                    break
        raise SignatureInvalid("Unable to extract timestamp from header")

    def verify(
        self, payload: bytes, sig_header: str | None, now: float | None = None
    ) -> StripeEvent:
        """
        Verify a webhook delivery.

        Args:
            payload: Raw request body
            sig_header: Value of the Stripe-Signature header
            now: Current unix time (defaults to time.time())

        Returns:
            The verified StripeEvent

        Raises:
            SignatureInvalid: Missing header, wrong secret or altered body
            TimestampExpired: Signed timestamp older than the tolerance
            MalformedEvent: Signed body is not a Stripe event
        """
        if not sig_header:
            raise SignatureInvalid("Missing Stripe-Signature header")

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SignatureInvalid("Payload is not valid UTF-8") from e

        # Timestamp is checked separately so a stale event is told apart
        # from a forged one
        try:
            stripe.WebhookSignature.verify_header(
                body, sig_header, self.secret, tolerance=None
            )
        except stripe.SignatureVerificationError as e:
            raise SignatureInvalid(str(e)) from e

        timestamp = self._parse_timestamp(sig_header)
        current = time.time() if now is None else now
        if timestamp < current - self.tolerance:
            raise TimestampExpired(
                f"Timestamp {timestamp} is older than {self.tolerance} seconds"
            )

        try:
            data = json.loads(body)
            if not isinstance(data, dict):
                raise TypeError("event must be an object")
            event = StripeEvent.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedEvent(f"Invalid event payload: {e}") from e

        logger.debug("[django-monument] Verified event %s (%s)", event.id, event.type)
        return event

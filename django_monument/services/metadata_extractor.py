import logging
from typing import Any

from django_monument.constants import (
    ACTIONABLE_EVENT_TYPES,
    METADATA_AUTHOR,
    METADATA_COUNTRY,
    METADATA_DESCRIPTION,
    METADATA_LANGUAGE,
    METADATA_TITLE,
    PaymentStatus,
)
from django_monument.exceptions import MalformedMetadata
from django_monument.payloads import DreamMetadata, StripeEvent

logger = logging.getLogger(__name__)

SETTLED_PAYMENT_STATUSES = (
    PaymentStatus.paid.value,
    PaymentStatus.no_payment_required.value,
)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class MetadataExtractor:
    """Reads the dream carried in a Checkout session's metadata."""

    @staticmethod
    def is_actionable(event: StripeEvent) -> bool:
        if event.type not in ACTIONABLE_EVENT_TYPES:
            return False

        # Beyond checkout.session.completed: delayed payment methods complete
        # the session before the money settles and arrive again as
        # async_payment_succeeded. Card sessions are always "paid" here.
        payment_status = event.data_object.get("payment_status")
        return not payment_status or payment_status in SETTLED_PAYMENT_STATUSES

    @staticmethod
    def session_id(event: StripeEvent) -> str:
        session_id = _clean(event.data_object.get("id"))
        if not session_id:
            raise MalformedMetadata(f"Event {event.id} has no session id")
        return session_id

    @classmethod
    def extract(cls, event: StripeEvent) -> DreamMetadata | None:
        """
        Returns:
            DreamMetadata for actionable events, None for events to ignore

        Raises:
            MalformedMetadata: Actionable event without a dream title
        """
        if not cls.is_actionable(event):
            return None

        metadata = event.data_object.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise MalformedMetadata(f"Event {event.id} metadata is not an object")

        title = _clean(metadata.get(METADATA_TITLE))
        if not title:
            raise MalformedMetadata(f"Event {event.id} has no {METADATA_TITLE}")

        return DreamMetadata(
            title=title,
            description=_clean(metadata.get(METADATA_DESCRIPTION)),
            author=_clean(metadata.get(METADATA_AUTHOR)),
            country=_clean(metadata.get(METADATA_COUNTRY)),
            language=_clean(metadata.get(METADATA_LANGUAGE)) or None,
        )

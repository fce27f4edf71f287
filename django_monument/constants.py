from enum import Enum

CHECKOUT_SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"

# Stripe caps metadata values at 500 characters
METADATA_VALUE_MAX_LENGTH = 500

METADATA_TITLE = "dream_title"
METADATA_DESCRIPTION = "dream_description"
METADATA_AUTHOR = "dream_author"
METADATA_COUNTRY = "dream_country"
METADATA_LANGUAGE = "dream_language"

REQUIRED_DREAM_FIELDS = ("title", "description", "author", "country")

# Every value has to survive the metadata round trip and fit its column
TITLE_MAX_LENGTH = 255
AUTHOR_MAX_LENGTH = 255
COUNTRY_MAX_LENGTH = 128
LANGUAGE_MAX_LENGTH = 64

DREAM_FIELD_MAX_LENGTHS = {
    "title": TITLE_MAX_LENGTH,
    "description": METADATA_VALUE_MAX_LENGTH,
    "author": AUTHOR_MAX_LENGTH,
    "country": COUNTRY_MAX_LENGTH,
    "language": LANGUAGE_MAX_LENGTH,
}

RECENT_DREAMS_DEFAULT_LIMIT = 3
RECENT_DREAMS_MAX_LIMIT = 50

SIGNATURE_HEADER = "Stripe-Signature"


class EventType(Enum):
    checkout_session_completed = "checkout.session.completed"
    checkout_session_async_payment_succeeded = (
        "checkout.session.async_payment_succeeded"
    )


ACTIONABLE_EVENT_TYPES = frozenset(e.value for e in EventType)


class PaymentStatus(Enum):
    paid = "paid"
    no_payment_required = "no_payment_required"

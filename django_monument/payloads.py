"""
Typed records exchanged between the webhook, the services and the stores.

Stripe delivers loosely shaped JSON; everything past the verifier works on
these records instead of raw dicts.
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from django_monument.constants import (
    METADATA_AUTHOR,
    METADATA_COUNTRY,
    METADATA_DESCRIPTION,
    METADATA_LANGUAGE,
    METADATA_TITLE,
)


@dataclass(frozen=True)
class StripeEvent:
    id: str
    type: str
    created: int | None
    livemode: bool
    data_object: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StripeEvent":
        """
        Build an event from a decoded webhook body.

        Raises:
            KeyError, TypeError: If the body is not shaped like a Stripe event
        """
        data_object = data["data"]["object"]
        if not isinstance(data_object, dict):
            raise TypeError("data.object must be an object")

        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            created=data.get("created"),
            livemode=bool(data.get("livemode", False)),
            data_object=data_object,
        )


@dataclass(frozen=True)
class DreamMetadata:
    title: str
    description: str = ""
    author: str = ""
    country: str = ""
    language: str | None = None


@dataclass(frozen=True)
class DreamDraft:
    """Form input that has not been paid for (and is never stored)."""

    title: str
    description: str
    author: str
    country: str
    language: str | None = None

    def to_metadata(self) -> dict[str, str]:
        return {
            METADATA_TITLE: self.title,
            METADATA_DESCRIPTION: self.description,
            METADATA_AUTHOR: self.author,
            METADATA_COUNTRY: self.country,
            METADATA_LANGUAGE: self.language or "",
        }


@dataclass(frozen=True)
class CheckoutSessionResult:
    session_id: str
    url: str


@dataclass(frozen=True)
class DreamRecord:
    id: Any
    title: str
    description: str
    author: str
    country: str
    language: str | None
    likes: int
    views: int
    paid: bool
    stripe_session_id: str
    created_at: datetime | str | None

    def as_json(self) -> dict[str, Any]:
        data = asdict(self)
        if isinstance(self.created_at, datetime):
            data["created_at"] = self.created_at.isoformat()
        return data


class WebhookOutcome(Enum):
    PERSISTED = "persisted"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    MALFORMED = "malformed"

from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

from django_monument.constants import (
    DREAM_FIELD_MAX_LENGTHS,
    RECENT_DREAMS_DEFAULT_LIMIT,
    RECENT_DREAMS_MAX_LIMIT,
    REQUIRED_DREAM_FIELDS,
)
from django_monument.exceptions import DreamValidationError
from django_monument.payloads import DreamDraft


def clean_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def validate_dream(data: Any) -> DreamDraft:
    """
    Validate the dream submitted with a checkout request.

    Accepts either ``{"dream": {...}}`` or the dream fields at the top level.

    Raises:
        DreamValidationError: If a required field is missing or blank, or a
            field is longer than its column
    """
    if isinstance(data, dict) and "dream" in data:
        data = data["dream"]

    if not isinstance(data, dict):
        raise DreamValidationError("Invalid dream data", list(REQUIRED_DREAM_FIELDS))

    missing = [f for f in REQUIRED_DREAM_FIELDS if not clean_text(data.get(f))]
    if missing:
        raise DreamValidationError("Invalid dream data", missing)

    values = {f: clean_text(data.get(f)) for f in DREAM_FIELD_MAX_LENGTHS}

    too_long = [
        f for f, limit in DREAM_FIELD_MAX_LENGTHS.items() if len(values[f]) > limit
    ]
    if too_long:
        raise DreamValidationError("Dream field too long", too_long=too_long)

    return DreamDraft(
        title=values["title"],
        description=values["description"],
        author=values["author"],
        country=values["country"],
        language=values["language"] or None,
    )


def parse_limit(value: Any) -> int:
    """
    Parse the ``limit`` query parameter of the recent dreams listing.

    Raises:
        ValidationError: If not a positive integer
    """
    if value in (None, ""):
        return RECENT_DREAMS_DEFAULT_LIMIT

    try:
        limit = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError("Invalid limit") from e

    if limit < 1:
        raise ValidationError("Invalid limit")

    return min(limit, RECENT_DREAMS_MAX_LIMIT)


def validate_webhook_url(url):
    """Validate webhook URL is HTTPS."""
    validator = URLValidator(schemes=["https"])
    validator(url)
    return url

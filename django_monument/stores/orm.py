import logging
from typing import Any

from django.db import DatabaseError, IntegrityError, transaction

from django_monument.exceptions import DuplicateSession, StoreUnavailable
from django_monument.models import Dream
from django_monument.payloads import DreamRecord
from django_monument.stores.base import DreamStore

logger = logging.getLogger(__name__)


def dream_to_record(dream: Dream) -> DreamRecord:
    return DreamRecord(
        id=dream.pk,
        title=dream.title,
        description=dream.description,
        author=dream.author,
        country=dream.country,
        language=dream.language,
        likes=dream.likes,
        views=dream.views,
        paid=dream.paid,
        stripe_session_id=dream.stripe_session_id,
        created_at=dream.created_at,
    )


class OrmDreamStore(DreamStore):
    """Dreams kept in the project's own database through the Django ORM."""

    def exists(self, session_id: str) -> bool:
        try:
            return Dream.objects.filter(stripe_session_id=session_id).exists()
        except DatabaseError as e:
            raise StoreUnavailable(f"Failed to look up session {session_id}") from e

    def insert(self, values: dict[str, Any]) -> DreamRecord:
        session_id = values["stripe_session_id"]

        try:
            # Savepoint so a violation does not poison an outer transaction
            with transaction.atomic():
                dream = Dream.objects.create(**values)
        except IntegrityError as e:
            # Only the session constraint means "already stored"
            if self.exists(session_id):
                raise DuplicateSession(session_id) from e
            raise StoreUnavailable(f"Failed to insert dream: {e}") from e
        except DatabaseError as e:
            raise StoreUnavailable(f"Failed to insert dream: {e}") from e

        logger.debug("[django-monument] Inserted dream id=%s", dream.pk)
        return dream_to_record(dream)

    def recent(self, limit: int) -> list[DreamRecord]:
        try:
            dreams = list(
                Dream.objects.filter(paid=True).order_by("-created_at")[:limit]
            )
        except DatabaseError as e:
            raise StoreUnavailable("Failed to list dreams") from e
        return [dream_to_record(d) for d in dreams]

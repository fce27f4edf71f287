import logging
from datetime import datetime

from django.db import transaction
from django.utils import timezone

from django_monument.models import Dream
from django_monument.payloads import DreamMetadata, DreamRecord
from django_monument.signals import dream_persisted
from django_monument.stores import DreamStore

logger = logging.getLogger(__name__)


class SubmissionWriter:
    def __init__(self, store: DreamStore):
        self.store = store

    def write(
        self,
        metadata: DreamMetadata,
        session_id: str,
        now: datetime | None = None,
    ) -> DreamRecord:
        """
        Insert the paid dream for a completed session.

        created_at is the arrival time of the payment confirmation, not the
        time the form was filled in.

        Raises:
            DuplicateSession: The session already has a dream
            StoreUnavailable: The store could not be reached or written
        """
        record = self.store.insert(
            {
                "title": metadata.title,
                "description": metadata.description,
                "author": metadata.author,
                "country": metadata.country,
                "language": metadata.language,
                "likes": 0,
                "views": 0,
                "paid": True,
                "stripe_session_id": session_id,
                "created_at": now or timezone.now(),
            }
        )

        logger.info(
            "[django-monument] Stored paid dream %s for session %s",
            record.id,
            session_id,
        )

        transaction.on_commit(
            lambda: dream_persisted.send(
                sender=Dream, dream=record, session_id=session_id
            )
        )
        return record

import logging

from django_monument.stores import DreamStore

logger = logging.getLogger(__name__)


class IdempotencyGuard:
    """
    Skips sessions that already produced a dream.

    Stripe delivers webhooks at least once, so redelivery of a completed
    session is the normal case. Two concurrent deliveries can both pass this
    check; the store's unique constraint on the session id catches the
    second insert.
    """

    def __init__(self, store: DreamStore):
        self.store = store

    def already_processed(self, session_id: str) -> bool:
        processed = self.store.exists(session_id)
        if processed:
            logger.debug("[django-monument] Session %s already stored", session_id)
        return processed

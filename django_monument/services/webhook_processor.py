import logging

from django_monument.exceptions import DuplicateSession, MalformedMetadata
from django_monument.payloads import StripeEvent, WebhookOutcome
from django_monument.services.event_verifier import EventVerifier
from django_monument.services.idempotency import IdempotencyGuard
from django_monument.services.metadata_extractor import MetadataExtractor
from django_monument.services.submission_writer import SubmissionWriter
from django_monument.stores import DreamStore, get_store

logger = logging.getLogger(__name__)


class WebhookProcessor:
    """
    Turns verified Stripe webhooks into at most one paid dream per session.

    Every outcome except a store failure is acknowledged to Stripe, so
    events we cannot or need not act on are not redelivered forever.
    StoreUnavailable propagates so the caller answers 500 and Stripe
    retries later.
    """

    def __init__(self, verifier: EventVerifier, store: DreamStore):
        self.verifier = verifier
        self.guard = IdempotencyGuard(store)
        self.writer = SubmissionWriter(store)

    @classmethod
    def from_config(cls, config) -> "WebhookProcessor":
        return cls(EventVerifier.from_config(config), get_store(config))

    def handle(self, payload: bytes, sig_header: str | None) -> WebhookOutcome:
        """
        Verify and process a raw webhook delivery.

        Raises:
            WebhookVerificationError: The delivery cannot be trusted
            StoreUnavailable: The dream could not be checked or written
        """
        event = self.verifier.verify(payload, sig_header)
        return self.process(event)

    def process(self, event: StripeEvent) -> WebhookOutcome:
        try:
            metadata = MetadataExtractor.extract(event)
            if metadata is None:
                logger.debug(
                    "[django-monument] Ignoring event %s of type %s",
                    event.id,
                    event.type,
                )
                return WebhookOutcome.IGNORED

            session_id = MetadataExtractor.session_id(event)
        except MalformedMetadata as e:
            logger.warning("[django-monument] Skipping event %s: %s", event.id, e)
            return WebhookOutcome.MALFORMED

        logger.info("[django-monument] Payment confirmed for session %s", session_id)

        if self.guard.already_processed(session_id):
            return WebhookOutcome.DUPLICATE

        try:
            self.writer.write(metadata, session_id)
        except DuplicateSession:
            # Lost the race against a concurrent delivery
            logger.debug(
                "[django-monument] Concurrent delivery stored session %s first",
                session_id,
            )
            return WebhookOutcome.DUPLICATE

        return WebhookOutcome.PERSISTED

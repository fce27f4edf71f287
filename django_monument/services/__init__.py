from .checkout_service import CheckoutSessionFactory
from .event_verifier import EventVerifier
from .idempotency import IdempotencyGuard
from .metadata_extractor import MetadataExtractor
from .submission_writer import SubmissionWriter
from .webhook_processor import WebhookProcessor

__all__ = [
    "CheckoutSessionFactory",
    "EventVerifier",
    "IdempotencyGuard",
    "MetadataExtractor",
    "SubmissionWriter",
    "WebhookProcessor",
]

class MonumentError(Exception):
    """Common base class for django-monument exceptions"""

    pass


class WebhookVerificationError(MonumentError):
    """The webhook request cannot be trusted and must be answered with a 400."""

    pass


class SignatureInvalid(WebhookVerificationError):
    pass


class TimestampExpired(WebhookVerificationError):
    pass


class MalformedEvent(WebhookVerificationError):
    pass


class MalformedMetadata(MonumentError):
    pass


class DuplicateSession(MonumentError):
    def __init__(self, session_id: str):
        super().__init__(f"Dream already stored for session {session_id}")
        self.session_id = session_id


class StoreUnavailable(MonumentError):
    pass


class CheckoutUnavailable(MonumentError):
    pass


class DreamValidationError(MonumentError):
    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        too_long: list[str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.missing = missing or []
        self.too_long = too_long or []

import logging
from typing import Any

import stripe

from django_monument.constants import CHECKOUT_SESSION_ID_PLACEHOLDER
from django_monument.exceptions import CheckoutUnavailable
from django_monument.payloads import CheckoutSessionResult, DreamDraft

logger = logging.getLogger(__name__)


class CheckoutSessionFactory:
    """
    Creates the hosted Stripe Checkout session that pays for a dream.

    The draft only travels inside the session metadata; nothing is written
    to the store until the webhook confirms the payment. An abandoned
    checkout leaves no trace.
    """

    def __init__(
        self,
        api_key: str | None,
        frontend_url: str,
        unit_amount: int = 100,
        currency: str = "usd",
        product_name: str = "Dream Submission",
    ):
        self.api_key = api_key
        self.frontend_url = frontend_url.rstrip("/")
        self.unit_amount = unit_amount
        self.currency = currency
        self.product_name = product_name

    @classmethod
    def from_config(cls, config) -> "CheckoutSessionFactory":
        return cls(
            api_key=config.stripe_secret_key,
            frontend_url=config.frontend_url,
            unit_amount=config.unit_amount,
            currency=config.currency,
            product_name=config.product_name,
        )

    def build_params(self, draft: DreamDraft) -> dict[str, Any]:
        return {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "unit_amount": self.unit_amount,
                        "product_data": {
                            "name": self.product_name,
                            "description": (
                                f"Support a dream from {draft.author} "
                                f"({draft.country})"
                            ),
                        },
                    },
                    "quantity": 1,
                }
            ],
            "success_url": (
                f"{self.frontend_url}/success"
                f"?session_id={CHECKOUT_SESSION_ID_PLACEHOLDER}"
            ),
            "cancel_url": f"{self.frontend_url}/submit",
            "metadata": draft.to_metadata(),
        }

    def create(self, draft: DreamDraft) -> CheckoutSessionResult:
        """
        Raises:
            CheckoutUnavailable: Stripe is not configured or rejected the call
        """
        if not self.api_key:
            raise CheckoutUnavailable(
                "DJANGO_MONUMENT_STRIPE_SECRET_KEY must be set in Django settings"
            )

        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key, **self.build_params(draft)
            )
        except stripe.StripeError as e:
            logger.error("[django-monument] Stripe checkout creation failed: %s", e)
            raise CheckoutUnavailable(str(e)) from e

        logger.info(
            "[django-monument] Created checkout session %s for %s (%s)",
            session.id,
            draft.author,
            draft.country,
        )
        return CheckoutSessionResult(session_id=session.id, url=session.url)

import stripe
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from django_monument.conf import get_config
from django_monument.constants import ACTIONABLE_EVENT_TYPES
from django_monument.utils import validate_webhook_url


class Command(BaseCommand):
    help = "Register the dream webhook endpoint with Stripe"

    def add_arguments(self, parser):
        parser.add_argument("url", help="Public HTTPS URL of the Stripe webhook view")

    def handle(self, *args, **options):
        try:
            url = validate_webhook_url(options["url"])
        except ValidationError as e:
            raise CommandError(f"Invalid URL, HTTPS required: {e}") from e

        config = get_config()
        if not config.stripe_secret_key:
            raise CommandError("DJANGO_MONUMENT_STRIPE_SECRET_KEY is not set")

        try:
            endpoint = stripe.WebhookEndpoint.create(
                api_key=config.stripe_secret_key,
                url=url,
                enabled_events=sorted(ACTIONABLE_EVENT_TYPES),
            )
        except stripe.StripeError as e:
            raise CommandError(f"Failed to install webhook: {e}") from e

        self.stdout.write(self.style.SUCCESS(f"Webhook installed: {url}"))
        self.stdout.write(
            f"Set DJANGO_MONUMENT_STRIPE_WEBHOOK_SECRET={endpoint.secret}"
        )

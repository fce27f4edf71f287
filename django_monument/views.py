import json
import logging

from django.core.exceptions import ImproperlyConfigured, ValidationError
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from django_monument.conf import get_config
from django_monument.constants import SIGNATURE_HEADER
from django_monument.exceptions import (
    CheckoutUnavailable,
    DreamValidationError,
    StoreUnavailable,
    WebhookVerificationError,
)
from django_monument.services import CheckoutSessionFactory, WebhookProcessor
from django_monument.stores import get_store
from django_monument.utils import parse_limit, validate_dream

logger = logging.getLogger(__name__)


def _parse_json_body(request: HttpRequest) -> tuple[dict | None, JsonResponse | None]:
    """
    Parse JSON body from request.

    Returns:
        (data, None) on success
        (None, error_response) on failure
    """
    try:
        return json.loads(request.body), None
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, JsonResponse({"error": "Invalid JSON"}, status=400)


def process_webhook_request(request):
    """Verify a Stripe webhook and store the paid dream at most once."""
    try:
        processor = WebhookProcessor.from_config(get_config())
    except ImproperlyConfigured:
        logger.exception("[django-monument] Stripe webhook is not configured")
        return JsonResponse({"error": "Webhook not configured"}, status=500)

    # request.body is the raw payload; it must reach the verifier untouched
    try:
        outcome = processor.handle(request.body, request.headers.get(SIGNATURE_HEADER))
    except WebhookVerificationError as e:
        logger.warning("[django-monument] Webhook verification failed: %s", e)
        return JsonResponse({"error": f"Webhook Error: {e}"}, status=400)
    except StoreUnavailable:
        logger.exception("[django-monument] Failed to store paid dream")
        return JsonResponse({"error": "Database error"}, status=500)

    logger.debug("[django-monument] Webhook outcome: %s", outcome.value)
    return JsonResponse({"received": True})


@csrf_exempt
@require_http_methods(["POST"])
def stripe_webhook(request):
    return process_webhook_request(request)


@csrf_exempt
def create_checkout_session(request):
    if request.method != "POST":
        response = JsonResponse(
            {"error": "Method Not Allowed", "message": "Use POST"}, status=405
        )
        response["Allow"] = "POST"
        return response

    data, error = _parse_json_body(request)
    if error:
        return error

    try:
        draft = validate_dream(data)
    except DreamValidationError as e:
        body = {"error": e.message, "missing": e.missing}
        if e.too_long:
            body["tooLong"] = e.too_long
        return JsonResponse(body, status=400)

    factory = CheckoutSessionFactory.from_config(get_config())

    try:
        session = factory.create(draft)
    except CheckoutUnavailable as e:
        return JsonResponse({"error": "Payment failed", "message": str(e)}, status=500)

    return JsonResponse(
        {"success": True, "sessionId": session.session_id, "url": session.url}
    )


@require_http_methods(["GET"])
def health(request):
    config = get_config()
    return JsonResponse(
        {
            "status": "OK",
            "stripeConfigured": config.stripe_configured,
            "frontendUrl": config.frontend_url,
            "timestamp": timezone.now().isoformat(),
        }
    )


@require_http_methods(["GET"])
def recent_dreams(request):
    try:
        limit = parse_limit(request.GET.get("limit"))
    except ValidationError as e:
        return JsonResponse({"error": str(e.message)}, status=400)

    try:
        dreams = get_store(get_config()).recent(limit)
    except (StoreUnavailable, ImproperlyConfigured):
        logger.exception("[django-monument] Failed to list recent dreams")
        return JsonResponse({"error": "Database error"}, status=500)

    return JsonResponse({"dreams": [d.as_json() for d in dreams]})

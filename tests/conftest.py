import json
from pathlib import Path

import pytest
from django.test import Client

from tests.apps.testapp.signals import persisted_sessions
from tests.helpers import WEBHOOK_SECRET, encode_event, sign_payload


@pytest.fixture
def checkout_completed_webhook_payload():
    """Realistic checkout.session.completed webhook payload (anonymized)."""
    fixture_path = (
        Path(__file__).parent / "fixtures" / "checkout_session_completed.json"
    )
    with open(fixture_path) as f:
        return json.load(f)


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def config():
    from django_monument.conf import get_config

    return get_config()


@pytest.fixture
def verifier():
    from django_monument.services import EventVerifier

    return EventVerifier(WEBHOOK_SECRET, tolerance=300)


@pytest.fixture
def store():
    from django_monument.stores import OrmDreamStore

    return OrmDreamStore()


@pytest.fixture
def processor(verifier, store):
    from django_monument.services import WebhookProcessor

    return WebhookProcessor(verifier, store)


@pytest.fixture
def post_webhook(client):
    """POST an event to the webhook view with a valid signature."""

    def _post(event: dict, **kwargs):
        body = encode_event(event)
        return client.post(
            "/webhook/stripe/",
            data=body,
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=kwargs.pop("signature", None) or sign_payload(body),
            **kwargs,
        )

    return _post


@pytest.fixture(autouse=True)
def reset_persisted_sessions():
    persisted_sessions.clear()
    yield
    persisted_sessions.clear()

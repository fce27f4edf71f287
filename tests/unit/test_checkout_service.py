from unittest.mock import Mock

import pytest
import stripe

from django_monument.exceptions import CheckoutUnavailable
from django_monument.payloads import CheckoutSessionResult, DreamDraft
from django_monument.services.checkout_service import CheckoutSessionFactory


@pytest.fixture
def draft():
    return DreamDraft(
        title="See the ocean",
        description="Hear the waves for the first time.",
        author="Ana",
        country="Brazil",
    )


@pytest.fixture
def factory():
    return CheckoutSessionFactory(
        api_key="sk_test_123", frontend_url="https://dreams.example.com/"
    )


@pytest.fixture
def mock_create(mocker):
    return mocker.patch(
        "stripe.checkout.Session.create",
        return_value=Mock(id="cs_test_123", url="https://checkout.stripe.com/pay"),
    )


class TestBuildParams:
    def test_one_time_payment_of_one_dollar(self, factory, draft):
        params = factory.build_params(draft)

        assert params["mode"] == "payment"
        assert params["payment_method_types"] == ["card"]
        (line_item,) = params["line_items"]
        assert line_item["quantity"] == 1
        assert line_item["price_data"]["unit_amount"] == 100
        assert line_item["price_data"]["currency"] == "usd"
        assert line_item["price_data"]["product_data"] == {
            "name": "Dream Submission",
            "description": "Support a dream from Ana (Brazil)",
        }

    def test_redirect_urls(self, factory, draft):
        params = factory.build_params(draft)

        assert params["success_url"] == (
            "https://dreams.example.com/success?session_id={CHECKOUT_SESSION_ID}"
        )
        assert params["cancel_url"] == "https://dreams.example.com/submit"

    def test_metadata_carries_dream(self, factory, draft):
        params = factory.build_params(draft)

        assert params["metadata"] == {
            "dream_title": "See the ocean",
            "dream_description": "Hear the waves for the first time.",
            "dream_author": "Ana",
            "dream_country": "Brazil",
            "dream_language": "",
        }

    def test_metadata_passes_values_unchanged(self, factory):
        draft = DreamDraft(
            title="t", description="x" * 500, author="Ana", country="Brazil"
        )

        params = factory.build_params(draft)

        assert params["metadata"]["dream_description"] == "x" * 500

    def test_from_config(self, config):
        factory = CheckoutSessionFactory.from_config(config)

        assert factory.api_key == "sk_test_monument"
        assert factory.frontend_url == "https://dreams.example.com"
        assert factory.unit_amount == 100


class TestCreate:
    def test_returns_session_id_and_url(self, factory, draft, mock_create):
        result = factory.create(draft)

        assert result == CheckoutSessionResult(
            session_id="cs_test_123", url="https://checkout.stripe.com/pay"
        )
        mock_create.assert_called_once_with(
            api_key="sk_test_123", **factory.build_params(draft)
        )

    def test_stripe_error_raises_checkout_unavailable(self, factory, draft, mocker):
        mocker.patch(
            "stripe.checkout.Session.create",
            side_effect=stripe.APIConnectionError("timeout"),
        )

        with pytest.raises(CheckoutUnavailable) as exc_info:
            factory.create(draft)

        assert "timeout" in str(exc_info.value)

    def test_missing_api_key(self, draft, mock_create):
        factory = CheckoutSessionFactory(
            api_key=None, frontend_url="https://dreams.example.com"
        )

        with pytest.raises(CheckoutUnavailable):
            factory.create(draft)

        mock_create.assert_not_called()

import pytest
from django.core.exceptions import ValidationError

from django_monument.exceptions import DreamValidationError
from django_monument.payloads import DreamDraft
from django_monument.utils import parse_limit, validate_dream, validate_webhook_url

DREAM = {
    "title": " See the ocean ",
    "description": "Hear the waves.",
    "author": "Ana",
    "country": "Brazil",
}


class TestValidateDream:
    def test_envelope(self):
        assert validate_dream({"dream": DREAM}) == DreamDraft(
            title="See the ocean",
            description="Hear the waves.",
            author="Ana",
            country="Brazil",
            language=None,
        )

    def test_top_level(self):
        assert validate_dream(DREAM).title == "See the ocean"

    def test_language_kept(self):
        draft = validate_dream({**DREAM, "language": "Portuguese"})
        assert draft.language == "Portuguese"

    @pytest.mark.parametrize("field", ["title", "description", "author", "country"])
    def test_required_field_missing(self, field):
        data = {k: v for k, v in DREAM.items() if k != field}

        with pytest.raises(DreamValidationError) as exc_info:
            validate_dream(data)

        assert exc_info.value.missing == [field]

    @pytest.mark.parametrize("data", [None, [], "dream", {"dream": None}])
    def test_not_an_object(self, data):
        with pytest.raises(DreamValidationError) as exc_info:
            validate_dream(data)

        assert exc_info.value.message == "Invalid dream data"

    def test_non_string_values_rejected(self):
        with pytest.raises(DreamValidationError):
            validate_dream({**DREAM, "title": {"nested": "x"}})

    @pytest.mark.parametrize(
        "field, limit",
        [
            ("title", 255),
            ("description", 500),
            ("author", 255),
            ("country", 128),
            ("language", 64),
        ],
    )
    def test_field_over_limit_rejected(self, field, limit):
        with pytest.raises(DreamValidationError) as exc_info:
            validate_dream({**DREAM, field: "x" * (limit + 1)})

        assert exc_info.value.too_long == [field]
        assert exc_info.value.missing == []

    def test_fields_at_limit_accepted(self):
        draft = validate_dream(
            {
                "title": "t" * 255,
                "description": "d" * 500,
                "author": "a" * 255,
                "country": "c" * 128,
                "language": "l" * 64,
            }
        )

        assert len(draft.description) == 500
        assert len(draft.language) == 64

    def test_length_measured_after_stripping(self):
        draft = validate_dream({**DREAM, "country": "  " + "c" * 128 + "  "})

        assert draft.country == "c" * 128


class TestParseLimit:
    @pytest.mark.parametrize(
        "value, expected", [(None, 3), ("", 3), ("5", 5), (10, 10), ("1000", 50)]
    )
    def test_valid(self, value, expected):
        assert parse_limit(value) == expected

    @pytest.mark.parametrize("value", ["abc", "0", "-1", "1.5"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_limit(value)


class TestValidateWebhookUrl:
    def test_https_accepted(self):
        url = "https://dreams.example.com/webhook/stripe/"
        assert validate_webhook_url(url) == url

    @pytest.mark.parametrize("url", ["http://dreams.example.com/", "not-a-url"])
    def test_rejected(self, url):
        with pytest.raises(ValidationError):
            validate_webhook_url(url)

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from django_monument.constants import (
    AUTHOR_MAX_LENGTH,
    COUNTRY_MAX_LENGTH,
    LANGUAGE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)


class Dream(models.Model):
    """
    A paid dream submission.

    Rows are only ever created by the Stripe webhook after the checkout
    session completed; likes and views are maintained by the site itself.
    """

    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    description = models.TextField(blank=True)
    author = models.CharField(max_length=AUTHOR_MAX_LENGTH, blank=True)
    country = models.CharField(max_length=COUNTRY_MAX_LENGTH, blank=True)
    language = models.CharField(max_length=LANGUAGE_MAX_LENGTH, blank=True, null=True)

    likes = models.PositiveIntegerField(default=0)
    views = models.PositiveIntegerField(default=0)

    paid = models.BooleanField(default=False)

    # At most one dream per Checkout session
    stripe_session_id = models.CharField(
        max_length=255,
        unique=True,
        help_text=_("Stripe Checkout session that paid for this dream"),
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        help_text=_("Time the payment confirmation arrived"),
    )

    class Meta:
        db_table = "dreams"
        verbose_name = _("Dream")
        verbose_name_plural = _("Dreams")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="dreams_created_idx"),
            models.Index(fields=["paid", "-created_at"], name="dreams_paid_idx"),
        ]

    def __str__(self):
        if self.author:
            return f"{self.title} ({self.author})"
        return self.title

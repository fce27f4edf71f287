from django.contrib import admin
from django.http import HttpRequest
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from django_monument.models import Dream


@admin.register(Dream)
class DreamAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "author",
        "country",
        "language",
        "display_paid_icon",
        "likes",
        "views",
        "created_at",
    )
    list_filter = ("paid", "country", "language", "created_at")
    search_fields = (
        "title",
        "description",
        "author",
        "country",
        "stripe_session_id",
    )
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    fieldsets = (
        (
            _("Dream"),
            {"fields": ("title", "description", "author", "country", "language")},
        ),
        (
            _("Payment"),
            {"fields": ("paid", "stripe_session_link", "created_at")},
        ),
        (
            _("Engagement"),
            {"classes": ("collapse",), "fields": ("likes", "views")},
        ),
    )

    readonly_fields = (
        "title",
        "description",
        "author",
        "country",
        "language",
        "paid",
        "stripe_session_link",
        "created_at",
        "likes",
        "views",
    )

    # Dreams are only created by the Stripe webhook
    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(
        self, request: HttpRequest, obj: Dream | None = None
    ) -> bool:
        return False

    def has_delete_permission(
        self, request: HttpRequest, obj: Dream | None = None
    ) -> bool:
        return False

    @admin.display(description=_("Paid"), boolean=True)
    def display_paid_icon(self, obj: Dream) -> bool:
        return obj.paid

    @admin.display(description=_("Stripe session"))
    def stripe_session_link(self, obj: Dream) -> str:
        prefix = "test/" if obj.stripe_session_id.startswith("cs_test_") else ""
        return format_html(
            '<a href="https://dashboard.stripe.com/{}checkout/sessions/{}" '
            'target="_blank">{}</a>',
            prefix,
            obj.stripe_session_id,
            obj.stripe_session_id,
        )

from django.urls import path

from django_monument import views

app_name = "django_monument"

urlpatterns = [
    path("webhook/stripe/", views.stripe_webhook, name="webhook"),
    path(
        "create-checkout-session/",
        views.create_checkout_session,
        name="create_checkout_session",
    ),
    path("health/", views.health, name="health"),
    path("dreams/recent/", views.recent_dreams, name="recent_dreams"),
]

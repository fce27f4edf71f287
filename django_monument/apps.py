from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class DjangoMonumentAppConfig(AppConfig):
    default = True
    default_auto_field = "django.db.models.BigAutoField"
    name = "django_monument"
    verbose_name = _("Monument of Dreams")

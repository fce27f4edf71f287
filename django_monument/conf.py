from dataclasses import dataclass

from django.conf import settings as dj_settings
from django.core.signals import setting_changed

DEFAULTS = {
    "STRIPE_SECRET_KEY": None,
    "STRIPE_WEBHOOK_SECRET": None,
    "WEBHOOK_TOLERANCE": 300,
    "FRONTEND_URL": "http://localhost:8080",
    "UNIT_AMOUNT": 100,
    "CURRENCY": "usd",
    "PRODUCT_NAME": "Dream Submission",
    "STORE_BACKEND": "orm",
    "SUPABASE_URL": None,
    "SUPABASE_SERVICE_ROLE_KEY": None,
    "SUPABASE_TABLE": "dreams",
    "STORE_TIMEOUT": 10,
}


class Settings(object):
    def __getattr__(self, name):
        if name not in DEFAULTS:
            msg = "'%s' object has no attribute '%s'"
            raise AttributeError(msg % (self.__class__.__name__, name))

        value = self.get_setting(name)

        # Cache the result
        setattr(self, name, value)
        return value

    def get_setting(self, setting):
        django_setting = f"DJANGO_MONUMENT_{setting}"
        return getattr(dj_settings, django_setting, DEFAULTS[setting])

    def change_setting(self, setting, value, enter, **kwargs):
        if not setting.startswith("DJANGO_MONUMENT_"):
            return

        setting = setting.split("DJANGO_MONUMENT_")[1]  # strip 'DJANGO_MONUMENT_'

        # ensure a valid app setting is being overridden
        if setting not in DEFAULTS:
            return

        # if exiting, delete value to repopulate
        if enter:
            setattr(self, setting, value)
        else:
            self.__dict__.pop(setting, None)


settings = Settings()
setting_changed.connect(settings.change_setting)


@dataclass(frozen=True)
class MonumentConfig:
    """
    Snapshot of the app settings handed to the services.

    Services never read settings on their own; views assemble one of these
    per request and pass it down.
    """

    stripe_secret_key: str | None
    stripe_webhook_secret: str | None
    webhook_tolerance: int
    frontend_url: str
    unit_amount: int
    currency: str
    product_name: str
    store_backend: str
    supabase_url: str | None
    supabase_service_role_key: str | None
    supabase_table: str
    store_timeout: float

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key)


def get_config() -> MonumentConfig:
    return MonumentConfig(
        stripe_secret_key=settings.STRIPE_SECRET_KEY,
        stripe_webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
        webhook_tolerance=int(settings.WEBHOOK_TOLERANCE),
        frontend_url=str(settings.FRONTEND_URL).rstrip("/"),
        unit_amount=int(settings.UNIT_AMOUNT),
        currency=settings.CURRENCY,
        product_name=settings.PRODUCT_NAME,
        store_backend=settings.STORE_BACKEND,
        supabase_url=settings.SUPABASE_URL,
        supabase_service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY,
        supabase_table=settings.SUPABASE_TABLE,
        store_timeout=float(settings.STORE_TIMEOUT),
    )

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from .base import DreamStore
from .orm import OrmDreamStore
from .supabase import SupabaseDreamStore

BACKENDS = {
    "orm": OrmDreamStore,
    "supabase": SupabaseDreamStore,
}


def get_store_class(backend: str) -> type[DreamStore]:
    if backend in BACKENDS:
        return BACKENDS[backend]

    try:
        store_class = import_string(backend)
    except ImportError as e:
        raise ImproperlyConfigured(f"Unknown dream store backend: {backend}") from e

    if not (isinstance(store_class, type) and issubclass(store_class, DreamStore)):
        raise ImproperlyConfigured(f"{backend} must be a DreamStore subclass.")

    return store_class


def get_store(config) -> DreamStore:
    return get_store_class(config.store_backend).from_config(config)


__all__ = [
    "DreamStore",
    "OrmDreamStore",
    "SupabaseDreamStore",
    "get_store",
    "get_store_class",
]

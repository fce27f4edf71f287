from abc import ABC, abstractmethod
from typing import Any

from django_monument.payloads import DreamRecord


class DreamStore(ABC):
    """
    Row store holding paid dreams.

    Implementations must enforce uniqueness of ``stripe_session_id`` and
    report a violation as ``DuplicateSession``. Any other failure to reach
    or write the store is ``StoreUnavailable``.
    """

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def insert(self, values: dict[str, Any]) -> DreamRecord:
        raise NotImplementedError

    @abstractmethod
    def recent(self, limit: int) -> list[DreamRecord]:
        raise NotImplementedError

    @classmethod
    def from_config(cls, config) -> "DreamStore":
        return cls()

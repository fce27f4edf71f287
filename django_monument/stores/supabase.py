"""
Dream store backed by a Supabase project, reached through its PostgREST API.

The ``dreams`` table is expected to carry a UNIQUE constraint on
``stripe_session_id``; PostgREST reports a violation as HTTP 409 with the
Postgres error code ``23505``.
"""
import logging
from datetime import datetime
from typing import Any

import httpx
from django.core.exceptions import ImproperlyConfigured

from django_monument.exceptions import DuplicateSession, StoreUnavailable
from django_monument.payloads import DreamRecord
from django_monument.stores.base import DreamStore

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"

RECORD_FIELDS = (
    "id",
    "title",
    "description",
    "author",
    "country",
    "language",
    "likes",
    "views",
    "paid",
    "stripe_session_id",
    "created_at",
)


def row_to_record(row: dict[str, Any]) -> DreamRecord:
    return DreamRecord(
        id=row.get("id"),
        title=row.get("title") or "",
        description=row.get("description") or "",
        author=row.get("author") or "",
        country=row.get("country") or "",
        language=row.get("language") or None,
        likes=int(row.get("likes") or 0),
        views=int(row.get("views") or 0),
        paid=bool(row.get("paid")),
        stripe_session_id=row.get("stripe_session_id") or "",
        created_at=row.get("created_at"),
    )


class SupabaseDreamStore(DreamStore):
    def __init__(
        self,
        url: str,
        service_role_key: str,
        table: str = "dreams",
        timeout: float = 10,
        client: httpx.Client | None = None,
    ):
        if not url or not service_role_key:
            raise ImproperlyConfigured(
                "DJANGO_MONUMENT_SUPABASE_URL and "
                "DJANGO_MONUMENT_SUPABASE_SERVICE_ROLE_KEY must be set"
            )

        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
        }
        self.timeout = timeout
        self.client = client

    @classmethod
    def from_config(cls, config) -> "SupabaseDreamStore":
        return cls(
            url=config.supabase_url,
            service_role_key=config.supabase_service_role_key,
            table=config.supabase_table,
            timeout=config.store_timeout,
        )

    def _request(self, method: str, **kwargs) -> httpx.Response:
        headers = {**self.headers, **kwargs.pop("headers", {})}
        send = self.client.request if self.client is not None else httpx.request
        try:
            return send(
                method,
                self.endpoint,
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except httpx.HTTPError as e:
            raise StoreUnavailable(f"Supabase request failed: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StoreUnavailable(
                f"Supabase returned {response.status_code}: {response.text}"
            ) from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise StoreUnavailable("Supabase returned an invalid body") from e

    @staticmethod
    def _is_unique_violation(response: httpx.Response) -> bool:
        if response.status_code != 409:
            return False
        try:
            body = response.json()
        except ValueError:
            return True
        return not isinstance(body, dict) or body.get("code") in (
            None,
            UNIQUE_VIOLATION,
        )

    def exists(self, session_id: str) -> bool:
        response = self._request(
            "GET",
            params={
                "select": "id",
                "stripe_session_id": f"eq.{session_id}",
                "limit": "1",
            },
        )
        self._raise_for_status(response)
        return bool(self._json(response))

    def insert(self, values: dict[str, Any]) -> DreamRecord:
        row = dict(values)
        if isinstance(row.get("created_at"), datetime):
            row["created_at"] = row["created_at"].isoformat()

        response = self._request(
            "POST",
            json=[row],
            headers={"Prefer": "return=representation"},
        )

        if self._is_unique_violation(response):
            raise DuplicateSession(values["stripe_session_id"])

        self._raise_for_status(response)

        rows = self._json(response)
        logger.debug(
            "[django-monument] Inserted dream into Supabase for session %s",
            values["stripe_session_id"],
        )
        return row_to_record(rows[0] if rows else row)

    def recent(self, limit: int) -> list[DreamRecord]:
        response = self._request(
            "GET",
            params={
                "select": ",".join(RECORD_FIELDS),
                "paid": "eq.true",
                "order": "created_at.desc",
                "limit": str(limit),
            },
        )
        self._raise_for_status(response)
        return [row_to_record(row) for row in self._json(response)]

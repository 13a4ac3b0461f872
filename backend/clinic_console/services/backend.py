"""Module: backend.

Thin async client for the external admin backend. Every table is served by the
same four generic endpoints; records are validated into the model registered
for the table in ``RECORD_MODELS``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from clinic_console.core.config import Settings
from clinic_console.core.errors import FetchError, MutationError
from clinic_console.schemas.forms import BulkNotificationForm, RecordForm
from clinic_console.schemas.records import RECORD_MODELS, AdminRecord, Page, Record, RecordId, TableName

logger = logging.getLogger(__name__)


def build_http_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.backend_base_url,
        timeout=settings.request_timeout,
        transport=transport,
    )


class AdminBackend:
    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self.http = http
        self.settings = settings

    def _table_path(self, table: TableName, record_id: RecordId | None = None) -> str:
        path = f"/{self.settings.admin_path.strip('/')}/{table.value}"
        if record_id is not None:
            path = f"{path}/{record_id}"
        return path

    # -------------------------
    # Reads
    # -------------------------
    async def fetch_page(self, table: TableName, page: int = 1, limit: int | None = None) -> Page:
        limit = limit or self.settings.page_size
        model = RECORD_MODELS[table]
        try:
            r = await self.http.get(self._table_path(table), params={"page": page, "limit": limit})
            r.raise_for_status()
            return Page[model].model_validate(r.json())
        except (httpx.HTTPError, ValidationError, ValueError) as exc:
            logger.error("Error fetching data from %s (page=%s, limit=%s): %s", table, page, limit, exc)
            raise FetchError(table.value, "fetch") from exc

    async def fetch_all(self, table: TableName) -> list[Record]:
        """
        Fetch one page capped at ``fetch_all_limit`` rows.

        This is not exhaustive pagination: when the backend holds more rows the
        result is truncated and callers join over what was returned.
        """
        result = await self.fetch_page(table, page=1, limit=self.settings.fetch_all_limit)
        if result.truncated:
            logger.warning(
                "Fetched %s of %s rows from %s; joins will be partial",
                len(result.data),
                result.pagination.total,
                table,
            )
        return result.data

    async def fetch_total(self, table: TableName) -> int:
        result = await self.fetch_page(table, page=1, limit=1)
        return result.pagination.total

    # -------------------------
    # Writes
    # -------------------------
    async def _send(self, method: str, table: TableName, path: str, operation: str, **kwargs: Any) -> Any:
        try:
            r = await self.http.request(method, path, **kwargs)
            r.raise_for_status()
            return r.json() if r.content else {}
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error during %s on %s: %s", operation, table, exc)
            raise MutationError(table.value, operation) from exc

    async def create(self, form: RecordForm) -> AdminRecord:
        payload = form.model_dump(mode="json")
        data = await self._send("POST", form.table, self._table_path(form.table), "create", json=payload)
        try:
            return RECORD_MODELS[form.table].model_validate(data)
        except ValidationError as exc:
            logger.error("Backend returned an unreadable %s record: %s", form.table, exc)
            raise MutationError(form.table.value, "create") from exc

    async def update(self, form: RecordForm, record_id: RecordId) -> dict:
        # Partial update: only fields the caller actually set are sent.
        payload = form.model_dump(mode="json", exclude_unset=True)
        return await self._send(
            "PUT", form.table, self._table_path(form.table, record_id), "update", json=payload
        )

    async def delete(self, table: TableName, ids: Iterable[RecordId]) -> dict:
        ids = list(ids)
        logger.info("Deleting %s record(s) from %s", len(ids), table)
        return await self._send("DELETE", table, self._table_path(table), "delete", json={"ids": ids})

    # -------------------------
    # Push notifications
    # -------------------------
    async def send_event_notification(self, event_id: RecordId) -> dict:
        return await self._send(
            "POST", TableName.UPCOMING_EVENTS, f"/fcm/send/{event_id}", "notify"
        )

    async def send_bulk_notification(self, form: BulkNotificationForm) -> dict:
        return await self._send(
            "POST", TableName.UPCOMING_EVENTS, "/fcm/send-bulk", "notify-bulk", json=form.model_dump()
        )

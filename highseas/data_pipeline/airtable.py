"""
High Seas - Airtable REST client.

Wraps the two calls the data layer needs (list-with-formula and
fetch-by-id) behind a small async class.  Only HTTP 429 is retried, since
Airtable answers bursts above 5 req/s per base that way; every other
failure surfaces as ``AirtableError``.

Usage::

    client = AirtableClient(api_key="...", base_id="app...")
    ships  = await client.select("ships", filter_formula="...", max_records=5)
    person = await client.find("people", "rec...")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from highseas import config
from highseas.core.constants import (
    AIRTABLE_MAX_RETRIES,
    AIRTABLE_PAGE_SIZE,
    AIRTABLE_RETRY_BACKOFF_BASE,
)
from highseas.domain.errors import AirtableError
from highseas.domain.models import RawRecord

logger = logging.getLogger(__name__)


class AirtableClient:
    """Async client for one Airtable base.

    The internal ``httpx.AsyncClient`` is lazily created and reused across
    calls.  Pass ``transport`` to route requests elsewhere (tests use
    ``httpx.MockTransport``).
    """

    MAX_RETRIES: int = AIRTABLE_MAX_RETRIES
    RETRY_BACKOFF_BASE: float = AIRTABLE_RETRY_BACKOFF_BASE

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_id: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else config.AIRTABLE_API_KEY
        self._base_id = base_id if base_id is not None else config.AIRTABLE_BASE_ID
        self._api_url = (api_url or config.AIRTABLE_API_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else config.AIRTABLE_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _client_get(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=f"{self._api_url}/{self._base_id}",
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def _get(self, table: str, path: str, params: Optional[Dict[str, Any]] = None) -> dict:
        """GET ``path`` and return the JSON body, backing off on 429."""
        client = await self._client_get()
        delay = self.RETRY_BACKOFF_BASE
        for attempt in range(1, self.MAX_RETRIES + 1):
            try:
                resp = await client.get(path, params=params)
            except httpx.HTTPError as exc:
                raise AirtableError(f"Airtable request to {table!r} failed: {exc}", table=table) from exc

            if resp.status_code == 429 and attempt < self.MAX_RETRIES:
                logger.warning(
                    "Airtable rate-limited on %s; retry %d/%d in %.0fs",
                    table, attempt, self.MAX_RETRIES, delay,
                )
                await asyncio.sleep(delay)
                delay *= 2
                continue

            if resp.status_code >= 400:
                raise AirtableError(
                    f"Airtable HTTP {resp.status_code} for {table!r}: {resp.text[:200]}",
                    table=table,
                    status_code=resp.status_code,
                )
            return resp.json()

        # Unreachable: the last attempt either returns or raises above.
        raise AirtableError(f"Airtable request to {table!r} exhausted retries", table=table)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def select(
        self,
        table: str,
        filter_formula: Optional[str] = None,
        max_records: Optional[int] = None,
    ) -> List[RawRecord]:
        """List records of ``table``, following ``offset`` pagination.

        ``max_records`` caps the total across all pages; ``None`` means
        every matching record.
        """
        params: Dict[str, Any] = {"pageSize": AIRTABLE_PAGE_SIZE}
        if filter_formula:
            params["filterByFormula"] = filter_formula
        if max_records:
            params["maxRecords"] = max_records

        records: List[RawRecord] = []
        while True:
            body = await self._get(table, f"/{table}", params=params)
            records.extend(RawRecord.from_api(r) for r in body.get("records", []))
            offset = body.get("offset")
            if not offset or (max_records and len(records) >= max_records):
                break
            params["offset"] = offset

        if max_records:
            records = records[:max_records]
        return records

    async def find(self, table: str, record_id: str) -> RawRecord:
        """Fetch a single record by id.  A 404 raises ``AirtableError``."""
        body = await self._get(table, f"/{table}/{quote(record_id, safe='')}")
        return RawRecord.from_api(body)

    async def close(self) -> None:
        """Cleanly close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

"""
High Seas - public query functions.

``HighSeasData`` ties the Airtable client, the field mapper, the grouping
engine and both cache tiers together:

* people and ship groups live in short-lived in-memory ``TTLCache``s;
* shop orders are persisted per user through ``OrderStore`` and, once a
  non-empty snapshot exists, are served from it forever (placed orders do
  not change).

Typical usage::

    from highseas.data import get_data_service
    data   = get_data_service()
    groups = await data.fetch_ships("U01ABCDEF", max_records=5)

The module-level coroutines at the bottom delegate to the process-wide
instance for callers that do not hold one.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
import time
from typing import Any, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from highseas import config
from highseas.cache_backend import TTLCache
from highseas.core.constants import (
    ALL_RECORDS_KEY,
    PEOPLE_TABLE,
    SHIPS_TABLE,
    SHOP_ORDERS_TABLE,
)
from highseas.core.logging import elapsed_ms
from highseas.data_pipeline import formulas
from highseas.data_pipeline.airtable import AirtableClient
from highseas.data_pipeline.normalizer import map_order, map_person, map_ship
from highseas.database import OrderStore
from highseas.domain.errors import HighSeasError, MalformedRecordError
from highseas.domain.models import Order, Person, RawRecord, ShipGroup
from highseas.metrics import record_cache_access, record_error, record_upstream_call
from highseas.ship_groups import group_ships
from highseas.shop import ShopCatalog, ShopCatalogProvider

logger = logging.getLogger(__name__)

_ORDERS = TypeAdapter(List[Order])


def ships_cache_key(slack_id: str, max_records: Optional[int] = None) -> str:
    return f"{slack_id}-{max_records or ALL_RECORDS_KEY}"


class HighSeasData:
    """Cached read access to people, ships and shop orders."""

    def __init__(
        self,
        client: AirtableClient,
        order_store: OrderStore,
        shop_catalog: ShopCatalogProvider,
        ships_cache: Optional[TTLCache[List[ShipGroup]]] = None,
        person_cache: Optional[TTLCache[Person]] = None,
        debug_dump_path: Optional[str] = None,
    ) -> None:
        self.client = client
        self.order_store = order_store
        self.shop_catalog = shop_catalog
        self.ships_cache = ships_cache if ships_cache is not None else TTLCache(
            config.SHIPS_CACHE_TTL_SECONDS,
            max_entries=config.SHIPS_CACHE_MAX_ENTRIES,
            name="ships",
        )
        self.person_cache = person_cache if person_cache is not None else TTLCache(
            config.PERSON_CACHE_TTL_SECONDS,
            max_entries=config.PERSON_CACHE_MAX_ENTRIES,
            name="people",
        )
        self.debug_dump_path = debug_dump_path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _upstream(self, call):
        """Await an Airtable call, counting it; errors propagate unchanged."""
        record_upstream_call()
        try:
            return await call
        except HighSeasError:
            record_error()
            raise

    def _cached_person(self, user_id: str) -> Optional[Person]:
        person = self.person_cache.get(user_id)
        record_cache_access(self.person_cache.name, person is not None)
        return person

    async def _dump_debug(self, payload: Sequence[Any]) -> None:
        if not self.debug_dump_path:
            return
        text = json.dumps([p.to_dict() for p in payload], indent=2, default=str)
        await asyncio.to_thread(_write_text, self.debug_dump_path, text)

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    async def fetch_person(self, user_id: str) -> Optional[Person]:
        """Profile for a Slack user, or ``None`` when no row matches."""
        cached = self._cached_person(user_id)
        if cached is not None:
            return cached

        people = await self._upstream(
            self.client.select(
                PEOPLE_TABLE,
                filter_formula=formulas.person_by_slack_id(user_id),
                max_records=1,
            )
        )
        logger.info("fetch_person: %s not cached", user_id)
        if not people:
            return None

        person = map_person(people[0])
        self.person_cache.set(user_id, person)
        return person

    async def fetch_person_by_record_id(self, record_id: str, user_id: str) -> Person:
        """Profile by Airtable record id.

        Shares ``fetch_person``'s cache slot, which is keyed by ``user_id``:
        a cached profile for ``user_id`` is returned regardless of
        ``record_id``.
        """
        cached = self._cached_person(user_id)
        if cached is not None:
            return cached

        record = await self._upstream(self.client.find(PEOPLE_TABLE, record_id))
        logger.info("fetch_person_by_record_id: %s not cached", user_id)
        person = map_person(record)
        self.person_cache.set(user_id, person)
        return person

    # ------------------------------------------------------------------
    # Ships
    # ------------------------------------------------------------------

    async def fetch_ships(self, slack_id: str, max_records: Optional[int] = None) -> List[ShipGroup]:
        """Ship groups for ``slack_id``, newest first."""
        key = ships_cache_key(slack_id, max_records)
        cached = self.ships_cache.get(key)
        record_cache_access(self.ships_cache.name, cached is not None)
        if cached is not None:
            await self._dump_debug(cached)
            return cached

        records: List[RawRecord] = await self._upstream(
            self.client.select(
                SHIPS_TABLE,
                filter_formula=formulas.ships_for_entrant(slack_id),
                max_records=max_records,
            )
        )
        await self._dump_debug(records)

        groups = group_ships([map_ship(r) for r in records])
        logger.info(
            "fetch_ships: %s not cached (%d records -> %d groups)",
            key, len(records), len(groups),
        )
        self.ships_cache.set(key, groups)
        return groups

    # ------------------------------------------------------------------
    # Shop orders
    # ------------------------------------------------------------------

    async def get_user_shop_orders(self, user_id: str) -> List[Order]:
        """Orders for ``user_id``.

        A stored non-empty snapshot is returned as-is with no freshness
        check; otherwise orders are fetched, priced against the catalog and
        persisted before returning.
        """
        start = time.perf_counter()

        blob = await asyncio.to_thread(self.order_store.get, user_id)
        if blob is not None:
            try:
                orders = _ORDERS.validate_json(blob)
            except ValidationError as exc:
                logger.error("Stored order snapshot for %s is unreadable: %s", user_id, exc)
                raise MalformedRecordError(user_id, SHOP_ORDERS_TABLE, reason="unreadable") from exc
            if orders:
                record_cache_access("shop_orders", True)
                logger.info(
                    "fetching user orders from the order store took %.1fms", elapsed_ms(start),
                )
                return orders
        record_cache_access("shop_orders", False)

        shop = await self.shop_catalog.get_shop()
        records = await self._upstream(
            self.client.select(
                SHOP_ORDERS_TABLE,
                filter_formula=formulas.shop_orders_for_recipient(user_id),
            )
        )
        orders = [map_order(r, shop) for r in records]

        await asyncio.to_thread(
            self.order_store.upsert, user_id, _ORDERS.dump_json(orders).decode()
        )
        logger.info(
            "fetching user orders from Airtable and caching took %.1fms", elapsed_ms(start),
        )
        return orders

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def flush_caches(self, user_id: str) -> None:
        """Drop the user's unlimited ships query and profile.

        Limited ships queries expire on their own; persisted orders are
        never flushed.
        """
        self.ships_cache.delete(ships_cache_key(user_id))
        self.person_cache.delete(user_id)

    async def close(self) -> None:
        await self.client.close()


def _write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(text)


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_service_singleton: Optional[HighSeasData] = None
_service_lock = threading.Lock()


def build_data_service() -> HighSeasData:
    """Build a service from ``highseas.config``."""
    client = AirtableClient()
    store = OrderStore()
    store.init()
    return HighSeasData(
        client=client,
        order_store=store,
        shop_catalog=ShopCatalog(client),
        debug_dump_path=config.SHIPS_DEBUG_DUMP_PATH or None,
    )


def get_data_service() -> HighSeasData:
    global _service_singleton
    if _service_singleton is not None:
        return _service_singleton

    with _service_lock:
        if _service_singleton is None:
            _service_singleton = build_data_service()
        return _service_singleton


def set_data_service(service: Optional[HighSeasData]) -> None:
    """Install ``service`` as the process-wide instance (``None`` resets)."""
    global _service_singleton
    with _service_lock:
        _service_singleton = service


def reset_data_service_for_tests() -> None:
    set_data_service(None)


async def fetch_person(user_id: str) -> Optional[Person]:
    return await get_data_service().fetch_person(user_id)


async def fetch_person_by_record_id(record_id: str, user_id: str) -> Person:
    return await get_data_service().fetch_person_by_record_id(record_id, user_id)


async def fetch_ships(slack_id: str, max_records: Optional[int] = None) -> List[ShipGroup]:
    return await get_data_service().fetch_ships(slack_id, max_records)


async def get_user_shop_orders(user_id: str) -> List[Order]:
    return await get_data_service().get_user_shop_orders(user_id)


def flush_caches(user_id: str) -> None:
    get_data_service().flush_caches(user_id)

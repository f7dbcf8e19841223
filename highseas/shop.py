"""
Shop catalog provider.

Orders only reference catalog rows by id; the catalog supplies their fair
market value and picture.  The full catalog is small and changes rarely,
so it is cached as one entry.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from highseas import config
from highseas.cache_backend import TTLCache
from highseas.core.constants import SHOP_ITEMS_TABLE
from highseas.data_pipeline.airtable import AirtableClient
from highseas.data_pipeline.normalizer import map_shop_item
from highseas.domain.models import ShopItem

logger = logging.getLogger(__name__)

_CATALOG_KEY = "catalog"


class ShopCatalogProvider(Protocol):
    async def get_shop(self) -> List[ShopItem]: ...


class ShopCatalog:
    """Airtable-backed ``ShopCatalogProvider``."""

    def __init__(self, client: AirtableClient, ttl_seconds: Optional[float] = None) -> None:
        self._client = client
        self._cache: TTLCache[List[ShopItem]] = TTLCache(
            ttl_seconds or config.SHOP_CACHE_TTL_SECONDS,
            max_entries=1,
            name="shop",
        )

    async def get_shop(self) -> List[ShopItem]:
        cached = self._cache.get(_CATALOG_KEY)
        if cached is not None:
            return cached
        records = await self._client.select(SHOP_ITEMS_TABLE)
        items = [map_shop_item(r) for r in records]
        logger.info("Loaded shop catalog (%d items)", len(items))
        self._cache.set(_CATALOG_KEY, items)
        return items

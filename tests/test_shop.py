import pytest

from highseas.domain.models import RawRecord
from highseas.shop import ShopCatalog


@pytest.mark.asyncio
async def test_catalog_loaded_once_within_ttl(fake_client):
    fake_client.tables["shop_items"] = [
        RawRecord(id="recI", fields={"name": "Sticker", "fair_market_value": 2, "image_url": "https://img"}),
    ]
    catalog = ShopCatalog(fake_client, ttl_seconds=600)

    first = await catalog.get_shop()
    second = await catalog.get_shop()

    assert [i.record_id for i in first] == ["recI"]
    assert second == first
    assert fake_client.calls_for("shop_items") == 1

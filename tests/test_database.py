"""Tests for the order snapshot store."""

from sqlalchemy import inspect

from highseas.database import OrderStore, ShopOrderSnapshot, make_engine


def test_init_creates_table(order_store):
    assert "shop_orders" in inspect(order_store.engine).get_table_names()


def test_get_missing_returns_none(order_store):
    assert order_store.get("U404") is None


def test_upsert_inserts_then_replaces(order_store):
    order_store.upsert("U1", '[{"name": "Sticker"}]')
    assert order_store.get("U1") == '[{"name": "Sticker"}]'

    order_store.upsert("U1", "[]")
    assert order_store.get("U1") == "[]"

    with order_store._session() as db:
        assert db.query(ShopOrderSnapshot).count() == 1


def test_rows_are_per_user(order_store):
    order_store.upsert("U1", "[1]")
    order_store.upsert("U2", "[2]")
    assert order_store.get("U1") == "[1]"
    assert order_store.get("U2") == "[2]"


def test_file_backed_store_persists(tmp_path):
    url = f"sqlite:///{tmp_path / 'orders.db'}"
    first = OrderStore(make_engine(url))
    first.init()
    first.upsert("U1", "[]")
    first.engine.dispose()

    second = OrderStore(make_engine(url))
    assert second.get("U1") == "[]"

"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • make_ship(...)          - build a typed ``Ship``
  • ship_record(...)        - build a raw ``ships`` ``RawRecord``
  • fake_client             - in-memory stand-in for ``AirtableClient``
  • order_store             - ``OrderStore`` on in-memory SQLite
  • clock                   - steppable monotonic clock for ``TTLCache``
"""

from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

# Ensure the project root is on the path so all highseas imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from highseas.database import OrderStore, make_engine  # noqa: E402
from highseas.domain.models import RawRecord, Ship, ShopItem  # noqa: E402
from highseas.metrics import reset_metrics_for_tests  # noqa: E402

BASE_TIME = datetime(2024, 11, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Ship factories
# ---------------------------------------------------------------------------

def _ship(
    ship_id: str,
    parent: Optional[str] = None,
    title: Optional[str] = None,
    hours: float = 1.0,
    payout: float = 10.0,
    ysws: bool = False,
    minutes: int = 0,
) -> Ship:
    return Ship(
        id=ship_id,
        created_time=BASE_TIME + timedelta(minutes=minutes),
        title=title or f"Ship {ship_id}",
        credited_hours=hours,
        doubloon_payout=payout,
        is_in_ysws_base=ysws,
        reshipped_from_id=parent,
    )


@pytest.fixture
def make_ship():
    return _ship


def _ship_record(record_id: str = "recShip1", **fields) -> RawRecord:
    base = {
        "title": "Treasure map",
        "created_time": "2024-11-01T12:00:00.000Z",
        "credited_hours": 2.5,
        "doubloon_payout": 40,
        "ship_status": "shipped",
        "ship_type": "project",
    }
    base.update(fields)
    return RawRecord(id=record_id, fields=base)


@pytest.fixture
def ship_record():
    return _ship_record


# ---------------------------------------------------------------------------
# Airtable stand-in
# ---------------------------------------------------------------------------

class FakeAirtableClient:
    """Serves fixed records per table and records every call."""

    def __init__(self, tables: Optional[Dict[str, List[RawRecord]]] = None) -> None:
        self.tables: Dict[str, List[RawRecord]] = tables or {}
        self.select_calls: List[dict] = []
        self.find_calls: List[tuple] = []
        self.closed = False

    async def select(self, table, filter_formula=None, max_records=None):
        self.select_calls.append(
            {"table": table, "filter_formula": filter_formula, "max_records": max_records}
        )
        records = list(self.tables.get(table, []))
        return records[:max_records] if max_records else records

    async def find(self, table, record_id):
        self.find_calls.append((table, record_id))
        for record in self.tables.get(table, []):
            if record.id == record_id:
                return record
        raise LookupError(record_id)

    async def close(self):
        self.closed = True

    def calls_for(self, table: str) -> int:
        return sum(1 for c in self.select_calls if c["table"] == table)


@pytest.fixture
def fake_client():
    return FakeAirtableClient()


class FakeShopCatalog:
    def __init__(self, items: Optional[List[ShopItem]] = None) -> None:
        self.items = items or []
        self.calls = 0

    async def get_shop(self):
        self.calls += 1
        return list(self.items)


@pytest.fixture
def shop_catalog():
    return FakeShopCatalog()


# ---------------------------------------------------------------------------
# Persistence / time
# ---------------------------------------------------------------------------

@pytest.fixture
def order_store():
    store = OrderStore(make_engine("sqlite:///:memory:"))
    store.init()
    return store


class Clock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_metrics_for_tests()
    yield

"""
High Seas - Airtable record normalizer.

Converts ``RawRecord`` field maps into typed ``Person``, ``Ship`` and
``Order`` objects.  This is the schema boundary: a record missing a field
the rest of the layer depends on raises ``MalformedRecordError`` here
instead of leaking ``None`` into arithmetic or sorting.

Coercion rules
--------------
* ``doubloon_payout`` / ``credited_hours`` default to ``0``; every other
  missing numeric stays ``None``.
* Checkbox-style flags use truthiness.
* Link fields collapse to their first id (or ``None``).
* ``wakatime_project_name`` is split on ``WAKATIME_SEPARATOR``.
* Single-select values are passed through unvalidated.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from highseas.core.constants import DEFAULT_ORDER_DOLLAR_COST, WAKATIME_SEPARATOR
from highseas.core.utils import (
    first_link,
    link_list,
    number_or_zero,
    parse_timestamp,
    split_joined,
    truthy,
)
from highseas.domain.errors import MalformedRecordError
from highseas.domain.models import Order, Person, RawRecord, Ship, ShopItem

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

def map_person(record: RawRecord) -> Person:
    """Convert a ``people`` row into a ``Person``."""
    if not record.id:
        raise MalformedRecordError(None, "id")

    f = record.fields
    return Person(
        record_id=record.id,
        full_name=f.get("full_name"),
        email=f.get("email"),
        autonumber=f.get("autonumber"),
        vote_balance=f.get("vote_balance"),
        ships_awaiting_vote_requirement=f.get("ships_awaiting_vote_requirement"),
        total_hours_logged=f.get("total_hours_logged"),
        doubloons_balance=f.get("doubloons_balance"),
        doubloons_received=f.get("doubloons_received"),
        doubloons_spent=f.get("doubloons_spent"),
        average_doubloons_per_hour=f.get("average_doubloons_per_hour"),
        vote_count=f.get("vote_count"),
        average_vote_time=f.get("mean_vote_time"),
        real_money_spent=f.get("total_real_money_we_spent"),
    )


# ---------------------------------------------------------------------------
# Ships
# ---------------------------------------------------------------------------

def map_ship(record: RawRecord) -> Ship:
    """Convert a ``ships`` row into a ``Ship``.

    Raises
    ------
    MalformedRecordError
        If the record has no id, or ``created_time`` is missing or not an
        ISO-8601 timestamp.
    """
    if not record.id:
        raise MalformedRecordError(None, "id")

    f = record.fields
    raw_created = f.get("created_time")
    if raw_created is None:
        raise MalformedRecordError(record.id, "created_time")
    created = parse_timestamp(raw_created)
    if created is None:
        raise MalformedRecordError(record.id, "created_time", reason=f"unparseable ({raw_created!r})")

    return Ship(
        id=record.id,
        created_time=created,
        autonumber=f.get("autonumber"),
        title=f.get("title"),
        repo_url=f.get("repo_url"),
        deployment_url=f.get("deploy_url"),
        readme_url=f.get("readme_url"),
        screenshot_url=f.get("screenshot_url"),
        vote_requirement_met=truthy(f.get("vote_requirement_met")),
        vote_balance_exceeds_requirement=truthy(f.get("vote_balance_exceeds_requirement")),
        matchups_count=f.get("matchups_count"),
        doubloon_payout=number_or_zero(f.get("doubloon_payout")),
        credited_hours=number_or_zero(f.get("credited_hours")),
        hours=f.get("hours"),
        total_hours=f.get("total_hours"),
        ship_type=f.get("ship_type"),
        ship_status=f.get("ship_status"),
        ysws_type=f.get("yswsType"),
        wakatime_project_names=split_joined(f.get("wakatime_project_name"), WAKATIME_SEPARATOR),
        update_description=f.get("update_description"),
        feedback=f.get("ai_feedback_summary"),
        reshipped_from_id=first_link(f.get("reshipped_from")),
        reshipped_to_id=first_link(f.get("reshipped_to")),
        reshipped_all=link_list(f.get("reshipped_all")),
        reshipped_from_all=link_list(f.get("reshipped_from_all")),
        paid_out=truthy(f.get("paid_out")),
        is_in_ysws_base=truthy(f.get("has_ysws_submission_id")),
    )


# ---------------------------------------------------------------------------
# Shop
# ---------------------------------------------------------------------------

def map_shop_item(record: RawRecord) -> ShopItem:
    f = record.fields
    return ShopItem(
        record_id=record.id,
        name=f.get("name"),
        fair_market_value=f.get("fair_market_value"),
        image_url=f.get("image_url"),
    )


def _find_item(shop: Iterable[ShopItem], record_id: Optional[str]) -> Optional[ShopItem]:
    if record_id is None:
        return None
    return next((item for item in shop if item.record_id == record_id), None)


def map_order(record: RawRecord, shop: Iterable[ShopItem]) -> Order:
    """Convert a ``shop_orders`` row into an ``Order``.

    The catalog supplies the image and the fallback price; orders with
    neither an explicit cost nor a catalog price cost
    ``DEFAULT_ORDER_DOLLAR_COST``.
    """
    f = record.fields
    item = _find_item(shop, first_link(f.get("shop_item")))
    if item is None:
        logger.debug("order %s: no catalog item for %r", record.id, f.get("shop_item"))

    dollar_cost = (
        f.get("dollar_cost")
        or (item.fair_market_value if item else None)
        or DEFAULT_ORDER_DOLLAR_COST
    )
    return Order(
        name=first_link(f.get("shop_item:name")),
        doubloons_paid=f.get("tickets_paid"),
        dollar_cost=dollar_cost,
        image_url=item.image_url if item else None,
    )

"""Tests for the Airtable field mapper."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from highseas.data_pipeline.normalizer import map_order, map_person, map_ship, map_shop_item
from highseas.domain.errors import MalformedRecordError
from highseas.domain.models import RawRecord, ShopItem


class TestMapShip:
    def test_basic_fields(self, ship_record):
        ship = map_ship(ship_record(
            "recA",
            repo_url="https://github.com/x/y",
            deploy_url="https://x.dev",
            autonumber=7,
        ))
        assert ship.id == "recA"
        assert ship.title == "Treasure map"
        assert ship.deployment_url == "https://x.dev"
        assert ship.autonumber == 7
        assert ship.created_time == datetime(2024, 11, 1, 12, 0, tzinfo=timezone.utc)

    def test_payout_and_credited_hours_default_to_zero(self, ship_record):
        record = RawRecord(id="recB", fields={"created_time": "2024-11-01T00:00:00Z"})
        ship = map_ship(record)
        assert ship.doubloon_payout == 0
        assert ship.credited_hours == 0
        assert ship.hours is None
        assert ship.total_hours is None
        assert ship.matchups_count is None

    def test_flags_use_truthiness(self, ship_record):
        ship = map_ship(ship_record(
            vote_requirement_met=1,
            vote_balance_exceeds_requirement="",
            paid_out=True,
            has_ysws_submission_id="rec123",
        ))
        assert ship.vote_requirement_met is True
        assert ship.vote_balance_exceeds_requirement is False
        assert ship.paid_out is True
        assert ship.is_in_ysws_base is True

    def test_absent_flags_are_false(self, ship_record):
        ship = map_ship(ship_record())
        assert ship.is_in_ysws_base is False
        assert ship.paid_out is False

    def test_link_fields_reduce_to_first(self, ship_record):
        ship = map_ship(ship_record(
            reshipped_from=["recParent", "recOther"],
            reshipped_to=[],
            reshipped_all=["recA", "recB"],
        ))
        assert ship.reshipped_from_id == "recParent"
        assert ship.reshipped_to_id is None
        assert ship.reshipped_all == ["recA", "recB"]
        assert ship.reshipped_from_all is None

    def test_wakatime_names_split_and_filtered(self, ship_record):
        ship = map_ship(ship_record(
            wakatime_project_name="alpha$$xXseparatorXx$$$$xXseparatorXx$$beta$$xXseparatorXx$$",
        ))
        assert ship.wakatime_project_names == ["alpha", "beta"]

    def test_wakatime_missing_is_empty_list(self, ship_record):
        assert map_ship(ship_record()).wakatime_project_names == []

    def test_enums_pass_through_unvalidated(self, ship_record):
        ship = map_ship(ship_record(ship_type="mystery", ship_status="sunk", yswsType="unknown"))
        assert ship.ship_type == "mystery"
        assert ship.ship_status == "sunk"
        assert ship.ysws_type == "unknown"

    def test_feedback_from_ai_summary(self, ship_record):
        assert map_ship(ship_record(ai_feedback_summary="Nice")).feedback == "Nice"

    def test_missing_created_time_raises(self):
        with pytest.raises(MalformedRecordError) as exc:
            map_ship(RawRecord(id="recC", fields={"title": "x"}))
        assert exc.value.record_id == "recC"
        assert exc.value.field == "created_time"

    def test_unparseable_created_time_raises(self, ship_record):
        with pytest.raises(MalformedRecordError):
            map_ship(ship_record(created_time="yesterday"))

    def test_missing_id_raises(self):
        with pytest.raises(MalformedRecordError) as exc:
            map_ship(RawRecord(id="", fields={"created_time": "2024-11-01T00:00:00Z"}))
        assert exc.value.field == "id"


class TestMapPerson:
    def test_renamed_fields(self):
        person = map_person(RawRecord(id="recP", fields={
            "full_name": "Ada Lovelace",
            "email": "ada@example.com",
            "autonumber": 42,
            "vote_balance": 3,
            "mean_vote_time": 12.5,
            "total_real_money_we_spent": 8.75,
            "doubloons_balance": 120,
        }))
        assert person.record_id == "recP"
        assert person.full_name == "Ada Lovelace"
        assert person.average_vote_time == 12.5
        assert person.real_money_spent == 8.75
        assert person.doubloons_balance == 120

    def test_missing_numerics_are_none(self):
        person = map_person(RawRecord(id="recP", fields={}))
        assert person.vote_balance is None
        assert person.total_hours_logged is None

    def test_missing_id_raises(self):
        with pytest.raises(MalformedRecordError):
            map_person(RawRecord(id="", fields={}))


class TestMapOrder:
    SHOP = [
        ShopItem(record_id="recItem1", name="Sticker", fair_market_value=3.0, image_url="https://img/1"),
        ShopItem(record_id="recItem2", name="Mug", fair_market_value=None, image_url=None),
    ]

    def _order(self, **fields):
        base = {"shop_item": ["recItem1"], "shop_item:name": ["Sticker"], "tickets_paid": 20}
        base.update(fields)
        return RawRecord(id="recO", fields=base)

    def test_explicit_cost_wins(self):
        order = map_order(self._order(dollar_cost=9.5), self.SHOP)
        assert order.dollar_cost == 9.5
        assert order.name == "Sticker"
        assert order.doubloons_paid == 20
        assert order.image_url == "https://img/1"

    def test_catalog_value_used_when_no_cost(self):
        assert map_order(self._order(), self.SHOP).dollar_cost == 3.0

    def test_default_cost_when_nothing_known(self):
        order = map_order(self._order(shop_item=["recItem2"]), self.SHOP)
        assert order.dollar_cost == 0.5
        assert order.image_url is None

    def test_unknown_item_falls_back(self):
        order = map_order(self._order(shop_item=["recMissing"]), self.SHOP)
        assert order.dollar_cost == 0.5
        assert order.image_url is None


def test_map_shop_item():
    item = map_shop_item(RawRecord(id="recI", fields={
        "name": "Hoodie", "fair_market_value": 30, "image_url": "https://img/h",
    }))
    assert item.record_id == "recI"
    assert item.fair_market_value == 30

"""
highseas.domain.models - Canonical dataclass / Pydantic models.

These are the single source of truth for data flowing out of the data
layer.  Raw Airtable payloads are wrapped in ``RawRecord`` and only turned
into the typed entities below by ``highseas.data_pipeline.normalizer``.

Import pattern::

    from highseas.domain.models import Person, Ship, ShipGroup, Order
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Raw Airtable record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawRecord:
    """One row as returned by the Airtable REST API."""
    id:           str
    fields:       Mapping[str, Any] = field(default_factory=dict)
    created_time: Optional[str] = None      # Airtable's own row timestamp

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "RawRecord":
        return cls(
            id=payload.get("id", ""),
            fields=payload.get("fields") or {},
            created_time=payload.get("createdTime"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "fields": dict(self.fields), "createdTime": self.created_time}


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Person:
    """
    Profile snapshot from the ``people`` table.

    Numeric stats are Airtable formula/rollup fields; any of them may be
    ``None`` when the cell is empty.
    """
    record_id: str
    full_name: Optional[str] = None
    email:     Optional[str] = None
    autonumber: Optional[int] = None

    vote_balance:                    Optional[float] = None
    ships_awaiting_vote_requirement: Optional[int]   = None
    total_hours_logged:              Optional[float] = None
    doubloons_balance:               Optional[float] = None
    doubloons_received:              Optional[float] = None
    doubloons_spent:                 Optional[float] = None
    average_doubloons_per_hour:      Optional[float] = None
    vote_count:                      Optional[int]   = None
    average_vote_time:               Optional[float] = None
    real_money_spent:                Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


# ---------------------------------------------------------------------------
# Ships
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ship:
    """
    A single submission record from the ``ships`` table.

    ``reshipped_from_id`` points at the ship this one revises; following it
    repeatedly leads to the root of the lineage.  ``ship_type``,
    ``ship_status`` and ``ysws_type`` are passed through as raw strings.
    """
    id:           str
    created_time: datetime

    autonumber:     Optional[int] = None
    title:          Optional[str] = None
    repo_url:       Optional[str] = None
    deployment_url: Optional[str] = None
    readme_url:     Optional[str] = None
    screenshot_url: Optional[str] = None

    vote_requirement_met:             bool = False
    vote_balance_exceeds_requirement: bool = False
    matchups_count:                   Optional[int] = None

    doubloon_payout: float = 0
    credited_hours:  float = 0
    hours:           Optional[float] = None
    total_hours:     Optional[float] = None

    ship_type:   Optional[str] = None
    ship_status: Optional[str] = None
    ysws_type:   Optional[str] = None

    wakatime_project_names: List[str] = field(default_factory=list)
    update_description:     Optional[str] = None
    feedback:               Optional[str] = None

    reshipped_from_id:  Optional[str] = None
    reshipped_to_id:    Optional[str] = None
    reshipped_all:      Optional[List[str]] = None
    reshipped_from_all: Optional[List[str]] = None

    paid_out:        bool = False
    is_in_ysws_base: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d = dataclasses.asdict(self)
        d["created_time"] = self.created_time.isoformat()
        return d


@dataclass
class ShipGroup:
    """
    Aggregate over one lineage chain: a root ship plus every ship that
    reshipped from it, directly or transitively.

    ``created`` is the root's timestamp and never changes; ``title`` and
    ``is_in_ysws_base`` follow the most recently folded ship.
    """
    title:           Optional[str]
    created:         datetime
    total_doubloons: float = 0
    total_hours:     float = 0
    is_in_ysws_base: bool = False
    ships:           List[Ship] = field(default_factory=list)

    @property
    def root(self) -> Ship:
        return self.ships[0]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain dict for JSON responses / debug dumps."""
        return {
            "title": self.title,
            "created": self.created.isoformat(),
            "total_doubloons": self.total_doubloons,
            "total_hours": self.total_hours,
            "is_in_ysws_base": self.is_in_ysws_base,
            "ships": [s.to_dict() for s in self.ships],
        }


# ---------------------------------------------------------------------------
# Shop
# ---------------------------------------------------------------------------

class ShopItem(BaseModel):
    """Catalog entry used to resolve an order's price and picture."""
    model_config = ConfigDict(frozen=True)

    record_id:         str
    name:              Optional[str]   = None
    fair_market_value: Optional[float] = None
    image_url:         Optional[str]   = None


class Order(BaseModel):
    """
    Purchased shop item snapshot.  Persisted verbatim per user as a JSON
    array, so field names here are the on-disk format.
    """
    model_config = ConfigDict(frozen=True)

    name:           Optional[str] = None
    doubloons_paid: Optional[float] = None
    dollar_cost:    float
    image_url:      Optional[str] = Field(default=None)

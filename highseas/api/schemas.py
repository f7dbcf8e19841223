"""
Pydantic response schemas for the /api endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from highseas.domain.models import Order, Person, Ship, ShipGroup


class PersonResponse(BaseModel):
    record_id:  str
    full_name:  Optional[str] = None
    email:      Optional[str] = None
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

    @classmethod
    def from_person(cls, person: Person) -> "PersonResponse":
        return cls(**person.to_dict())


class ShipResponse(BaseModel):
    id:             str
    created_time:   datetime
    autonumber:     Optional[int] = None
    title:          Optional[str] = None
    repo_url:       Optional[str] = None
    deployment_url: Optional[str] = None
    readme_url:     Optional[str] = None
    screenshot_url: Optional[str] = None
    ship_type:      Optional[str] = None
    ship_status:    Optional[str] = None
    ysws_type:      Optional[str] = None
    doubloon_payout: float = 0
    credited_hours:  float = 0
    hours:           Optional[float] = None
    total_hours:     Optional[float] = None
    matchups_count:  Optional[int] = None
    vote_requirement_met:             bool = False
    vote_balance_exceeds_requirement: bool = False
    wakatime_project_names: List[str] = Field(default_factory=list)
    update_description: Optional[str] = None
    feedback:           Optional[str] = None
    reshipped_from_id:  Optional[str] = None
    reshipped_to_id:    Optional[str] = None
    reshipped_all:      Optional[List[str]] = None
    reshipped_from_all: Optional[List[str]] = None
    paid_out:        bool = False
    is_in_ysws_base: bool = False

    @classmethod
    def from_ship(cls, ship: Ship) -> "ShipResponse":
        return cls.model_validate(ship, from_attributes=True)


class ShipGroupResponse(BaseModel):
    title:           Optional[str]
    created:         datetime
    total_doubloons: float
    total_hours:     float
    is_in_ysws_base: bool
    ships:           List[ShipResponse]

    @classmethod
    def from_group(cls, group: ShipGroup) -> "ShipGroupResponse":
        return cls(
            title=group.title,
            created=group.created,
            total_doubloons=group.total_doubloons,
            total_hours=group.total_hours,
            is_in_ysws_base=group.is_in_ysws_base,
            ships=[ShipResponse.from_ship(s) for s in group.ships],
        )


class OrdersResponse(BaseModel):
    user_id: str
    orders:  List[Order]


class FlushResponse(BaseModel):
    user_id: str
    flushed: bool = True


class HealthResponse(BaseModel):
    status:  str
    metrics: Dict[str, Any]

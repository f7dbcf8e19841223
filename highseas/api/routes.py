"""
Read endpoints over the data layer.

Routes:
    GET  /api/people/{slack_id}                      - profile (404 if none)
    GET  /api/people/{slack_id}/record/{record_id}   - profile by record id
    GET  /api/ships/{slack_id}?max_records=N         - ship groups, newest first
    GET  /api/shop/orders/{slack_id}                 - purchased shop items
    POST /api/cache/flush/{slack_id}                 - drop cached ships/profile
    GET  /api/health                                 - status + cache metrics
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from highseas.api.schemas import (
    FlushResponse,
    HealthResponse,
    OrdersResponse,
    PersonResponse,
    ShipGroupResponse,
)
from highseas.data import get_data_service
from highseas.metrics import metrics_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["highseas"])


@router.get("/people/{slack_id}", response_model=PersonResponse)
async def get_person(slack_id: str) -> PersonResponse:
    person = await get_data_service().fetch_person(slack_id)
    if person is None:
        raise HTTPException(status_code=404, detail=f"No person with slack id {slack_id}")
    return PersonResponse.from_person(person)


@router.get("/people/{slack_id}/record/{record_id}", response_model=PersonResponse)
async def get_person_by_record(slack_id: str, record_id: str) -> PersonResponse:
    person = await get_data_service().fetch_person_by_record_id(record_id, slack_id)
    return PersonResponse.from_person(person)


@router.get("/ships/{slack_id}", response_model=List[ShipGroupResponse])
async def get_ships(
    slack_id: str,
    max_records: Optional[int] = Query(default=None, ge=1, le=1000),
) -> List[ShipGroupResponse]:
    groups = await get_data_service().fetch_ships(slack_id, max_records)
    return [ShipGroupResponse.from_group(g) for g in groups]


@router.get("/shop/orders/{slack_id}", response_model=OrdersResponse)
async def get_shop_orders(slack_id: str) -> OrdersResponse:
    orders = await get_data_service().get_user_shop_orders(slack_id)
    return OrdersResponse(user_id=slack_id, orders=orders)


@router.post("/cache/flush/{slack_id}", response_model=FlushResponse)
async def flush_user_caches(slack_id: str) -> FlushResponse:
    get_data_service().flush_caches(slack_id)
    logger.info("Flushed caches for %s", slack_id)
    return FlushResponse(user_id=slack_id)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", metrics=metrics_snapshot())

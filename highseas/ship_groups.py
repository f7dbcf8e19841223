"""
High Seas - ship lineage grouping.

A reship points at the ship it revises through ``reshipped_from_id``, so
the ships of one user form a forest.  ``group_ships`` collapses every tree
into a single ``ShipGroup`` with summed hours and doubloons.

Resolution runs in two passes so group membership and totals do not
depend on the order Airtable returns records in:

1. seed one group per root ship;
2. walk each reship up to its root, then fold it into that root's
   group in input order.

Ships whose parent is not in the input (deleted or filtered upstream) are
dropped.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Dict, List, Optional, Sequence

from highseas.core.constants import YSWS_BONUS_MULTIPLIER
from highseas.domain.models import Ship, ShipGroup

logger = logging.getLogger(__name__)


def new_group(ship: Ship) -> ShipGroup:
    """Seed a group from its root ship."""
    return ShipGroup(
        title=ship.title,
        created=ship.created_time,
        total_doubloons=ship.doubloon_payout or 0,
        total_hours=ship.credited_hours or 0,
        is_in_ysws_base=ship.is_in_ysws_base,
        ships=[ship],
    )


def fold_into(group: ShipGroup, ship: Ship) -> None:
    """Add a reship to ``group``; ``created`` stays the root's."""
    group.total_hours += ship.credited_hours or 0
    group.total_doubloons += ship.doubloon_payout or 0
    group.title = ship.title
    group.is_in_ysws_base = ship.is_in_ysws_base
    group.ships.append(ship)


def apply_ysws_bonus(group: ShipGroup) -> ShipGroup:
    """Return a copy of ``group`` with the YSWS payout bonus applied."""
    if not group.is_in_ysws_base:
        return dataclasses.replace(group, ships=list(group.ships))
    return dataclasses.replace(
        group,
        total_doubloons=group.total_doubloons * YSWS_BONUS_MULTIPLIER,
        ships=list(group.ships),
    )


def _root_resolver(ships: Sequence[Ship]) -> Callable[[str], Optional[str]]:
    """Return a lookup from ship id to the id of its lineage root.

    The lookup yields ``None`` when the chain leaves the input or loops
    back on itself.  Every id visited along a walk is memoised.
    """
    parent_of: Dict[str, Optional[str]] = {s.id: s.reshipped_from_id for s in ships}
    root_of: Dict[str, Optional[str]] = {}

    def resolve(ship_id: str) -> Optional[str]:
        path: List[str] = []
        seen = set()
        current = ship_id
        root: Optional[str] = None
        while True:
            if current in root_of:
                root = root_of[current]
                break
            if current not in parent_of or current in seen:
                break
            seen.add(current)
            path.append(current)
            parent = parent_of[current]
            if not parent:
                root = current
                break
            current = parent
        for visited in path:
            root_of[visited] = root
        return root

    return resolve


def build_groups(ships: Sequence[Ship]) -> List[ShipGroup]:
    """Resolve lineages into raw (pre-bonus, unsorted) groups.

    Groups come out in the input order of their roots; reships are folded
    in input order.
    """
    groups: List[ShipGroup] = []
    by_root: Dict[str, ShipGroup] = {}
    for ship in ships:
        if not ship.reshipped_from_id:
            group = new_group(ship)
            by_root[ship.id] = group
            groups.append(group)

    root_of = _root_resolver(ships)
    dropped: List[str] = []
    for ship in ships:
        if not ship.reshipped_from_id:
            continue
        root = root_of(ship.id)
        if root is None:
            dropped.append(ship.id)
            continue
        fold_into(by_root[root], ship)

    if dropped:
        logger.debug("Dropping %d ship(s) with no root in the input: %s", len(dropped), dropped)

    return groups


def group_ships(ships: Sequence[Ship]) -> List[ShipGroup]:
    """Group ``ships`` by lineage, apply the YSWS bonus, newest first."""
    groups = [apply_ysws_bonus(g) for g in build_groups(ships)]
    groups.sort(key=lambda g: g.created, reverse=True)
    return groups

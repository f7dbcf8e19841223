"""
High Seas - Airtable ``filterByFormula`` builders.

Identifiers come from the request (Slack ids), so every interpolated value
goes through ``quote()``.  Airtable string literals accept backslash
escapes for the quote character and for backslash itself.
"""

from __future__ import annotations

from highseas.core.constants import PROJECT_SOURCE, SHOP_ORDERS_CUTOFF
from highseas.domain.enums import OrderStatus, ShipStatus

_SQ = "'"


def quote(value: str, quote_char: str = '"') -> str:
    """Return ``value`` as an Airtable string literal."""
    if quote_char not in ("'", '"'):
        raise ValueError(f"unsupported quote character: {quote_char!r}")
    escaped = str(value).replace("\\", "\\\\").replace(quote_char, "\\" + quote_char)
    return f"{quote_char}{escaped}{quote_char}"


def person_by_slack_id(slack_id: str) -> str:
    return f"{{slack_id}} = {quote(slack_id)}"


def ships_for_entrant(slack_id: str) -> str:
    """High Seas ships owned by ``slack_id``, excluding soft-deleted ones."""
    return (
        "AND("
        f"{quote(slack_id, _SQ)} = {{entrant__slack_id}}, "
        f"{{project_source}} = {quote(PROJECT_SOURCE, _SQ)}, "
        f"{{ship_status}} != {quote(ShipStatus.DELETED.value, _SQ)}"
        ")"
    )


def shop_orders_for_recipient(slack_id: str, cutoff: str = SHOP_ORDERS_CUTOFF) -> str:
    """Non-rejected orders for ``slack_id`` created after ``cutoff``."""
    return (
        "AND("
        f"{{recipient:slack_id}} = {quote(slack_id)}, "
        f"{{status}} != {quote(OrderStatus.REJECTED.value)}, "
        f"{{created_at}} > {quote(cutoff)}"
        ")"
    )

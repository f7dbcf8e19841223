"""
High Seas - Shared utilities.

Pure helpers for coercing untyped Airtable field values.  No imports from
other highseas modules.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional


# ---------------------------------------------------------------------------
# Link fields
# ---------------------------------------------------------------------------

def first_link(value: Any) -> Optional[str]:
    """Return the first id of a linked-record field, or ``None``.

    Airtable returns links as a list of record ids; lookups of a single
    linked field come back the same way.
    """
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return None


def link_list(value: Any) -> Optional[List[str]]:
    """Return a linked-record field as a list, or ``None`` when absent."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def truthy(value: Any) -> bool:
    """Airtable omits unchecked checkboxes and empty cells entirely."""
    return bool(value)


def number_or_zero(value: Any) -> float:
    """Numeric field used in arithmetic; missing or blank becomes ``0``."""
    return value or 0


def split_joined(value: Any, separator: str) -> List[str]:
    """Split a delimiter-joined string, dropping empty segments."""
    if not value:
        return []
    return [part for part in str(value).split(separator) if part]


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an Airtable ISO-8601 timestamp into an aware ``datetime``.

    Returns ``None`` for missing or unparseable values.  Naive timestamps
    are assumed to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

"""
High Seas - System-wide constants.

Every magic number lives here. If you find a literal in the codebase that is
not a local variable, it belongs here instead.
"""

# ---------------------------------------------------------------------------
# Airtable tables
# ---------------------------------------------------------------------------

PEOPLE_TABLE: str = "people"
SHIPS_TABLE: str = "ships"
SHOP_ORDERS_TABLE: str = "shop_orders"
SHOP_ITEMS_TABLE: str = "shop_items"

# Airtable caps a single page at 100 records.
AIRTABLE_PAGE_SIZE: int = 100

# Retry configuration for HTTP 429 (Airtable allows 5 req/s per base)
AIRTABLE_MAX_RETRIES: int = 4
AIRTABLE_RETRY_BACKOFF_BASE: float = 2.0   # 2 s, 4 s, 8 s, 16 s

# ---------------------------------------------------------------------------
# Ships
# ---------------------------------------------------------------------------

# Only ships submitted through High Seas are shown.
PROJECT_SOURCE: str = "high_seas"

# wakatime_project_name is stored as one string joined on this token.
WAKATIME_SEPARATOR: str = "$$xXseparatorXx$$"

# Payout bonus for ship groups that landed in the YSWS base.
YSWS_BONUS_MULTIPLIER: float = 1.1

# Cache-key suffix used when no max_records limit is given.
ALL_RECORDS_KEY: str = "all"

# ---------------------------------------------------------------------------
# Shop orders
# ---------------------------------------------------------------------------

# Orders created before this instant belong to a previous event.
SHOP_ORDERS_CUTOFF: str = "2024-10-30T12:00:00.000Z"

# Dollar cost used when an order has no explicit cost and no catalog match.
DEFAULT_ORDER_DOLLAR_COST: float = 0.5

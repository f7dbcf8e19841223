"""
Centralized configuration for the High Seas data layer.
All settings come from environment variables for 12-factor deployment.
"""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# Airtable
# ---------------------------------------------------------------------------
AIRTABLE_API_KEY = os.environ.get("AIRTABLE_API_KEY", "")
AIRTABLE_BASE_ID = os.environ.get("AIRTABLE_BASE_ID", "")
AIRTABLE_API_URL = os.environ.get("AIRTABLE_API_URL", "https://api.airtable.com/v0").rstrip("/")
AIRTABLE_TIMEOUT_SECONDS = float(os.environ.get("AIRTABLE_TIMEOUT_SECONDS", "15"))

# ---------------------------------------------------------------------------
# Persistent order snapshots (SQLAlchemy URL)
# ---------------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATABASE_URL = os.environ.get(
    "DATABASE_URL",
    f"sqlite:///{os.path.join(BASE_DIR, 'highseas.db')}",
)

# ---------------------------------------------------------------------------
# In-memory caches
# ---------------------------------------------------------------------------
SHIPS_CACHE_TTL_SECONDS = int(os.environ.get("SHIPS_CACHE_TTL_SECONDS", "300"))
SHIPS_CACHE_MAX_ENTRIES = int(os.environ.get("SHIPS_CACHE_MAX_ENTRIES", "1000"))
PERSON_CACHE_TTL_SECONDS = int(os.environ.get("PERSON_CACHE_TTL_SECONDS", "240"))
PERSON_CACHE_MAX_ENTRIES = int(os.environ.get("PERSON_CACHE_MAX_ENTRIES", "1000"))
SHOP_CACHE_TTL_SECONDS = int(os.environ.get("SHOP_CACHE_TTL_SECONDS", "600"))

# When set, raw ship records (on fetch) and cached ship groups (on hit) are
# written to this path as JSON for local debugging.
SHIPS_DEBUG_DUMP_PATH = os.environ.get("SHIPS_DEBUG_DUMP_PATH", "").strip()

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
PORT = int(os.environ.get("PORT", "8001"))
CORS_ORIGINS = [
    s.strip()
    for s in os.environ.get("CORS_ORIGINS", "*").split(",")
    if s.strip()
]
EXPOSE_TRACEBACKS = _env_bool("EXPOSE_TRACEBACKS", False)

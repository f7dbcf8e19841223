"""
SQL persistence for shop-order snapshots.

One row per user holding the JSON-serialised order list.  The query layer
treats a stored snapshot as final, so this table is only ever written on a
cache miss.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from highseas import config

Base = declarative_base()


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class ShopOrderSnapshot(Base):
    """Serialized ``List[Order]`` for one Slack user."""
    __tablename__ = "shop_orders"

    user_id = Column(String(64), primary_key=True)
    json = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def make_engine(url: Optional[str] = None) -> Engine:
    """Create an engine for ``url`` (defaults to ``config.DATABASE_URL``)."""
    url = url or config.DATABASE_URL
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    return engine


def init_db(engine: Engine) -> None:
    """Create all tables if they don't exist."""
    Base.metadata.create_all(bind=engine)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class OrderStore:
    """Key/value access to ``shop_orders`` keyed by user id."""

    def __init__(self, engine: Optional[Engine] = None) -> None:
        self.engine = engine or make_engine()
        self._sessions = sessionmaker(bind=self.engine, autoflush=False)

    def init(self) -> None:
        init_db(self.engine)

    def _session(self) -> Session:
        return self._sessions()

    def get(self, user_id: str) -> Optional[str]:
        """Return the stored JSON blob for ``user_id``, if any."""
        with self._session() as db:
            row = db.get(ShopOrderSnapshot, user_id)
            return row.json if row else None

    def upsert(self, user_id: str, blob: str) -> None:
        """Insert the snapshot, replacing any existing row for the user."""
        with self._session() as db:
            row = db.get(ShopOrderSnapshot, user_id)
            if row:
                row.json = blob
                row.updated_at = datetime.utcnow()
            else:
                db.add(ShopOrderSnapshot(user_id=user_id, json=blob))
            db.commit()

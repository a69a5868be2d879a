"""RegistrySnapshot ORM — the persisted copy of the in-memory ProductStore.

Invariants:
    - At most one row, id == CURRENT_SNAPSHOT_ID; each committed mutation
      overwrites it in place
    - ledger_height is the block the last mutation landed in
    - operation names the mutation that produced the stored state

Design Decisions:
    - JSON column for the whole store: written and read as a unit
      (core/product_store_snapshot.py owns the format)
    - Overwrite over append: the ledger keeps the history, this table only
      has to survive a restart, and fee_transfers logs the money movement
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from product_registry.db.base import Base

CURRENT_SNAPSHOT_ID: int = 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RegistrySnapshot(Base):
    """Current registry state."""
    __tablename__ = "registry_snapshots"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True,
    )
    operation: Mapped[str] = mapped_column(String(50), nullable=False)
    ledger_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
    state: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

"""FeeTransferRecord ORM — log of creation fees moved to the treasury.

Invariants:
    - Every accepted creation with a fee transfer has exactly one row
    - product_id links the fee to the product it paid for

Design Decisions:
    - Logging table, not accounting: balances belong to the treasury service
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from product_registry.db.base import Base


class FeeTransferRecord(Base):
    """One creation-fee transfer."""
    __tablename__ = "fee_transfers"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    product_id: Mapped[int | None] = mapped_column(
        BigInteger, nullable=True, index=True,
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    sender: Mapped[str] = mapped_column(String(128), nullable=False)
    recipient: Mapped[str] = mapped_column(String(128), nullable=False)
    ledger_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

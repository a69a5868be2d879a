"""Registry schema — registry_snapshots, fee_transfers.

Revision ID: 001_registry_schema
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_registry_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _pk_type():
    # SQLite only autoincrements INTEGER PRIMARY KEY
    return sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "registry_snapshots",
        sa.Column("id", _pk_type(), primary_key=True),
        sa.Column("operation", sa.String(50), nullable=False),
        sa.Column("ledger_height", sa.BigInteger, nullable=False),
        sa.Column("state", sa.JSON, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "fee_transfers",
        sa.Column("id", _pk_type(), primary_key=True, autoincrement=True),
        sa.Column("product_id", sa.BigInteger, nullable=True),
        sa.Column("amount", sa.BigInteger, nullable=False),
        sa.Column("sender", sa.String(128), nullable=False),
        sa.Column("recipient", sa.String(128), nullable=False),
        sa.Column("ledger_height", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_fee_transfers_product_id", "fee_transfers", ["product_id"])


def downgrade() -> None:
    op.drop_index("ix_fee_transfers_product_id", table_name="fee_transfers")
    op.drop_table("fee_transfers")
    op.drop_table("registry_snapshots")

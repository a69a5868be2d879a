"""ORM Models — SQLAlchemy declarative models for registry persistence.

Invariants:
    - All models inherit from Base (db/base.py)
    - The in-memory ProductStore is authoritative; tables hold snapshots and logs

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from product_registry.models.registry_snapshot import RegistrySnapshot  # noqa: F401
from product_registry.models.fee_transfer import FeeTransferRecord  # noqa: F401

"""Domain Types — rich types that replace bare primitives across the registry.

Invariants:
    - ProductId, CertId, LedgerHeight wrap int; Identity wraps str
    - Role and Currency encode every valid value — no raw string matching
    - Field bounds are defined here once and read by validate_fields.py

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)
ProductId = NewType("ProductId", int)
CertId = NewType("CertId", int)


# ─── Value Types ─────────────────────────────────────────────────

LedgerHeight = NewType("LedgerHeight", int)     # monotonic, >= 0
Amount = NewType("Amount", int)                 # fee units, >= 0


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Roles the registry recognizes. Anything else fails authorization."""
    ADMIN = "admin"
    SUPPLIER = "supplier"
    CERTIFIER = "certifier"


class Currency(str, Enum):
    """Accepted pricing currencies. Exact, case-sensitive match."""
    STX = "STX"
    USD = "USD"
    BTC = "BTC"


class ProductStatus(str, Enum):
    """Product lifecycle. DEACTIVATED is terminal."""
    ACTIVE = "active"
    DEACTIVATED = "deactivated"


# ─── Field Bounds ────────────────────────────────────────────────

SPECIES_MAX_LENGTH: int = 50
ORIGIN_MAX_LENGTH: int = 100
DESCRIPTION_MAX_LENGTH: int = 500
LOCATION_MAX_LENGTH: int = 100
IMAGE_URL_MAX_LENGTH: int = 200
MAX_IMAGES_PER_PRODUCT: int = 10


# ─── Registry Defaults ───────────────────────────────────────────

FIRST_PRODUCT_ID: int = 1
DEFAULT_MAX_PRODUCTS: int = 100_000
DEFAULT_CREATION_FEE: int = 1000
CREATOR_INDEX_CAPACITY: int = 100

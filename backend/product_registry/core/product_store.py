"""Product Store — in-memory authoritative state of the registry.

Invariants:
    - Product ids are issued from next_product_id, starting at 1, never reused
    - next_product_id strictly exceeds every issued id
    - creator, harvest_date, images, created_at never change after insert
    - status only moves True -> False; cert_id only moves None -> int
    - updates holds ONE record per product: the most recent edit
    - Mutators assume the caller already ran every check (see services/)

Design Decisions:
    - Explicit store object injected into the operations API, not module globals
    - Frozen Product + dataclasses.replace: immutable fields cannot be assigned
      by accident, each mutation swaps in a new record
    - Single-slot update map is a last-write-only audit trail; a full history
      would key on (product_id, sequence) instead
"""

from dataclasses import dataclass, field, replace

from product_registry.core.creator_index import CreatorIndex
from product_registry.core.domain_types import (
    Amount,
    CertId,
    DEFAULT_CREATION_FEE,
    DEFAULT_MAX_PRODUCTS,
    FIRST_PRODUCT_ID,
    Identity,
    LedgerHeight,
    ProductId,
    ProductStatus,
)


@dataclass(frozen=True)
class Product:
    """One provenance record."""
    species: str
    origin: str
    harvest_date: int
    weight: int
    description: str
    location: str
    currency: str
    creator: Identity
    images: tuple[str, ...]
    created_at: LedgerHeight
    status: bool = True
    cert_id: CertId | None = None

    @property
    def lifecycle(self) -> ProductStatus:
        return ProductStatus.ACTIVE if self.status else ProductStatus.DEACTIVATED


@dataclass(frozen=True)
class ProductUpdate:
    """Most recent edit of a product. Overwritten by the next edit."""
    updated_species: str
    updated_origin: str
    updated_weight: int
    updated_description: str
    updated_location: str
    updated_currency: str
    updated_at: LedgerHeight
    updater: Identity


@dataclass
class ProductStore:
    """Product map, creator index, update slots and registry configuration."""

    products: dict[ProductId, Product] = field(default_factory=dict)
    updates: dict[ProductId, ProductUpdate] = field(default_factory=dict)
    creator_index: CreatorIndex = field(default_factory=CreatorIndex)

    next_product_id: int = FIRST_PRODUCT_ID
    max_products: int = DEFAULT_MAX_PRODUCTS
    creation_fee: int = DEFAULT_CREATION_FEE

    # --- Queries -----------------------------------------------------------

    @property
    def has_capacity(self) -> bool:
        """Strict: next_product_id must stay below max_products."""
        return self.next_product_id < self.max_products

    def get(self, product_id: ProductId) -> Product | None:
        return self.products.get(product_id)

    def get_update(self, product_id: ProductId) -> ProductUpdate | None:
        return self.updates.get(product_id)

    def ids_by_creator(self, creator: Identity) -> list[ProductId]:
        return self.creator_index.ids_for(creator)

    # --- Mutators ----------------------------------------------------------

    def insert_product(
        self,
        *,
        creator: Identity,
        species: str,
        origin: str,
        harvest_date: int,
        weight: int,
        description: str,
        location: str,
        currency: str,
        images: list[str],
        created_at: LedgerHeight,
    ) -> ProductId:
        """Store a new active product, index it, and advance the id counter."""
        product_id = ProductId(self.next_product_id)
        self.creator_index.append(creator, product_id)
        self.products[product_id] = Product(
            species=species,
            origin=origin,
            harvest_date=harvest_date,
            weight=weight,
            description=description,
            location=location,
            currency=currency,
            creator=creator,
            images=tuple(images),
            created_at=created_at,
        )
        self.next_product_id += 1
        return product_id

    def apply_update(
        self,
        product_id: ProductId,
        *,
        species: str,
        origin: str,
        weight: int,
        description: str,
        location: str,
        currency: str,
        updater: Identity,
        updated_at: LedgerHeight,
    ) -> None:
        """Overwrite mutable fields and replace the update slot."""
        self.products[product_id] = replace(
            self.products[product_id],
            species=species,
            origin=origin,
            weight=weight,
            description=description,
            location=location,
            currency=currency,
        )
        self.updates[product_id] = ProductUpdate(
            updated_species=species,
            updated_origin=origin,
            updated_weight=weight,
            updated_description=description,
            updated_location=location,
            updated_currency=currency,
            updated_at=updated_at,
            updater=updater,
        )

    def set_certification(self, product_id: ProductId, cert_id: CertId) -> None:
        self.products[product_id] = replace(
            self.products[product_id], cert_id=cert_id,
        )

    def deactivate(self, product_id: ProductId) -> None:
        self.products[product_id] = replace(
            self.products[product_id], status=False,
        )

    def set_max_products(self, new_max: int) -> None:
        self.max_products = new_max

    def set_creation_fee(self, new_fee: Amount) -> None:
        self.creation_fee = new_fee

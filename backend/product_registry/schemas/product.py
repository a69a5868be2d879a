"""Product Schemas — Pydantic request/response models for the registry API.

Invariants:
    - Request models check TYPES only (strict ints, strings, lists); range and
      length rules stay in core/validate_fields.py so HTTP callers get the
      same registry error codes as in-process callers
    - Response models are built from core dataclasses via from_domain()

Design Decisions:
    - StrictInt for numeric fields: "500" must not silently become 500, and
      bool must not pass as int
    - No numeric bounds on product fields: a negative weight must come back
      as INVALID_WEIGHT, exactly as it does in-process
"""

from pydantic import BaseModel, Field, StrictInt, StrictStr

from product_registry.core.domain_types import ProductStatus
from product_registry.core.product_store import Product, ProductUpdate


class ProductCreate(BaseModel):
    """Body of POST /products."""
    species: StrictStr
    origin: StrictStr
    harvest_date: StrictInt
    weight: StrictInt
    description: StrictStr = ""
    location: StrictStr
    currency: StrictStr
    images: list[StrictStr] = Field(default_factory=list)


class ProductEdit(BaseModel):
    """Body of PUT /products/{id} — only the mutable fields."""
    species: StrictStr
    origin: StrictStr
    weight: StrictInt
    description: StrictStr = ""
    location: StrictStr
    currency: StrictStr


class CertificationLink(BaseModel):
    cert_id: StrictInt = Field(ge=0)


class MaxProductsUpdate(BaseModel):
    # Zero/negative reach the registry so it can answer INVALID_UPDATE_PARAM
    new_max: StrictInt


class CreationFeeUpdate(BaseModel):
    new_fee: StrictInt


class ProductCreated(BaseModel):
    product_id: int


class OperationAccepted(BaseModel):
    ok: bool = True
    ledger_height: int


class ProductResponse(BaseModel):
    product_id: int
    species: str
    origin: str
    harvest_date: int
    weight: int
    description: str
    location: str
    currency: str
    status: bool
    lifecycle: ProductStatus
    creator: str
    cert_id: int | None
    images: list[str]
    created_at: int

    @classmethod
    def from_domain(cls, product_id: int, product: Product) -> "ProductResponse":
        return cls(
            product_id=product_id,
            species=product.species,
            origin=product.origin,
            harvest_date=product.harvest_date,
            weight=product.weight,
            description=product.description,
            location=product.location,
            currency=product.currency,
            status=product.status,
            lifecycle=product.lifecycle,
            creator=product.creator,
            cert_id=product.cert_id,
            images=list(product.images),
            created_at=product.created_at,
        )


class ProductUpdateResponse(BaseModel):
    product_id: int
    updated_species: str
    updated_origin: str
    updated_weight: int
    updated_description: str
    updated_location: str
    updated_currency: str
    updated_at: int
    updater: str

    @classmethod
    def from_domain(
        cls, product_id: int, update: ProductUpdate,
    ) -> "ProductUpdateResponse":
        return cls(
            product_id=product_id,
            updated_species=update.updated_species,
            updated_origin=update.updated_origin,
            updated_weight=update.updated_weight,
            updated_description=update.updated_description,
            updated_location=update.updated_location,
            updated_currency=update.updated_currency,
            updated_at=update.updated_at,
            updater=update.updater,
        )


class CreatorProducts(BaseModel):
    creator: str
    product_ids: list[int]


class ProductCount(BaseModel):
    count: int

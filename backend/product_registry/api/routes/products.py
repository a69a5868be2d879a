"""Product Routes — create, edit, certify, deactivate and read products.

Invariants:
    - Mutations go through RegistryRuntime.mutate (serialized, persisted)
    - Reads go through RegistryRuntime.read and never require a caller
    - Absent product / update slot → StateError(NOT_FOUND), rendered as 404

Design Decisions:
    - /products/count declared before /products/{product_id} so the literal
      path wins the match
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_registry.api.deps import get_caller
from product_registry.core.domain_types import CertId, Identity, ProductId
from product_registry.core.errors import ErrorCode, ErrorContext, StateError
from product_registry.infrastructure.database import get_db
from product_registry.schemas.product import (
    CertificationLink,
    OperationAccepted,
    ProductCount,
    ProductCreate,
    ProductCreated,
    ProductEdit,
    ProductResponse,
    ProductUpdateResponse,
)
from product_registry.services.registry_runtime import RegistryRuntime, get_runtime

router = APIRouter(prefix="/api/v1/products", tags=["products"])

ProductIdPath = Annotated[int, Path(ge=0)]


def _not_found(product_id: int, operation: str) -> StateError:
    return StateError(
        ErrorCode.NOT_FOUND,
        ErrorContext(operation=operation, product_id=product_id),
    )


@router.post(
    "", response_model=ProductCreated, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate,
    caller: Identity = Depends(get_caller),
    runtime: RegistryRuntime = Depends(get_runtime),
    db: AsyncSession = Depends(get_db),
):
    """Register a new product (supplier only)."""
    product_id, _ = await runtime.mutate(
        db, "create_product", caller,
        lambda registry: registry.create_product(
            caller,
            species=body.species,
            origin=body.origin,
            harvest_date=body.harvest_date,
            weight=body.weight,
            description=body.description,
            location=body.location,
            currency=body.currency,
            images=body.images,
        ),
    )
    return ProductCreated(product_id=product_id)


@router.get("/count", response_model=ProductCount)
async def get_product_count(runtime: RegistryRuntime = Depends(get_runtime)):
    """Id counter value (one past the last issued id)."""
    count = await runtime.read(lambda registry: registry.get_product_count())
    return ProductCount(count=count)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: ProductIdPath, runtime: RegistryRuntime = Depends(get_runtime),
):
    product = await runtime.read(
        lambda registry: registry.get_product(ProductId(product_id)),
    )
    if product is None:
        raise _not_found(product_id, "get_product")
    return ProductResponse.from_domain(product_id, product)


@router.put("/{product_id}", response_model=OperationAccepted)
async def update_product(
    product_id: ProductIdPath,
    body: ProductEdit,
    caller: Identity = Depends(get_caller),
    runtime: RegistryRuntime = Depends(get_runtime),
    db: AsyncSession = Depends(get_db),
):
    """Edit the mutable fields of a product (creator only)."""
    _, height = await runtime.mutate(
        db, "update_product", caller,
        lambda registry: registry.update_product(
            caller,
            ProductId(product_id),
            species=body.species,
            origin=body.origin,
            weight=body.weight,
            description=body.description,
            location=body.location,
            currency=body.currency,
        ),
        product_id=ProductId(product_id),
    )
    return OperationAccepted(ledger_height=height)


@router.get("/{product_id}/updates", response_model=ProductUpdateResponse)
async def get_product_updates(
    product_id: ProductIdPath, runtime: RegistryRuntime = Depends(get_runtime),
):
    """Most recent edit of a product (single slot, not a history)."""
    update = await runtime.read(
        lambda registry: registry.get_product_updates(ProductId(product_id)),
    )
    if update is None:
        raise _not_found(product_id, "get_product_updates")
    return ProductUpdateResponse.from_domain(product_id, update)


@router.post("/{product_id}/certification", response_model=OperationAccepted)
async def link_certification(
    product_id: ProductIdPath,
    body: CertificationLink,
    caller: Identity = Depends(get_caller),
    runtime: RegistryRuntime = Depends(get_runtime),
    db: AsyncSession = Depends(get_db),
):
    """Attach a certification reference once (certifier only)."""
    _, height = await runtime.mutate(
        db, "link_certification", caller,
        lambda registry: registry.link_certification(
            caller, ProductId(product_id), CertId(body.cert_id),
        ),
        product_id=ProductId(product_id),
    )
    return OperationAccepted(ledger_height=height)


@router.post("/{product_id}/deactivate", response_model=OperationAccepted)
async def deactivate_product(
    product_id: ProductIdPath,
    caller: Identity = Depends(get_caller),
    runtime: RegistryRuntime = Depends(get_runtime),
    db: AsyncSession = Depends(get_db),
):
    """Retire a product permanently (creator only)."""
    _, height = await runtime.mutate(
        db, "deactivate_product", caller,
        lambda registry: registry.deactivate_product(
            caller, ProductId(product_id),
        ),
        product_id=ProductId(product_id),
    )
    return OperationAccepted(ledger_height=height)

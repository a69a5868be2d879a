"""Admin Routes — registry capacity and creation-fee configuration.

Invariants:
    - Both routes require the admin role (checked by the registry, not here)
    - Out-of-range values reach the registry and fail INVALID_UPDATE_PARAM
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from product_registry.api.deps import get_caller
from product_registry.core.domain_types import Identity
from product_registry.infrastructure.database import get_db
from product_registry.schemas.product import (
    CreationFeeUpdate, MaxProductsUpdate, OperationAccepted,
)
from product_registry.services.registry_runtime import RegistryRuntime, get_runtime

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.put("/max-products", response_model=OperationAccepted)
async def set_max_products(
    body: MaxProductsUpdate,
    caller: Identity = Depends(get_caller),
    runtime: RegistryRuntime = Depends(get_runtime),
    db: AsyncSession = Depends(get_db),
):
    _, height = await runtime.mutate(
        db, "set_max_products", caller,
        lambda registry: registry.set_max_products(caller, body.new_max),
    )
    return OperationAccepted(ledger_height=height)


@router.put("/creation-fee", response_model=OperationAccepted)
async def set_creation_fee(
    body: CreationFeeUpdate,
    caller: Identity = Depends(get_caller),
    runtime: RegistryRuntime = Depends(get_runtime),
    db: AsyncSession = Depends(get_db),
):
    _, height = await runtime.mutate(
        db, "set_creation_fee", caller,
        lambda registry: registry.set_creation_fee(caller, body.new_fee),
    )
    return OperationAccepted(ledger_height=height)

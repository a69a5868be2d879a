"""Creator Routes — per-creator product index."""

from fastapi import APIRouter, Depends

from product_registry.core.domain_types import Identity
from product_registry.schemas.product import CreatorProducts
from product_registry.services.registry_runtime import RegistryRuntime, get_runtime

router = APIRouter(prefix="/api/v1/creators", tags=["creators"])


@router.get("/{creator}/products", response_model=CreatorProducts)
async def get_products_by_creator(
    creator: str, runtime: RegistryRuntime = Depends(get_runtime),
):
    """Ids the creator registered, in creation order. Empty if none."""
    ids = await runtime.read(
        lambda registry: registry.get_products_by_creator(Identity(creator)),
    )
    return CreatorProducts(creator=creator, product_ids=ids)

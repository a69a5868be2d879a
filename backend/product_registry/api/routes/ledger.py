"""Ledger Routes — current block height of the local ledger clock."""

from fastapi import APIRouter, Depends

from product_registry.services.registry_runtime import RegistryRuntime, get_runtime

router = APIRouter(prefix="/api/v1/ledger", tags=["ledger"])


@router.get("/height")
async def get_ledger_height(runtime: RegistryRuntime = Depends(get_runtime)):
    return {"ledger_height": runtime.clock.current_height()}

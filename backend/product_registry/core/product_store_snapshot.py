"""Product Store Snapshot — serialization / deserialization for ProductStore.

Invariants:
    - store_to_snapshot produces a JSON-safe dict (str keys, lists, no tuples)
    - store_from_snapshot reconstructs an equivalent ProductStore
    - Missing config keys fall back to ProductStore defaults (forward-compatible)
    - Restored creator index is rebuilt through CreatorIndex.append, so a
      corrupt snapshot (duplicates, out-of-order ids) fails loudly

Design Decisions:
    - Extracted from product_store.py: persistence format is not store logic
    - One JSON document per snapshot: the store is small and always written whole
"""

from dataclasses import asdict

from product_registry.core.creator_index import CreatorIndex
from product_registry.core.domain_types import (
    CREATOR_INDEX_CAPACITY, CertId, Identity, LedgerHeight, ProductId,
)
from product_registry.core.product_store import Product, ProductStore, ProductUpdate

SNAPSHOT_VERSION: int = 1


def _product_to_dict(product: Product) -> dict:
    data = asdict(product)
    data["images"] = list(product.images)
    return data


def _product_from_dict(data: dict) -> Product:
    cert_id = data.get("cert_id")
    return Product(
        species=data["species"],
        origin=data["origin"],
        harvest_date=data["harvest_date"],
        weight=data["weight"],
        description=data["description"],
        location=data["location"],
        currency=data["currency"],
        creator=Identity(data["creator"]),
        images=tuple(data.get("images", [])),
        created_at=LedgerHeight(data["created_at"]),
        status=data.get("status", True),
        cert_id=CertId(cert_id) if cert_id is not None else None,
    )


def store_to_snapshot(store: ProductStore) -> dict:
    """Serialize ProductStore to a JSON-safe dict. Pure, no IO."""
    return {
        "version": SNAPSHOT_VERSION,
        "config": {
            "next_product_id": store.next_product_id,
            "max_products": store.max_products,
            "creation_fee": store.creation_fee,
            "creator_index_capacity": store.creator_index.capacity,
        },
        "products": {
            str(pid): _product_to_dict(p) for pid, p in store.products.items()
        },
        "updates": {
            str(pid): asdict(u) for pid, u in store.updates.items()
        },
        "creator_index": store.creator_index.entries(),
    }


def store_from_snapshot(data: dict) -> ProductStore:
    """Reconstruct ProductStore from snapshot dict. Pure, no IO."""
    store = ProductStore()
    if not data:
        return store

    config = data.get("config", {})
    store.next_product_id = config.get("next_product_id", store.next_product_id)
    store.max_products = config.get("max_products", store.max_products)
    store.creation_fee = config.get("creation_fee", store.creation_fee)

    store.products = {
        ProductId(int(pid)): _product_from_dict(p)
        for pid, p in data.get("products", {}).items()
    }
    store.updates = {
        ProductId(int(pid)): ProductUpdate(**u)
        for pid, u in data.get("updates", {}).items()
    }
    store.creator_index = CreatorIndex.from_entries(
        {
            Identity(creator): [ProductId(i) for i in ids]
            for creator, ids in data.get("creator_index", {}).items()
        },
        capacity=config.get("creator_index_capacity", CREATOR_INDEX_CAPACITY),
    )
    return store

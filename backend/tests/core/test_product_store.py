"""Product Store — tests for store mutators and their invariants.

Tests cover:
    - insert_product issues sequential ids and indexes the creator
    - apply_update overwrites mutable fields and the single update slot
    - immutable fields survive every mutator
    - set_certification / deactivate swap in new records
"""

import dataclasses

import pytest

from product_registry.core.domain_types import (
    DEFAULT_CREATION_FEE, DEFAULT_MAX_PRODUCTS, Identity, ProductStatus,
)
from product_registry.core.product_store import ProductStore

ALICE = Identity("alice")
BOB = Identity("bob")


def _insert(store: ProductStore, creator=ALICE, height=10) -> int:
    return store.insert_product(
        creator=creator, species="Elephant Ivory", origin="Africa",
        harvest_date=5, weight=500, description="Large tusk",
        location="Savanna", currency="USD", images=["a", "b"],
        created_at=height,
    )


def _edit(store: ProductStore, product_id: int, updater=ALICE, height=20, **kw):
    fields = dict(
        species="Rhino Horn", origin="Asia", weight=300,
        description="Small horn", location="Jungle", currency="BTC",
    )
    fields.update(kw)
    store.apply_update(product_id, updater=updater, updated_at=height, **fields)


def test_defaults():
    store = ProductStore()
    assert store.next_product_id == 1
    assert store.max_products == DEFAULT_MAX_PRODUCTS
    assert store.creation_fee == DEFAULT_CREATION_FEE


def test_insert_issues_sequential_ids():
    store = ProductStore()
    assert [_insert(store), _insert(store), _insert(store, BOB)] == [1, 2, 3]
    assert store.next_product_id == 4
    assert store.ids_by_creator(ALICE) == [1, 2]
    assert store.ids_by_creator(BOB) == [3]


def test_inserted_product_is_active_and_uncertified():
    store = ProductStore()
    product = store.get(_insert(store, height=42))
    assert product.status is True
    assert product.lifecycle == ProductStatus.ACTIVE
    assert product.cert_id is None
    assert product.created_at == 42
    assert product.images == ("a", "b")


def test_product_is_frozen():
    store = ProductStore()
    product = store.get(_insert(store))
    with pytest.raises(dataclasses.FrozenInstanceError):
        product.creator = BOB


def test_apply_update_overwrites_mutable_fields_only():
    store = ProductStore()
    pid = _insert(store)
    _edit(store, pid)
    product = store.get(pid)
    assert (product.species, product.origin, product.weight) == (
        "Rhino Horn", "Asia", 300,
    )
    assert product.currency == "BTC"
    assert product.harvest_date == 5
    assert product.images == ("a", "b")
    assert product.creator == ALICE
    assert product.created_at == 10


def test_second_update_replaces_slot():
    store = ProductStore()
    pid = _insert(store)
    _edit(store, pid, height=20, weight=300)
    _edit(store, pid, height=30, weight=250, description="")
    update = store.get_update(pid)
    assert update.updated_weight == 250
    assert update.updated_description == ""
    assert update.updated_at == 30
    assert len(store.updates) == 1


def test_update_slot_absent_until_first_edit():
    store = ProductStore()
    assert store.get_update(_insert(store)) is None


def test_set_certification_and_deactivate():
    store = ProductStore()
    pid = _insert(store)
    store.set_certification(pid, 42)
    store.deactivate(pid)
    product = store.get(pid)
    assert product.cert_id == 42
    assert product.status is False
    assert product.lifecycle == ProductStatus.DEACTIVATED


def test_has_capacity_is_strict():
    store = ProductStore(max_products=3)
    _insert(store)
    assert store.has_capacity
    _insert(store)
    assert not store.has_capacity

"""Access Enforcement — tests for role, ownership, and lifecycle checks.

Tests cover:
    - check_role: missing role, wrong role, unknown role, matching role
    - check_owner_may_modify: NOT_FOUND → NOT_AUTHORIZED → NOT_ACTIVE ordering
    - check_certifiable: NOT_FOUND → NOT_ACTIVE → ALREADY_LINKED ordering
    - capacity checks for the registry and the per-creator index
"""

from product_registry.core.creator_index import CreatorIndex
from product_registry.core.domain_types import Identity, ProductId, Role
from product_registry.core.enforce_access import (
    check_certifiable,
    check_creator_capacity,
    check_owner_may_modify,
    check_registry_capacity,
    check_role,
)
from product_registry.core.errors import ErrorCode
from product_registry.core.product_store import Product, ProductStore

from tests.fakes import FakeRoles

ALICE = Identity("alice")
BOB = Identity("bob")


def _product(**overrides) -> Product:
    fields = dict(
        species="Pangolin Scale", origin="Asia", harvest_date=1, weight=2,
        description="", location="Forest", currency="STX", creator=ALICE,
        images=(), created_at=1,
    )
    fields.update(overrides)
    return Product(**fields)


# ─── check_role ──────────────────────────────────────────────────

def test_check_role_missing_identity():
    assert check_role(FakeRoles(), ALICE, Role.SUPPLIER) == ErrorCode.INVALID_ROLE


def test_check_role_wrong_role():
    roles = FakeRoles({ALICE: "certifier"})
    assert check_role(roles, ALICE, Role.SUPPLIER) == ErrorCode.INVALID_ROLE


def test_check_role_unknown_role_label():
    roles = FakeRoles({ALICE: "buyer"})
    assert check_role(roles, ALICE, Role.ADMIN) == ErrorCode.INVALID_ROLE


def test_check_role_matching_string_role():
    roles = FakeRoles({ALICE: "supplier"})
    assert check_role(roles, ALICE, Role.SUPPLIER) is None


def test_check_role_matching_enum_role():
    roles = FakeRoles({ALICE: Role.ADMIN})
    assert check_role(roles, ALICE, Role.ADMIN) is None


# ─── check_owner_may_modify ──────────────────────────────────────

def test_owner_check_missing_product():
    assert check_owner_may_modify(None, ALICE) == ErrorCode.NOT_FOUND


def test_owner_check_non_creator():
    assert check_owner_may_modify(_product(), BOB) == ErrorCode.NOT_AUTHORIZED


def test_owner_check_non_creator_on_inactive_reports_authorization():
    product = _product(status=False)
    assert check_owner_may_modify(product, BOB) == ErrorCode.NOT_AUTHORIZED


def test_owner_check_creator_on_inactive():
    product = _product(status=False)
    assert check_owner_may_modify(product, ALICE) == ErrorCode.NOT_ACTIVE


def test_owner_check_passes_for_active_creator():
    assert check_owner_may_modify(_product(), ALICE) is None


# ─── check_certifiable ───────────────────────────────────────────

def test_certifiable_missing_product():
    assert check_certifiable(None) == ErrorCode.NOT_FOUND


def test_certifiable_inactive_before_linked():
    product = _product(status=False, cert_id=7)
    assert check_certifiable(product) == ErrorCode.NOT_ACTIVE


def test_certifiable_already_linked():
    assert check_certifiable(_product(cert_id=7)) == ErrorCode.ALREADY_LINKED


def test_certifiable_fresh_product():
    assert check_certifiable(_product()) is None


# ─── capacity ────────────────────────────────────────────────────

def test_registry_capacity_is_strict():
    store = ProductStore(max_products=2)
    assert check_registry_capacity(store) is None
    store.next_product_id = 2
    assert check_registry_capacity(store) == ErrorCode.MAX_PRODUCTS_EXCEEDED


def test_creator_capacity():
    index = CreatorIndex(capacity=1)
    assert check_creator_capacity(index, ALICE) is None
    index.append(ALICE, ProductId(1))
    assert check_creator_capacity(index, ALICE) == ErrorCode.MAX_PRODUCTS_EXCEEDED
    assert check_creator_capacity(index, BOB) is None

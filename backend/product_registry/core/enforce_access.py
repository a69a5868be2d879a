"""Access & Lifecycle Enforcement — authorization and state checks per operation.

Invariants:
    - All functions are PURE apart from the read-only RoleRegistry lookup
    - Return ErrorCode on violation, None on success
    - Role mismatch or missing role → INVALID_ROLE; non-creator → NOT_AUTHORIZED
    - Product checks run existence → ownership → liveness, first error wins

Design Decisions:
    - Separated from validate_fields: different lifecycle — access checks gate
      an operation, field checks judge its payload
    - Role is a str Enum, so plain strings from the registry compare equal to
      members; roles this core does not know (e.g. "buyer") simply fail
"""

from product_registry.core.creator_index import CreatorIndex
from product_registry.core.domain_types import Identity, Role
from product_registry.core.errors import ErrorCode
from product_registry.core.product_store import Product, ProductStore
from product_registry.core.repository_protocols import RoleRegistry


def check_role(
    roles: RoleRegistry, caller: Identity, required: Role,
) -> ErrorCode | None:
    role = roles.get_role(caller)
    if role is None or role != required:
        return ErrorCode.INVALID_ROLE
    return None


def check_exists(product: Product | None) -> ErrorCode | None:
    if product is None:
        return ErrorCode.NOT_FOUND
    return None


def check_creator(product: Product, caller: Identity) -> ErrorCode | None:
    if product.creator != caller:
        return ErrorCode.NOT_AUTHORIZED
    return None


def check_active(product: Product) -> ErrorCode | None:
    if not product.status:
        return ErrorCode.NOT_ACTIVE
    return None


def check_not_linked(product: Product) -> ErrorCode | None:
    if product.cert_id is not None:
        return ErrorCode.ALREADY_LINKED
    return None


def check_registry_capacity(store: ProductStore) -> ErrorCode | None:
    if not store.has_capacity:
        return ErrorCode.MAX_PRODUCTS_EXCEEDED
    return None


def check_creator_capacity(
    index: CreatorIndex, creator: Identity,
) -> ErrorCode | None:
    if index.is_full(creator):
        return ErrorCode.MAX_PRODUCTS_EXCEEDED
    return None


def check_owner_may_modify(
    product: Product | None, caller: Identity,
) -> ErrorCode | None:
    """Update/deactivate gate: exists, caller is creator, still active."""
    return (
        check_exists(product)
        or check_creator(product, caller)
        or check_active(product)
    )


def check_certifiable(product: Product | None) -> ErrorCode | None:
    """Link gate: exists, still active, no certification yet."""
    return (
        check_exists(product)
        or check_active(product)
        or check_not_linked(product)
    )

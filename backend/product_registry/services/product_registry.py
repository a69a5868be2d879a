"""Product Registry — public operations over the ProductStore.

Invariants:
    - Mutating operations check in order: authorization → capacity → fields →
      fee transfer → mutation; the first failing check is returned
    - A failed operation touches nothing: no product, index, slot, or counter
    - Ledger height is read once per operation and used for every check in it
    - Read queries skip authorization and validation and never mutate
    - cert_id values are accepted as-is; the certification collaborator owns
      their validity

Design Decisions:
    - Store, roles, fees, and clock injected: runs against fakes in tests and
      local adapters in the HTTP shell
    - Result values instead of exceptions: the shell decides how a failure is
      surfaced (HTTP envelope, log line)
    - Fee transfer is the last check because it is the only one with an
      external side effect; everything before it is free to fail
"""

import logging

from product_registry.core.domain_types import (
    Amount, CertId, Identity, ProductId, Role,
)
from product_registry.core.enforce_access import (
    check_certifiable,
    check_creator_capacity,
    check_owner_may_modify,
    check_registry_capacity,
    check_role,
)
from product_registry.core.errors import ErrorCode
from product_registry.core.product_store import Product, ProductStore, ProductUpdate
from product_registry.core.repository_protocols import (
    FeeTransfer, LedgerClock, RoleRegistry,
)
from product_registry.core.result import Err, Ok, Result
from product_registry.core.validate_fields import (
    validate_creation_fields, validate_update_fields,
)

logger = logging.getLogger(__name__)


class ProductRegistry:
    """Create, update, certify, deactivate and query product records."""

    def __init__(
        self,
        store: ProductStore,
        roles: RoleRegistry,
        fees: FeeTransfer,
        clock: LedgerClock,
        treasury: Identity,
    ):
        self._store = store
        self._roles = roles
        self._fees = fees
        self._clock = clock
        self._treasury = treasury

    @property
    def store(self) -> ProductStore:
        return self._store

    # --- Admin configuration -----------------------------------------------

    def set_max_products(self, caller: Identity, new_max: int) -> Result[bool]:
        error = check_role(self._roles, caller, Role.ADMIN)
        if not error and new_max <= 0:
            error = ErrorCode.INVALID_UPDATE_PARAM
        if error:
            return self._reject("set_max_products", caller, error)
        self._store.set_max_products(new_max)
        logger.info(
            f"max_products set to {new_max}",
            extra={"operation": "set_max_products", "caller": caller},
        )
        return Ok(True)

    def set_creation_fee(self, caller: Identity, new_fee: int) -> Result[bool]:
        error = check_role(self._roles, caller, Role.ADMIN)
        if not error and new_fee < 0:
            error = ErrorCode.INVALID_UPDATE_PARAM
        if error:
            return self._reject("set_creation_fee", caller, error)
        self._store.set_creation_fee(Amount(new_fee))
        logger.info(
            f"creation_fee set to {new_fee}",
            extra={"operation": "set_creation_fee", "caller": caller},
        )
        return Ok(True)

    # --- Product lifecycle -------------------------------------------------

    def create_product(
        self,
        caller: Identity,
        species: str,
        origin: str,
        harvest_date: int,
        weight: int,
        description: str,
        location: str,
        currency: str,
        images: list[str],
    ) -> Result[ProductId]:
        height = self._clock.current_height()
        error = (
            check_role(self._roles, caller, Role.SUPPLIER)
            or check_registry_capacity(self._store)
            or check_creator_capacity(self._store.creator_index, caller)
            or validate_creation_fields(
                species=species,
                origin=origin,
                harvest_date=harvest_date,
                weight=weight,
                description=description,
                location=location,
                currency=currency,
                images=images,
                current_height=height,
            )
        )
        if error:
            return self._reject("create_product", caller, error, height=height)

        fee = Amount(self._store.creation_fee)
        if not self._fees.transfer(fee, caller, self._treasury):
            return self._reject(
                "create_product", caller, ErrorCode.FEE_TRANSFER_FAILED,
                height=height,
            )

        product_id = self._store.insert_product(
            creator=caller,
            species=species,
            origin=origin,
            harvest_date=harvest_date,
            weight=weight,
            description=description,
            location=location,
            currency=currency,
            images=list(images),
            created_at=height,
        )
        logger.info(
            f"Product {product_id} created ({species})",
            extra={
                "operation": "create_product", "caller": caller,
                "product_id": product_id, "ledger_height": height,
            },
        )
        return Ok(product_id)

    def update_product(
        self,
        caller: Identity,
        product_id: ProductId,
        species: str,
        origin: str,
        weight: int,
        description: str,
        location: str,
        currency: str,
    ) -> Result[bool]:
        height = self._clock.current_height()
        error = (
            check_owner_may_modify(self._store.get(product_id), caller)
            or validate_update_fields(
                species=species,
                origin=origin,
                weight=weight,
                description=description,
                location=location,
                currency=currency,
            )
        )
        if error:
            return self._reject(
                "update_product", caller, error, product_id, height,
            )
        self._store.apply_update(
            product_id,
            species=species,
            origin=origin,
            weight=weight,
            description=description,
            location=location,
            currency=currency,
            updater=caller,
            updated_at=height,
        )
        logger.info(
            f"Product {product_id} updated",
            extra={
                "operation": "update_product", "caller": caller,
                "product_id": product_id, "ledger_height": height,
            },
        )
        return Ok(True)

    def link_certification(
        self, caller: Identity, product_id: ProductId, cert_id: CertId,
    ) -> Result[bool]:
        error = (
            check_role(self._roles, caller, Role.CERTIFIER)
            or check_certifiable(self._store.get(product_id))
        )
        if error:
            return self._reject("link_certification", caller, error, product_id)
        self._store.set_certification(product_id, cert_id)
        logger.info(
            f"Product {product_id} linked to certification {cert_id}",
            extra={
                "operation": "link_certification", "caller": caller,
                "product_id": product_id,
            },
        )
        return Ok(True)

    def deactivate_product(
        self, caller: Identity, product_id: ProductId,
    ) -> Result[bool]:
        error = check_owner_may_modify(self._store.get(product_id), caller)
        if error:
            return self._reject("deactivate_product", caller, error, product_id)
        self._store.deactivate(product_id)
        logger.info(
            f"Product {product_id} deactivated",
            extra={
                "operation": "deactivate_product", "caller": caller,
                "product_id": product_id,
            },
        )
        return Ok(True)

    # --- Read queries ------------------------------------------------------

    def get_product(self, product_id: ProductId) -> Product | None:
        return self._store.get(product_id)

    def get_product_updates(self, product_id: ProductId) -> ProductUpdate | None:
        return self._store.get_update(product_id)

    def get_products_by_creator(self, creator: Identity) -> list[ProductId]:
        return self._store.ids_by_creator(creator)

    def get_product_count(self) -> int:
        """Id counter value: one past the last issued id."""
        return self._store.next_product_id

    # --- Helpers -----------------------------------------------------------

    def _reject(
        self,
        operation: str,
        caller: Identity,
        error: ErrorCode,
        product_id: ProductId | None = None,
        height: int | None = None,
    ) -> Err:
        logger.warning(
            f"{operation} rejected: {error.name}",
            extra={
                "operation": operation, "caller": caller,
                "error_code": int(error), "product_id": product_id,
                "ledger_height": height,
            },
        )
        return Err(error)

"""Registry Runtime — serializes operations, persists snapshots, advances the ledger.

Invariants:
    - One operation at a time: every call runs under a single asyncio.Lock
    - A mutation counts only after its snapshot commits; if persistence fails
      the in-memory store is rebuilt from the last committed state
    - One snapshot row holds the current state; each commit overwrites it
    - Ledger height advances by one block after each committed mutation, never
      during an operation
    - Err results are raised as typed RegistryError subclasses here, not in core

Design Decisions:
    - Module-level singleton (like db_manager): one registry per process,
      initialized in the FastAPI lifespan
    - Whole-store snapshot over row-per-field tables: the store is the unit
      of consistency, and restoring it is a single read
    - Failed operations never mutate the store, so only a failed commit
      needs a rollback, and it rebuilds from the cached committed state
"""

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from product_registry.config import Settings
from product_registry.core.creator_index import CreatorIndex
from product_registry.core.domain_types import Identity, ProductId
from product_registry.core.errors import ErrorContext, error_for_code
from product_registry.core.product_store import ProductStore
from product_registry.core.product_store_snapshot import (
    store_from_snapshot, store_to_snapshot,
)
from product_registry.core.repository_protocols import RoleRegistry
from product_registry.core.result import Err, Result
from product_registry.infrastructure.ledger_clock import LocalLedgerClock
from product_registry.infrastructure.role_directory import RoleDirectory
from product_registry.infrastructure.treasury import RecordingTreasury
from product_registry.models.fee_transfer import FeeTransferRecord
from product_registry.models.registry_snapshot import (
    CURRENT_SNAPSHOT_ID, RegistrySnapshot,
)
from product_registry.services.product_registry import ProductRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RegistryRuntime:
    """Owns the live registry and its local collaborators."""

    def __init__(
        self,
        store: ProductStore,
        roles: RoleRegistry,
        clock: LocalLedgerClock,
        treasury: RecordingTreasury,
        treasury_identity: Identity,
    ):
        self._roles = roles
        self._clock = clock
        self._treasury = treasury
        self._treasury_identity = treasury_identity
        self._lock = asyncio.Lock()
        self.registry = self._build_registry(store)
        self._committed = store_to_snapshot(store)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RegistryRuntime":
        store = ProductStore(
            max_products=settings.default_max_products,
            creation_fee=settings.default_creation_fee,
            creator_index=CreatorIndex(capacity=settings.creator_index_capacity),
        )
        return cls(
            store=store,
            roles=RoleDirectory(settings.role_assignments),
            clock=LocalLedgerClock(settings.genesis_height),
            treasury=RecordingTreasury(),
            treasury_identity=Identity(settings.treasury_identity),
        )

    @property
    def clock(self) -> LocalLedgerClock:
        return self._clock

    def _build_registry(self, store: ProductStore) -> ProductRegistry:
        return ProductRegistry(
            store=store,
            roles=self._roles,
            fees=self._treasury,
            clock=self._clock,
            treasury=self._treasury_identity,
        )

    async def restore(self, db: AsyncSession) -> bool:
        """Load the persisted snapshot, if any. Returns True when state was restored."""
        latest = await db.get(RegistrySnapshot, CURRENT_SNAPSHOT_ID)
        if latest is None:
            return False
        self.registry = self._build_registry(store_from_snapshot(latest.state))
        self._committed = latest.state
        behind = latest.ledger_height + 1 - self._clock.current_height()
        if behind > 0:
            self._clock.advance(behind)
        logger.info(
            f"Restored registry from snapshot of {latest.operation}",
            extra={"ledger_height": self._clock.current_height()},
        )
        return True

    async def mutate(
        self,
        db: AsyncSession,
        operation: str,
        caller: Identity,
        call: Callable[[ProductRegistry], Result[T]],
        product_id: ProductId | None = None,
    ) -> tuple[T, int]:
        """Run one mutating operation, persist it, advance the ledger.

        Returns the operation value and the ledger height it committed at.
        """
        async with self._lock:
            height = self._clock.current_height()
            result = call(self.registry)
            if isinstance(result, Err):
                self._treasury.drain_pending()
                raise error_for_code(result.error, ErrorContext(
                    operation=operation, caller=caller,
                    product_id=product_id, ledger_height=height,
                ))
            state = store_to_snapshot(self.registry.store)
            try:
                await self._persist(db, operation, height, result.value, state)
            except Exception:
                self.registry = self._build_registry(
                    store_from_snapshot(self._committed),
                )
                self._treasury.drain_pending()
                logger.error(
                    f"{operation} rolled back: snapshot not persisted",
                    extra={"operation": operation, "caller": caller},
                )
                raise
            self._committed = state
            self._clock.advance()
            return result.value, height

    async def read(self, query: Callable[[ProductRegistry], T]) -> T:
        """Run a read query against a consistent store."""
        async with self._lock:
            return query(self.registry)

    async def _persist(
        self,
        db: AsyncSession,
        operation: str,
        height: int,
        value: object,
        state: dict,
    ) -> None:
        row = await db.get(RegistrySnapshot, CURRENT_SNAPSHOT_ID)
        if row is None:
            db.add(RegistrySnapshot(
                id=CURRENT_SNAPSHOT_ID,
                operation=operation,
                ledger_height=height,
                state=state,
            ))
        else:
            row.operation = operation
            row.ledger_height = height
            row.state = state
        product_id = value if operation == "create_product" else None
        for transfer in self._treasury.drain_pending():
            db.add(FeeTransferRecord(
                product_id=product_id,
                amount=transfer.amount,
                sender=transfer.sender,
                recipient=transfer.recipient,
                ledger_height=height,
            ))
        await db.commit()


# Singleton (initialized on startup)
runtime: RegistryRuntime | None = None


def init_runtime(settings: Settings) -> RegistryRuntime:
    global runtime
    runtime = RegistryRuntime.from_settings(settings)
    return runtime


def get_runtime() -> RegistryRuntime:
    """FastAPI dependency for the live registry."""
    if not runtime:
        raise RuntimeError("Registry not initialized")
    return runtime

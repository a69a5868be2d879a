"""Boundary Protocols — contracts between the registry core and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - RoleRegistry is read-only from the core's point of view
    - LedgerClock.current_height() is stable for the duration of one operation
    - FeeTransfer.transfer() either moves the full amount or returns False

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Synchronous methods: the core runs one operation to completion with no
      suspension; the shell resolves anything async before calling in
"""

from typing import Protocol

from product_registry.core.domain_types import Amount, Identity, LedgerHeight, Role


class RoleRegistry(Protocol):
    """Identity → role lookup, owned by the external role registry."""
    def get_role(self, identity: Identity) -> Role | str | None: ...


class FeeTransfer(Protocol):
    """Moves creation fees from the caller to the registry treasury."""
    def transfer(
        self, amount: Amount, sender: Identity, recipient: Identity,
    ) -> bool: ...


class LedgerClock(Protocol):
    """Current ledger height, supplied by the surrounding ledger."""
    def current_height(self) -> LedgerHeight: ...

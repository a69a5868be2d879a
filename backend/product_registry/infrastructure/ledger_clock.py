"""Local Ledger Clock — block height source when the registry runs standalone.

Invariants:
    - Height never decreases
    - Height is only advanced between operations (by the runtime, after a commit)

Design Decisions:
    - One block per committed mutation: each accepted transaction lands in its
      own block, which keeps created_at / updated_at distinct and ordered
"""

from product_registry.core.domain_types import LedgerHeight


class LocalLedgerClock:
    """Monotonic in-process block height."""

    def __init__(self, genesis_height: int = 0):
        if genesis_height < 0:
            raise ValueError("genesis_height must be >= 0")
        self._height = genesis_height

    def current_height(self) -> LedgerHeight:
        return LedgerHeight(self._height)

    def advance(self, blocks: int = 1) -> LedgerHeight:
        if blocks < 0:
            raise ValueError("ledger height cannot move backwards")
        self._height += blocks
        return LedgerHeight(self._height)

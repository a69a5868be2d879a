"""Recording Treasury — FeeTransfer adapter that records every accepted transfer.

Invariants:
    - A zero-amount transfer between distinct identities succeeds and is recorded
    - Negative amounts and self-payments (sender == recipient) are refused;
      creation fees always target the treasury, so the treasury identity
      cannot create products (Settings rejects it as a supplier)
    - drain_pending() hands each recorded transfer to the caller exactly once

Design Decisions:
    - Records instead of balances: accounting beyond "transfer occurred" is
      the treasury service's concern; the shell persists pending records
      to the fee_transfers table after the registry commit
"""

from dataclasses import dataclass

from product_registry.core.domain_types import Amount, Identity


@dataclass(frozen=True)
class TransferRecord:
    amount: Amount
    sender: Identity
    recipient: Identity


class RecordingTreasury:
    """Accepts creation-fee transfers and keeps them until persisted."""

    def __init__(self):
        self._pending: list[TransferRecord] = []

    def transfer(
        self, amount: Amount, sender: Identity, recipient: Identity,
    ) -> bool:
        if amount < 0 or sender == recipient:
            return False
        self._pending.append(TransferRecord(amount, sender, recipient))
        return True

    def drain_pending(self) -> list[TransferRecord]:
        pending, self._pending = self._pending, []
        return pending

"""Creator Index — bounded, append-only, per-creator list of product ids.

Invariants:
    - Each creator's ids are in creation order with no duplicates
    - A creator never holds more than `capacity` ids
    - append() on a full list raises OverflowError; callers check is_full() first
    - ids_for() returns a copy — callers cannot mutate the index

Design Decisions:
    - Reject on overflow, never evict: the index must list exactly the ids a
      creator made, so dropping the oldest would break that guarantee
"""

from dataclasses import dataclass, field

from product_registry.core.domain_types import (
    CREATOR_INDEX_CAPACITY, Identity, ProductId,
)


@dataclass
class CreatorIndex:
    """Identity → ordered product ids, capacity-bounded per creator."""

    capacity: int = CREATOR_INDEX_CAPACITY
    _entries: dict[Identity, list[ProductId]] = field(default_factory=dict)

    @classmethod
    def from_entries(
        cls, entries: dict[Identity, list[ProductId]], capacity: int,
    ) -> "CreatorIndex":
        index = cls(capacity=capacity)
        for creator, ids in entries.items():
            for product_id in ids:
                index.append(creator, product_id)
        return index

    def entries(self) -> dict[Identity, list[ProductId]]:
        return {creator: list(ids) for creator, ids in self._entries.items()}

    def is_full(self, creator: Identity) -> bool:
        return len(self._entries.get(creator, ())) >= self.capacity

    def append(self, creator: Identity, product_id: ProductId) -> None:
        ids = self._entries.setdefault(creator, [])
        if len(ids) >= self.capacity:
            raise OverflowError(
                f"creator index for {creator!r} is full ({self.capacity})"
            )
        if ids and product_id <= ids[-1]:
            raise ValueError(
                f"product id {product_id} does not extend index for {creator!r}"
            )
        ids.append(product_id)

    def ids_for(self, creator: Identity) -> list[ProductId]:
        return list(self._entries.get(creator, ()))

"""Request Dependencies — caller identity extraction.

Invariants:
    - Mutating routes require X-Caller-Identity; a missing or blank header is
      rejected (401, NOT_AUTHORIZED envelope) before the registry is consulted
    - The header value, stripped, is used as the ledger identity

Design Decisions:
    - Header over body field: identity is transport metadata (the ledger's
      tx-sender), not part of the product payload
"""

from typing import Annotated

from fastapi import Header

from product_registry.core.domain_types import Identity
from product_registry.core.errors import MissingCallerError


async def get_caller(
    x_caller_identity: Annotated[str | None, Header()] = None,
) -> Identity:
    """Caller identity from the X-Caller-Identity header."""
    if not x_caller_identity or not x_caller_identity.strip():
        raise MissingCallerError()
    return Identity(x_caller_identity.strip())

"""Role Directory — in-process RoleRegistry seeded from configuration.

Invariants:
    - The registry core only reads from this directory
    - Unknown identities map to None (no role)

Design Decisions:
    - Plain dict seeded from Settings.role_assignments: role administration
      belongs to the external identity service, not to this process
"""

from product_registry.core.domain_types import Identity


class RoleDirectory:
    """Identity → role label lookup."""

    def __init__(self, assignments: dict[str, str] | None = None):
        self._roles: dict[str, str] = dict(assignments or {})

    def get_role(self, identity: Identity) -> str | None:
        return self._roles.get(identity)

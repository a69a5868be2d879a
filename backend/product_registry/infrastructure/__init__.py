"""Infrastructure Layer — collaborator adapters and cross-cutting concerns.

Invariants:
    - Infrastructure never holds registry business rules
    - Adapters satisfy the Protocols in core/repository_protocols.py

Design Decisions:
    - Local adapters (role directory, treasury, ledger clock) stand in for
      the ledger's own services when the registry runs standalone
"""

"""Core Layer — pure registry logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Collaborators (roles, fees, clock) reached only through Protocols
    - Every check returns an ErrorCode or None; nothing raises for domain failures

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""

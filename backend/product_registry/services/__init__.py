"""Services Layer — the registry operations API and its runtime wiring.

Invariants:
    - Authorization runs before validation, validation before mutation
    - Services own ordering; core owns the individual checks

Design Decisions:
    - One service class per aggregate (ADR: no god objects)
"""

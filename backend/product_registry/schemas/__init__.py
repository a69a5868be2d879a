"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas enforce types only; field-range rules live in core/validate_fields.py
    - Response models are built from core dataclasses, never from ORM rows

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""

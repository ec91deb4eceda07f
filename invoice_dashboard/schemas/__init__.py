"""Pydantic Schemas — request/response contracts for dashboard endpoints.

Invariants:
    - Schemas describe what crosses the HTTP boundary
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

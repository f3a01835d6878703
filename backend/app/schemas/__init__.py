"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Every response shape wraps its payload ({"user"}, {"profile"}, {"article"})

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

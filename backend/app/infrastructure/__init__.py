"""Infrastructure Layer — database sessions and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic except the error types
    - All database calls are bounded by a timeout and mapped to DatabaseError
"""

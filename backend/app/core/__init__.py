"""Core Layer — domain rules with no IO and no DB access.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Hashing, token signing, slug generation and identity rules are pure functions
    - relation_protocols declares async contracts; implementations live in services/

Design Decisions:
    - Functional core separated from imperative shell
"""

"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own the transaction: they commit, the graph/projection only flush
    - Every failure surfaces as a ConduitError subclass (core/errors.py)

Design Decisions:
    - One module per aggregate (accounts, profiles, articles) for locality
    - Relation graph and counter projection are classes behind core protocols
"""

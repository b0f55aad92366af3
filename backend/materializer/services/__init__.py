"""Services Layer — directive resolvers, schema builder, and query execution.

Invariants:
    - Directive dispatch uses an explicit dict mapping (no auto-discovery)
    - IO reaches services only through core/boundary_protocols.py

Design Decisions:
    - One module per concern for locality (ADR: ExMA no god objects)
"""

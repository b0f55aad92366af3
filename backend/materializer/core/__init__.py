"""Core Layer — pure materializer logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic
    - graphql-core AST and type objects are read, never mutated

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""

"""Boundary Protocols — contracts between core/services and the IO shell.

Invariants:
    - Resolvers never import an HTTP library; they receive a JsonFetcher
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
      (ADR: ExMA anti-pattern)
"""

from typing import Protocol

from materializer.core.domain_types import JsonValue


class JsonFetcher(Protocol):
    """Contract for the outbound HTTP collaborator used by @httpGet."""
    async def get_json(self, url: str) -> JsonValue: ...

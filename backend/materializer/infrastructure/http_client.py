"""HTTP JSON Client — httpx-backed JsonFetcher for @httpGet fields.

Invariants:
    - One shared AsyncClient per process; closed by the app lifespan
    - Non-2xx responses, transport failures, and non-JSON bodies → UpstreamHttpError
    - No retries, no caching: a failed call fails its field
    - Cancellation propagates untouched

Design Decisions:
    - Wrapper over raw client: error mapping kept out of resolvers (ADR: single responsibility)
    - Transport injectable: tests use httpx.MockTransport instead of patching
"""

import json
import logging

import httpx

from materializer.core.domain_types import JsonValue
from materializer.core.errors import UpstreamHttpError

logger = logging.getLogger(__name__)


class HttpJsonClient:
    """Issues GET requests and returns parsed JSON bodies."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds, transport=transport,
        )

    async def get_json(self, url: str) -> JsonValue:
        logger.info("GET %s", url, extra={"url": url})
        try:
            response = await self.client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "Upstream returned %d for %s", status_code, url,
                extra={"url": url, "error_code": "UPSTREAM_HTTP_ERROR"},
            )
            raise UpstreamHttpError(
                url, f"HTTP {status_code}", status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Upstream request failed for %s: %s", url, e,
                extra={"url": url, "error_code": "UPSTREAM_HTTP_ERROR"},
            )
            raise UpstreamHttpError(url, type(e).__name__) from e
        except json.JSONDecodeError as e:
            raise UpstreamHttpError(url, "response body is not JSON") from e

    async def aclose(self) -> None:
        await self.client.aclose()

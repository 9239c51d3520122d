"""Catalog Client - httpx wrapper that fetches one remote catalog per request.

Invariants:
    - Non-2xx responses, transport errors, timeouts and non-list bodies all raise FetchError
    - FetchError.resource is the catalog type; the URL goes into debug_info
    - No retry: a failure is reported once and the caller decides what to do
"""

import logging

import httpx

from splaroulette.core.domain_types import CatalogType
from splaroulette.core.errors import ErrorContext, FetchError

logger = logging.getLogger(__name__)


class CatalogClient:
    """CatalogFetcher over HTTP JSON endpoints."""

    def __init__(
        self,
        urls: dict[CatalogType, str],
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.urls = urls
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def fetch(self, catalog_type: CatalogType) -> list[dict]:
        url = self.urls[catalog_type]
        context = ErrorContext(
            catalog_type=catalog_type.value, debug_info={"url": url},
        )
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException:
            raise FetchError(catalog_type.value, None, "timeout", context)
        except httpx.HTTPError as e:
            raise FetchError(catalog_type.value, None, str(e), context)

        if not response.is_success:
            logger.error(
                f"Catalog request failed: {url}",
                extra={"resource": catalog_type.value, "status_code": response.status_code},
            )
            raise FetchError(catalog_type.value, response.status_code, context=context)

        try:
            data = response.json()
        except ValueError:
            raise FetchError(
                catalog_type.value, response.status_code, "invalid JSON body", context,
            )
        if not isinstance(data, list):
            raise FetchError(
                catalog_type.value, response.status_code, "expected a JSON array", context,
            )
        logger.debug(
            f"Fetched {len(data)} {catalog_type.value} records",
            extra={"resource": catalog_type.value},
        )
        return data

    async def aclose(self) -> None:
        await self.client.aclose()

import asyncio
import logging
from typing import Any, Protocol

from portal.config import settings
from portal.schemas.client import ClientRecord
from portal.schemas.registry import RegistryRecord
from portal.schemas.search import SearchResult, SourceType
from portal.schemas.stock import StockRecord
from portal.schemas.warehouse import Warehouse
from portal.services.warehouses import WAREHOUSES, match_warehouses

logger = logging.getLogger(__name__)

TARGET_URLS = {
    SourceType.REGISTRY: "/registry",
    SourceType.STOCK: "/stock",
    SourceType.CLIENT: "/profile",
    SourceType.WAREHOUSE: "/wherehouse",
}


class PaginatedProvider(Protocol):
    async def get_paginated(self, search: str | None = None, limit: int = 10, page: int = 1) -> Any:
        ...


def registry_result(item: RegistryRecord) -> SearchResult:
    return SearchResult(
        source_type=SourceType.REGISTRY,
        id=item.id,
        title=f"Order #{item.order_number}",
        subtitle=f"{item.branch} • {item.counterparty}",
        target_url=TARGET_URLS[SourceType.REGISTRY],
    )


def stock_result(item: StockRecord) -> SearchResult:
    return SearchResult(
        source_type=SourceType.STOCK,
        id=item.id,
        title=item.nomenclature or item.article,
        subtitle=f"Article: {item.article} • Warehouse: {item.warehouse}",
        target_url=TARGET_URLS[SourceType.STOCK],
    )


def client_result(item: ClientRecord) -> SearchResult:
    return SearchResult(
        source_type=SourceType.CLIENT,
        id=item.id,
        title=item.company_name,
        subtitle=f"TIN: {item.tin}",
        target_url=TARGET_URLS[SourceType.CLIENT],
    )


def warehouse_result(index: int, warehouse: Warehouse) -> SearchResult:
    return SearchResult(
        source_type=SourceType.WAREHOUSE,
        id=f"warehouse-{index}",
        title=warehouse.city,
        subtitle=warehouse.address,
        target_url=TARGET_URLS[SourceType.WAREHOUSE],
    )


_MAPPERS = {
    SourceType.REGISTRY: registry_result,
    SourceType.STOCK: stock_result,
    SourceType.CLIENT: client_result,
}


def is_qualifying(query: str, min_length: int | None = None) -> bool:
    limit = settings.search_min_query_length if min_length is None else min_length
    return len(query.strip()) >= limit


class SearchService:
    """Universal search across registry orders, stock, clients and warehouses.

    The three remote providers are queried concurrently and all of them are
    awaited before anything is returned. A provider that fails contributes no
    results; the call as a whole never raises for provider errors. Results keep
    source order (registry, stock, client, warehouse) and are truncated, not
    re-ranked.
    """

    def __init__(
        self,
        registry: PaginatedProvider,
        stock: PaginatedProvider,
        clients: PaginatedProvider,
        warehouses: list[Warehouse] | None = None,
    ):
        self._providers = [
            (SourceType.REGISTRY, registry),
            (SourceType.STOCK, stock),
            (SourceType.CLIENT, clients),
        ]
        self._warehouses = WAREHOUSES if warehouses is None else warehouses

    async def _lookup(self, provider: PaginatedProvider, term: str) -> list:
        page = await provider.get_paginated(
            search=term, limit=settings.search_provider_limit, page=1
        )
        return page.data or []

    async def search(self, query: str) -> list[SearchResult]:
        if not is_qualifying(query):
            return []
        term = query.strip()

        outcomes = await asyncio.gather(
            *(self._lookup(provider, term) for _, provider in self._providers),
            return_exceptions=True,
        )

        results: list[SearchResult] = []
        for (source, _), outcome in zip(self._providers, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("Search provider %s failed for %r: %s", source.value, term, outcome)
                continue
            results.extend(_MAPPERS[source](item) for item in outcome)

        results.extend(
            warehouse_result(index, w) for index, w in match_warehouses(term, self._warehouses)
        )
        return results[: settings.search_max_results]

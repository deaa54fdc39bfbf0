from portal.schemas.common import PaginatedResponse
from portal.schemas.stock import StockRecord
from portal.services.api_client import ApiClient


class StockService:
    BASE_URL = "/stocks"

    def __init__(self, api: ApiClient):
        self._api = api

    async def get_paginated(
        self, search: str | None = None, limit: int = 10, page: int = 1
    ) -> PaginatedResponse[StockRecord]:
        params: dict[str, str | int] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        data = await self._api.get(self.BASE_URL, params=params)
        return PaginatedResponse[StockRecord].model_validate(data)

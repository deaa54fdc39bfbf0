from portal.schemas.common import PaginatedResponse
from portal.schemas.registry import RegistryRecord
from portal.services.api_client import ApiClient


class RegistryService:
    BASE_URL = "/registries"

    def __init__(self, api: ApiClient):
        self._api = api

    async def get_paginated(
        self, search: str | None = None, limit: int = 10, page: int = 1
    ) -> PaginatedResponse[RegistryRecord]:
        params: dict[str, str | int] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        data = await self._api.get(self.BASE_URL, params=params)
        return PaginatedResponse[RegistryRecord].model_validate(data)

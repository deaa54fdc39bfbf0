from portal.schemas.client import ClientRecord
from portal.schemas.common import PaginatedResponse
from portal.services.api_client import ApiClient


class ClientService:
    # Client listing lives behind the admin prefix upstream
    BASE_URL = "/admin/clients"

    def __init__(self, api: ApiClient):
        self._api = api

    async def get_paginated(
        self, search: str | None = None, limit: int = 10, page: int = 1
    ) -> PaginatedResponse[ClientRecord]:
        params: dict[str, str | int] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        data = await self._api.get(self.BASE_URL, params=params)
        return PaginatedResponse[ClientRecord].model_validate(data)

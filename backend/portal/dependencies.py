import httpx
from fastapi import Depends, Header, HTTPException, Request

from portal.services.api_client import ApiClient
from portal.services.client_service import ClientService
from portal.services.registry_service import RegistryService
from portal.services.search_service import SearchService
from portal.services.stock_service import StockService


async def require_bearer_token(authorization: str | None = Header(None)):
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    token = authorization[7:].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return token


async def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


async def get_api_client(
    request: Request,
    token: str = Depends(require_bearer_token),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> ApiClient:
    # Forward cookies so the upstream can refresh an expired token
    return ApiClient(http, access_token=token, cookies=dict(request.cookies))


async def get_search_service(api: ApiClient = Depends(get_api_client)) -> SearchService:
    return SearchService(
        registry=RegistryService(api),
        stock=StockService(api),
        clients=ClientService(api),
    )

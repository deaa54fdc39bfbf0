from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from portal.dependencies import get_http_client
from portal.main import app

UPSTREAM_BASE_URL = "http://upstream.test/api"


class FakeUpstream:
    """Stand-in for the portal REST API behind an httpx.MockTransport."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, json=None, status_code: int = 200):
        self.routes[(method, path)] = lambda request: httpx.Response(status_code, json=json)

    def add_handler(self, method: str, path: str, handler):
        self.routes[(method, path)] = handler

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if self._path(r) == path]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        return request.url.path.removeprefix("/api")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, self._path(request)))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return route(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=UPSTREAM_BASE_URL,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(upstream):
    async def override_http_client():
        async with upstream.client() as http:
            yield http

    app.dependency_overrides[get_http_client] = override_http_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-access-token"}


def registry_item(i: int) -> dict:
    return {
        "id": f"r{i}",
        "orderNumber": f"10{i}",
        "branch": "Литвиново",
        "counterparty": f"Counterparty {i}",
        "status": "shipped",
    }


def stock_item(i: int, nomenclature: str | None = "Pallet wrap") -> dict:
    item = {"id": f"s{i}", "article": f"ART-{i}", "warehouse": "Чехов", "quantity": 3}
    if nomenclature is not None:
        item["nomenclature"] = f"{nomenclature} {i}"
    return item


def client_item(i: int) -> dict:
    return {"id": f"c{i}", "companyName": f"Company {i}", "TIN": f"77{i:08d}"}


def paginated(items: list[dict]) -> dict:
    return {
        "data": items,
        "meta": {"total": len(items), "page": 1, "limit": 5, "totalPages": 1},
    }

from fastapi import APIRouter, Depends, Query

from portal.dependencies import get_search_service
from portal.schemas.search import SearchResponse
from portal.services.search_service import SearchService

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search(
    q: str = Query("", max_length=200),
    service: SearchService = Depends(get_search_service),
):
    # Short queries are not an error; they just produce nothing
    results = await service.search(q)
    return SearchResponse(results=results, total=len(results), query=q)

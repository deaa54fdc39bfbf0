from fastapi import APIRouter, Depends

from portal.dependencies import require_bearer_token
from portal.schemas.warehouse import WarehouseListResponse
from portal.services.warehouses import WAREHOUSES

router = APIRouter(
    prefix="/warehouses",
    tags=["warehouses"],
    dependencies=[Depends(require_bearer_token)],
)


@router.get("", response_model=WarehouseListResponse)
async def list_warehouses():
    return WarehouseListResponse(warehouses=WAREHOUSES, total=len(WAREHOUSES))

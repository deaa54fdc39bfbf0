from pydantic import BaseModel


class Warehouse(BaseModel):
    city: str
    address: str


class WarehouseListResponse(BaseModel):
    warehouses: list[Warehouse]
    total: int

from pydantic import BaseModel, ConfigDict, Field


class RegistryRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    order_number: str = Field(alias="orderNumber")
    branch: str
    counterparty: str
    order_type: str | None = Field(default=None, alias="orderType")
    status: str | None = None
    client_tin: str | None = Field(default=None, alias="clientTIN")

from pydantic import BaseModel, ConfigDict, Field


class StockRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    article: str
    warehouse: str
    nomenclature: str | None = None  # not every imported row carries a name
    quantity: int | None = None
    client_tin: str | None = Field(default=None, alias="clientTIN")

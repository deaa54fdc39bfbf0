from pydantic import BaseModel, ConfigDict, Field


class ClientRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    company_name: str = Field(alias="companyName")
    tin: str = Field(alias="TIN")

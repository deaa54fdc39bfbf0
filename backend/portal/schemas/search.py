from enum import Enum

from pydantic import BaseModel, computed_field


class SourceType(str, Enum):
    REGISTRY = "registry"
    STOCK = "stock"
    CLIENT = "client"
    WAREHOUSE = "warehouse"


class SearchResult(BaseModel):
    source_type: SourceType
    id: str
    title: str
    subtitle: str | None = None
    target_url: str

    @computed_field
    @property
    def key(self) -> str:
        # ids are only unique within one source type
        return f"{self.source_type.value}-{self.id}"


class SearchResponse(BaseModel):
    results: list[SearchResult]
    total: int
    query: str

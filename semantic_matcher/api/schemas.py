"""
Response models for the REST API.
Field names follow the camelCase JSON the API has always returned.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class ErrorResponse(BaseModel):
    error: str
    message: str


class NotFoundResponse(ErrorResponse):
    available_endpoints: List[str] = Field(alias="availableEndpoints")

    model_config = ConfigDict(populate_by_name=True)


class SearchResultModel(BaseModel):
    id: str
    text: str
    metadata: Dict[str, Any]
    distance: float
    quality: str
    quality_label: str = Field(alias="qualityLabel")

    model_config = ConfigDict(populate_by_name=True)


class SearchMetadata(BaseModel):
    requested_top_k: Any = Field(alias="requestedTopK")
    actual_top_k: int = Field(alias="actualTopK")
    timestamp: str

    model_config = ConfigDict(populate_by_name=True)


class SearchResponseModel(BaseModel):
    query: str
    results: List[SearchResultModel]
    result_count: int = Field(alias="resultCount")
    search_metadata: SearchMetadata = Field(alias="searchMetadata")

    model_config = ConfigDict(populate_by_name=True)


class StatsConfig(BaseModel):
    default_top_k: int = Field(alias="defaultTopK")
    max_top_k: int = Field(alias="maxTopK")

    model_config = ConfigDict(populate_by_name=True)


class StatsResponse(BaseModel):
    collection_name: str = Field(alias="collectionName")
    document_count: int = Field(alias="documentCount")
    initialized: bool
    chroma_url: str = Field(alias="chromaUrl")
    config: StatsConfig
    timestamp: str

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: str
    error: Optional[str] = None


class ResetResponse(BaseModel):
    message: str
    timestamp: str

"""
Domain types shared by the loaders, the collection manager and the query executor.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from enum import Enum
from typing import Any, Dict, List, Mapping


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class MatcherState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    RESETTING = "resetting"
    FAILED = "failed"


@dataclass(frozen=True)
class Record:
    """Represents one document to be ingested into the collection."""

    id: str
    """Unique identifier within a load batch"""

    text: str
    """Document body that the store embeds"""

    metadata: Mapping[str, Any] = field(default_factory=dict)
    """Free-form scalar (or list of scalar) attributes, read-only"""

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata or {})))

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "Record":
        return cls(id=item["id"], text=item["text"], metadata=dict(item.get("metadata") or {}))


@dataclass(frozen=True)
class SearchResultItem:
    """Represents a classified search hit."""

    id: str
    text: str
    metadata: Dict[str, Any]
    distance: float
    """Raw distance rounded to 4 decimal digits"""
    quality: str
    quality_label: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "metadata": self.metadata,
            "distance": self.distance,
            "quality": self.quality,
            "qualityLabel": self.quality_label,
        }


@dataclass(frozen=True)
class SearchResponse:
    """Bundle returned by a search: trimmed query, hits in store order, bookkeeping."""

    query: str
    results: List[SearchResultItem]
    requested_top_k: Any
    actual_top_k: int
    timestamp: str

    @property
    def result_count(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "results": [result.to_dict() for result in self.results],
            "resultCount": self.result_count,
            "searchMetadata": {
                "requestedTopK": self.requested_top_k,
                "actualTopK": self.actual_top_k,
                "timestamp": self.timestamp,
            },
        }

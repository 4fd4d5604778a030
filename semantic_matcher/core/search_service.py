"""
Query executor: validates and bounds a search request, delegates the
nearest-neighbour query to the collection and classifies each hit.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..util.logging import logger
from ..vector.types import SearchResponse, SearchResultItem
from .errors import SearchError, ValidationError
from .quality import get_match_quality, is_anomalous_distance


def validate_query(query: Any) -> str:
    """Return the trimmed query or raise ValidationError."""
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("Query must be a non-empty string")
    return query.strip()


def clamp_top_k(requested: Any, max_top_k: int) -> int:
    """
    Clamp a requested result count into [1, max_top_k].

    Out-of-range values are adjusted rather than rejected, and the adjustment
    is logged. Non-integers (including bools) are rejected.
    """
    if isinstance(requested, bool) or not isinstance(requested, int):
        raise ValidationError(f"topK must be an integer, got {requested!r}")

    valid_top_k = max(1, min(requested, max_top_k))
    if valid_top_k != requested:
        logger.warning(f"topK adjusted from {requested} to {valid_top_k}")
    return valid_top_k


def _first(results: Dict[str, Any], key: str) -> List[Any]:
    """Chroma returns one list per query text; we always send exactly one."""
    batches = results.get(key) or []
    if not batches:
        return []
    return list(batches[0] or [])


def format_results(results: Dict[str, Any]) -> List[SearchResultItem]:
    """
    Turn a raw collection.query() payload into classified result items.

    Store order (ascending distance) is preserved as-is.
    """
    ids = _first(results, "ids")
    documents = _first(results, "documents")
    metadatas = _first(results, "metadatas")
    distances = _first(results, "distances")

    formatted = []
    for index, record_id in enumerate(ids):
        distance = float(distances[index])
        band = get_match_quality(distance)

        if is_anomalous_distance(distance):
            logger.warning("Anomalous distance from store", {"id": record_id, "distance": distance})

        formatted.append(SearchResultItem(
            id=record_id,
            text=documents[index] if index < len(documents) else "",
            metadata=dict(metadatas[index] or {}) if index < len(metadatas) else {},
            distance=round(distance, 4),
            quality=band.quality,
            quality_label=band.label,
        ))
    return formatted


def prepare_search(query: Any, top_k: Any, max_top_k: int) -> Tuple[str, int]:
    """Validate the query text and clamp top_k; shared by every search entry point."""
    return validate_query(query), clamp_top_k(top_k, max_top_k)


def semantic_search(collection: Any, query: Any, top_k: Any, max_top_k: int) -> SearchResponse:
    """
    Perform a semantic search against a ready collection.

    Args:
        collection: ChromaDB collection handle
        query: Search text, must be non-empty after trimming
        top_k: Requested result count, clamped into [1, max_top_k]
        max_top_k: Upper bound for top_k

    Returns:
        SearchResponse with classified results

    Raises:
        ValidationError: bad query or non-integer top_k
        SearchError: the store failed; the original message is preserved
    """
    trimmed, valid_top_k = prepare_search(query, top_k, max_top_k)

    logger.debug("Performing semantic search", {"query": trimmed, "top_k": valid_top_k})

    try:
        raw = collection.query(
            query_texts=[trimmed],
            n_results=valid_top_k,
            include=["documents", "metadatas", "distances"],
        )
        formatted = format_results(raw)
    except Exception as e:
        logger.error("Search query failed", {"query": trimmed, "error": str(e)})
        raise SearchError(f"Search failed: {e}") from e

    best_distance: Optional[float] = formatted[0].distance if formatted else None
    logger.log_search(trimmed, valid_top_k, len(formatted), best_distance)

    return SearchResponse(
        query=trimmed,
        results=formatted,
        requested_top_k=top_k,
        actual_top_k=valid_top_k,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

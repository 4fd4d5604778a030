"""
Embedding function selection for the collection.
Embeddings are computed by the chromadb package; this module only picks which
function the collection is created with.
"""

from typing import Optional

from ..core.config import EMBEDDING_PROVIDERS, Settings
from ..util.logging import logger


def get_embedding_function(settings: Settings) -> Optional[object]:
    """Get the configured embedding function.

    Returns None for the chromadb default (ONNX all-MiniLM-L6-v2), in which
    case the caller should not pass an embedding function at all.
    """
    provider = settings.embedding_provider

    if provider == "sentence-transformers":
        from chromadb.utils.embedding_functions import SentenceTransformerEmbeddingFunction
        logger.debug("Using sentence-transformers embeddings", {"model": settings.embedding_model})
        return SentenceTransformerEmbeddingFunction(model_name=settings.embedding_model)

    if provider not in EMBEDDING_PROVIDERS:
        logger.warning(f"Unknown embedding provider: {provider}, falling back to default")

    return None

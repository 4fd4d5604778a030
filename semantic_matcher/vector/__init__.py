"""
Thin layer over the ChromaDB client: connection, collection lifecycle, shared types.
"""

# Package initialization for vector module
from .collection import CollectionManager, flatten_metadata, prepare_batch
from .connection import ConnectionManager, default_client_factory
from .embeddings import get_embedding_function
from .types import ConnectionState, MatcherState, Record, SearchResponse, SearchResultItem

__all__ = [
    'CollectionManager',
    'ConnectionManager',
    'ConnectionState',
    'MatcherState',
    'Record',
    'SearchResponse',
    'SearchResultItem',
    'default_client_factory',
    'flatten_metadata',
    'get_embedding_function',
    'prepare_batch'
]

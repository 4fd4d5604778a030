"""
SemanticMatcher - lifecycle around the ChromaDB collection.

Connects with retry, recreates and populates the collection, then answers
searches. initialize() and reset() are serialized by a lock; search() only
reads the collection handle and never takes it.
"""

import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from ..data.loaders import DataLoader, create_data_loader
from ..util.logging import logger
from ..vector.collection import CollectionManager
from ..vector.connection import ConnectionManager
from ..vector.types import MatcherState, SearchResponse
from .config import Settings
from .errors import NotInitializedError
from .search_service import semantic_search


class SemanticMatcher:
    """Main interface for semantic search operations."""

    def __init__(
        self,
        settings: Settings,
        data_loader: Optional[DataLoader] = None,
        client_factory: Optional[Callable[[Settings], Any]] = None,
        sleep: Optional[Callable[[float], None]] = None,
        embedding_function: Optional[object] = None,
    ):
        """
        Args:
            settings: Immutable application settings
            data_loader: Data source; defaults to the one named by DATA_LOADER
            client_factory: Builds the ChromaDB client (tests pass a fake)
            sleep: Sleep used between connection retries
            embedding_function: Overrides EMBEDDING_PROVIDER selection
        """
        self.settings = settings
        self.collection_name = settings.collection_name

        connection_kwargs = {"client_factory": client_factory}
        if sleep is not None:
            connection_kwargs["sleep"] = sleep
        self.connection = ConnectionManager(settings, **connection_kwargs)
        self.collections = CollectionManager(settings, embedding_function=embedding_function)

        self.data_loader = data_loader or create_data_loader(settings.data_loader, settings.data_loader_options())

        self.collection = None
        self.state = MatcherState.UNINITIALIZED
        self._lifecycle_lock = threading.Lock()

        logger.debug("SemanticMatcher instance created", {
            "chroma_url": settings.chroma_url,
            "collection_name": self.collection_name,
            "data_loader": type(self.data_loader).__name__,
        })

    @property
    def initialized(self) -> bool:
        return self.state == MatcherState.READY

    def _initialize(self) -> int:
        if self.state == MatcherState.READY:
            logger.debug("SemanticMatcher already initialized")
            return 0

        logger.info("Initializing SemanticMatcher")
        self.state = MatcherState.INITIALIZING
        self.collection = None

        try:
            self.connection.connect()
            collection = self.collections.ensure_collection(self.connection.client, self.collection_name)
            document_count = self.collections.load_data(collection, self.data_loader)
        except Exception as e:
            self.state = MatcherState.FAILED
            logger.error("SemanticMatcher initialization failed", {"error": str(e)})
            raise

        self.collection = collection
        self.state = MatcherState.READY
        logger.info("SemanticMatcher initialization complete", {
            "collection_name": self.collection_name,
            "document_count": document_count,
        })
        return document_count

    def initialize(self) -> int:
        """
        Connect, recreate the collection and load data.

        A no-op when already ready. After a failure the matcher is FAILED and
        initialize() may be called again.

        Returns:
            Number of documents loaded (0 when already initialized)
        """
        with self._lifecycle_lock:
            return self._initialize()

    def reset(self) -> int:
        """Drop the ready state and replay initialize()."""
        with self._lifecycle_lock:
            logger.info("Resetting SemanticMatcher")
            self.state = MatcherState.RESETTING
            document_count = self._initialize()
            logger.info("SemanticMatcher reset complete")
            return document_count

    def _require_ready(self) -> Any:
        collection = self.collection
        if self.state != MatcherState.READY or collection is None:
            raise NotInitializedError("SemanticMatcher not initialized. Call initialize() first.")
        return collection

    def search(self, query: Any, top_k: Any = None) -> SearchResponse:
        """
        Perform semantic search query.

        Args:
            query: Search query text
            top_k: Number of results; DEFAULT_TOP_K when None

        Raises:
            NotInitializedError: matcher not ready
            ValidationError: empty query or non-integer top_k
            SearchError: the store query failed
        """
        collection = self._require_ready()
        if top_k is None:
            top_k = self.settings.default_top_k
        return semantic_search(collection, query, top_k, self.settings.max_top_k)

    def get_stats(self) -> Dict[str, Any]:
        """Collection statistics and configuration summary."""
        collection = self._require_ready()

        try:
            count = collection.count()
        except Exception as e:
            logger.error("Failed to get stats", {"error": str(e)})
            raise

        return {
            "collectionName": self.collection_name,
            "documentCount": count,
            "initialized": self.initialized,
            "chromaUrl": self.settings.chroma_url,
            "config": {
                "defaultTopK": self.settings.default_top_k,
                "maxTopK": self.settings.max_top_k,
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def health_check(self) -> bool:
        """Verify ChromaDB connectivity with a single heartbeat."""
        return self.connection.heartbeat()

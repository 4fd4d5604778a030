"""
Collection lifecycle: destructive recreate and bulk population.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.config import Settings
from ..util.logging import logger
from .embeddings import get_embedding_function
from .types import Record


def flatten_metadata(record: Record) -> Dict[str, Any]:
    """
    Build the metadata dict stored alongside a document.

    Strings and numbers pass through. Bools and None are stored as "true",
    "false" and "null", lists are joined with ", " and anything else is
    stringified. The record id and original text are injected so a hit can
    be mapped back to its record.
    """
    clean_metadata: Dict[str, Any] = {
        "id": str(record.id),
        "originalText": str(record.text),
    }

    for key, value in (record.metadata or {}).items():
        if isinstance(value, bool):
            clean_metadata[key] = "true" if value else "false"
        elif value is None:
            clean_metadata[key] = "null"
        elif isinstance(value, (str, int, float)):
            clean_metadata[key] = value
        elif isinstance(value, (list, tuple)):
            clean_metadata[key] = ", ".join(str(v) for v in value)
        else:
            clean_metadata[key] = str(value)

    return clean_metadata


def prepare_batch(records: Sequence[Record]) -> Tuple[List[str], List[str], List[Dict[str, Any]]]:
    """Split records into the parallel ids/documents/metadatas lists add() takes."""
    ids = [str(record.id) for record in records]
    documents = [str(record.text) for record in records]
    metadatas = [flatten_metadata(record) for record in records]
    return ids, documents, metadatas


class CollectionManager:
    """Creates the configured collection and fills it from a data loader."""

    def __init__(self, settings: Settings, embedding_function: Optional[object] = None):
        self.settings = settings
        self._embedding_function = embedding_function

    def _get_embedding_function(self) -> Optional[object]:
        if self._embedding_function is None:
            self._embedding_function = get_embedding_function(self.settings)
        return self._embedding_function

    def ensure_collection(self, client: Any, name: Optional[str] = None) -> Any:
        """
        Create or recreate the collection.

        Any existing collection with the same name is deleted first; a
        missing collection is not an error.

        Returns:
            ChromaDB collection handle
        """
        name = name or self.settings.collection_name
        logger.info("Setting up collection", {"name": name})

        # Remove existing collection if it exists
        try:
            client.delete_collection(name=name)
            logger.log_collection_operation("delete", name)
        except Exception as e:
            logger.log_collection_operation("delete", name, {"reason": str(e)[:100]}, status="skipped")

        create_kwargs = {
            "name": name,
            "metadata": {
                "description": self.settings.collection_description,
                "created": datetime.now(timezone.utc).isoformat(),
            },
        }
        embedding_function = self._get_embedding_function()
        if embedding_function is not None:
            create_kwargs["embedding_function"] = embedding_function

        collection = client.create_collection(**create_kwargs)

        logger.log_collection_operation("create", name)
        return collection

    def load_data(self, collection: Any, loader) -> int:
        """
        Load data into the collection using the given data loader.

        Returns:
            Number of documents inserted

        Raises:
            LoadError: if the loader fails to read or validate its source
        """
        logger.info("Loading data into collection")

        try:
            records = loader.load()

            if len(records) == 0:
                logger.warning("No data to load")
                return 0

            ids, documents, metadatas = prepare_batch(records)

            collection.add(documents=documents, metadatas=metadatas, ids=ids)

            logger.info(f"Successfully loaded {len(records)} documents into collection")
            return len(records)
        except Exception as e:
            logger.error("Failed to load data into collection", {"error": str(e)})
            raise

"""
Pluggable data sources for populating the collection.
"""

import copy
import json
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.errors import LoadError
from ..util.logging import logger
from ..vector.types import Record
from .sample_data import SAMPLE_DATA


class LoaderType(str, Enum):
    SAMPLE = "sample"
    JSON = "json"


class DataLoader(ABC):
    """Abstract interface for data sources."""

    @abstractmethod
    def load(self) -> List[Record]:
        """Load and validate records; raise LoadError on any failure."""
        pass

    def validate_data(self, data: Any) -> None:
        """
        Validate raw data before conversion to records.

        The whole batch is rejected on the first bad element.

        Raises:
            LoadError: describing the first violation
        """
        if not isinstance(data, list):
            raise LoadError("Data must be an array of objects")

        seen_ids = set()
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise LoadError(f"Item at index {index} is not an object")
            if not isinstance(item.get("id"), str) or not item["id"]:
                raise LoadError(f"Item at index {index} missing valid 'id' field")
            if not isinstance(item.get("text"), str) or not item["text"]:
                raise LoadError(f"Item at index {index} missing valid 'text' field")
            if item.get("metadata") is not None and not isinstance(item["metadata"], dict):
                raise LoadError(f"Item at index {index} has invalid 'metadata' field")
            if item["id"] in seen_ids:
                raise LoadError(f"Item at index {index} has duplicate id '{item['id']}'")
            seen_ids.add(item["id"])

    def to_records(self, data: List[Dict[str, Any]]) -> List[Record]:
        self.validate_data(data)
        return [Record.from_dict(item) for item in data]


class SampleDataLoader(DataLoader):
    """Built-in demonstration records."""

    def load(self) -> List[Record]:
        logger.info("Loading sample data")
        try:
            records = self.to_records(copy.deepcopy(SAMPLE_DATA))
        except LoadError as e:
            logger.error(f"Sample data validation failed: {e}")
            raise

        logger.info(f"Loaded {len(records)} sample items")
        return records


class JSONDataLoader(DataLoader):
    """Records from a JSON file whose top level is an array of objects."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def load(self) -> List[Record]:
        logger.info(f"Loading data from JSON file: {self.file_path}")
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            records = self.to_records(data)
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.error(f"Failed to load JSON data: {e}")
            raise LoadError(f"Could not read {self.file_path}: {e}") from e
        except LoadError as e:
            logger.error(f"Failed to load JSON data: {e}")
            raise

        logger.info(f"Loaded {len(records)} items from JSON file")
        return records


def create_data_loader(loader_type: Union[str, LoaderType, None] = "sample", options: Optional[Dict[str, Any]] = None) -> DataLoader:
    """
    Create a data loader for the given type tag.

    Unknown tags fall back to the sample loader with a warning.

    Raises:
        LoadError: for the json loader without a file_path option
    """
    options = options or {}
    tag = (loader_type.value if isinstance(loader_type, LoaderType) else str(loader_type or "sample")).lower()

    if tag == LoaderType.SAMPLE.value:
        return SampleDataLoader()

    if tag == LoaderType.JSON.value:
        file_path = options.get("file_path")
        if not file_path:
            raise LoadError("JSON data loader requires file_path option")
        return JSONDataLoader(file_path)

    logger.warning(f"Unknown data loader type: {loader_type}, falling back to sample")
    return SampleDataLoader()

"""
ChromaDB connection management with fixed-interval retry.
"""

import time
from typing import Any, Callable, Optional

import chromadb

from ..core.config import Settings
from ..core.errors import StoreConnectionError
from ..util.logging import logger
from .types import ConnectionState


def default_client_factory(settings: Settings) -> Any:
    """Create a ChromaDB HTTP client for the configured URL."""
    params = settings.chroma_connection_params()
    return chromadb.HttpClient(host=params["host"], port=params["port"], ssl=params["ssl"])


class ConnectionManager:
    """
    Owns the ChromaDB client and its liveness.

    connect() probes client.heartbeat() up to CHROMADB_RETRIES times with a
    fixed CHROMADB_RETRY_DELAY sleep between attempts. The client itself is
    created lazily so that constructing a manager never touches the network.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Optional[Callable[[Settings], Any]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self._client_factory = client_factory or default_client_factory
        self._sleep = sleep
        self._client = None
        self.state = ConnectionState.DISCONNECTED

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._client_factory(self.settings)
        return self._client

    def connect(self) -> bool:
        """
        Establish connection to ChromaDB with retry logic.

        Returns:
            True once a heartbeat succeeds

        Raises:
            StoreConnectionError: after the retry budget is exhausted
        """
        url = self.settings.chroma_url
        budget = self.settings.heartbeat_retries
        logger.info("Connecting to ChromaDB", {"url": url})

        self.state = ConnectionState.CONNECTING
        retries = budget
        last_error: Optional[Exception] = None

        while retries > 0:
            try:
                self.client.heartbeat()
                self.state = ConnectionState.READY
                logger.info("Successfully connected to ChromaDB")
                return True
            except Exception as e:
                last_error = e
                retries -= 1
                logger.log_connection_attempt(url, budget - retries, retries, str(e))

                if retries > 0:
                    self._sleep(self.settings.heartbeat_delay_sec)

        self.state = ConnectionState.FAILED
        last_message = str(last_error) if last_error is not None else None
        message = f"Failed to connect to ChromaDB after {budget} attempts"
        logger.error(message, {"last_error": last_message})
        raise StoreConnectionError(message, attempts=budget, last_error=last_message) from last_error

    def heartbeat(self) -> bool:
        """Single liveness probe without retry; never raises."""
        try:
            self.client.heartbeat()
            return True
        except Exception as e:
            logger.error("Health check failed", {"error": str(e)})
            return False

"""
Configuration management for Semantic Matcher.
All values come from the environment (optionally a .env file) with defaults.
"""

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

VERSION = "2.0.0"

# Log levels accepted by LOG_LEVEL
LOG_LEVELS = ["error", "warn", "info", "debug"]

# Values accepted by EMBEDDING_PROVIDER
EMBEDDING_PROVIDERS = ["default", "sentence-transformers"]


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    """Parse a positive integer, falling back to the default on anything else."""
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    """Immutable application settings, built once at process start."""

    # ChromaDB connection
    chroma_url: str = "http://chromadb:8000"
    heartbeat_retries: int = 30
    heartbeat_delay_ms: int = 2000

    # Collection
    collection_name: str = "semantic_matches"
    collection_description: str = "Semantic matching collection"

    # API server
    host: str = "localhost"
    port: int = 3000

    # Search
    default_top_k: int = 3
    max_top_k: int = 20

    # Environment and logging
    environment: str = "development"
    log_level: str = "info"

    # Data source
    data_loader: str = "sample"
    data_file: Optional[str] = None

    # Embeddings (computed client-side by the chromadb package)
    embedding_provider: str = "default"
    embedding_model: str = "all-MiniLM-L6-v2"

    cors_origins: Tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        log_level = _env_str(env, "LOG_LEVEL", defaults.log_level).lower()
        if log_level == "warning":
            log_level = "warn"

        cors = _env_str(env, "CORS_ORIGINS", "*")

        return cls(
            chroma_url=_env_str(env, "CHROMADB_URL", defaults.chroma_url),
            heartbeat_retries=_env_int(env, "CHROMADB_RETRIES", defaults.heartbeat_retries),
            heartbeat_delay_ms=_env_int(env, "CHROMADB_RETRY_DELAY", defaults.heartbeat_delay_ms),
            collection_name=_env_str(env, "COLLECTION_NAME", defaults.collection_name),
            collection_description=_env_str(env, "COLLECTION_DESCRIPTION", defaults.collection_description),
            host=_env_str(env, "HOST", defaults.host),
            port=_env_int(env, "PORT", defaults.port),
            default_top_k=_env_int(env, "DEFAULT_TOP_K", defaults.default_top_k),
            max_top_k=_env_int(env, "MAX_TOP_K", defaults.max_top_k),
            environment=_env_str(env, "APP_ENV", defaults.environment).lower(),
            log_level=log_level,
            data_loader=_env_str(env, "DATA_LOADER", defaults.data_loader).lower(),
            data_file=env.get("DATA_FILE") or None,
            embedding_provider=_env_str(env, "EMBEDDING_PROVIDER", defaults.embedding_provider).lower(),
            embedding_model=_env_str(env, "EMBEDDING_MODEL", defaults.embedding_model),
            cors_origins=tuple(origin.strip() for origin in cors.split(",") if origin.strip()),
        )

    @property
    def heartbeat_delay_sec(self) -> float:
        return self.heartbeat_delay_ms / 1000.0

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def chroma_connection_params(self) -> dict:
        """Split CHROMADB_URL into the host/port/ssl triple HttpClient expects."""
        parsed = urlparse(self.chroma_url if "://" in self.chroma_url else f"http://{self.chroma_url}")
        ssl = parsed.scheme == "https"
        port = parsed.port or (443 if ssl else 8000)
        return {"host": parsed.hostname or "localhost", "port": port, "ssl": ssl}

    def data_loader_options(self) -> dict:
        return {"file_path": self.data_file} if self.data_file else {}

    def validate(self) -> List[str]:
        """Validate configuration and return any issues."""
        issues = []

        if self.default_top_k > self.max_top_k:
            issues.append(f"DEFAULT_TOP_K ({self.default_top_k}) exceeds MAX_TOP_K ({self.max_top_k})")

        if self.log_level not in LOG_LEVELS:
            issues.append(f"Invalid LOG_LEVEL: {self.log_level}")

        if self.data_loader == "json" and not self.data_file:
            issues.append("DATA_LOADER=json requires DATA_FILE")

        if self.embedding_provider not in EMBEDDING_PROVIDERS:
            issues.append(f"Invalid EMBEDDING_PROVIDER: {self.embedding_provider}")

        return issues


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings.from_env()

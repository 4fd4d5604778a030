"""
Configuration tests - environment parsing, defaults and validation.
"""

import dataclasses

import pytest

from semantic_matcher.core.config import EMBEDDING_PROVIDERS, Settings


def test_defaults_without_environment():
    """Test that an empty environment yields the documented defaults."""
    settings = Settings.from_env({})

    assert settings.chroma_url == "http://chromadb:8000"
    assert settings.heartbeat_retries == 30
    assert settings.heartbeat_delay_ms == 2000
    assert settings.collection_name == "semantic_matches"
    assert settings.collection_description == "Semantic matching collection"
    assert settings.port == 3000
    assert settings.default_top_k == 3
    assert settings.max_top_k == 20
    assert settings.environment == "development"
    assert settings.log_level == "info"
    assert settings.data_loader == "sample"
    assert settings.data_file is None


def test_values_read_from_environment():
    settings = Settings.from_env({
        "CHROMADB_URL": "https://vectors.example.com",
        "CHROMADB_RETRIES": "5",
        "CHROMADB_RETRY_DELAY": "250",
        "COLLECTION_NAME": "people",
        "PORT": "8080",
        "DEFAULT_TOP_K": "4",
        "MAX_TOP_K": "10",
        "APP_ENV": "Production",
        "LOG_LEVEL": "WARNING",
        "DATA_LOADER": "JSON",
        "DATA_FILE": "/tmp/records.json",
    })

    assert settings.chroma_url == "https://vectors.example.com"
    assert settings.heartbeat_retries == 5
    assert settings.heartbeat_delay_sec == 0.25
    assert settings.collection_name == "people"
    assert settings.port == 8080
    assert settings.default_top_k == 4
    assert settings.max_top_k == 10
    assert settings.environment == "production"
    assert settings.is_development is False
    assert settings.log_level == "warn"
    assert settings.data_loader == "json"
    assert settings.data_loader_options() == {"file_path": "/tmp/records.json"}


@pytest.mark.parametrize("raw", ["abc", "0", "-3", ""])
def test_invalid_integers_fall_back_to_default(raw):
    """Test that unparseable or non-positive integers use the default."""
    settings = Settings.from_env({"CHROMADB_RETRIES": raw, "MAX_TOP_K": raw})

    assert settings.heartbeat_retries == 30
    assert settings.max_top_k == 20


def test_settings_are_immutable():
    settings = Settings()

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.max_top_k = 50


def test_chroma_connection_params():
    assert Settings(chroma_url="http://chromadb:8000").chroma_connection_params() == {
        "host": "chromadb", "port": 8000, "ssl": False,
    }
    assert Settings(chroma_url="https://db.example.com").chroma_connection_params() == {
        "host": "db.example.com", "port": 443, "ssl": True,
    }
    assert Settings(chroma_url="localhost:9000").chroma_connection_params() == {
        "host": "localhost", "port": 9000, "ssl": False,
    }


def test_validate_reports_issues():
    settings = Settings(default_top_k=30, max_top_k=20, data_loader="json", log_level="loud")

    issues = settings.validate()

    assert any("DEFAULT_TOP_K" in issue for issue in issues)
    assert any("DATA_FILE" in issue for issue in issues)
    assert any("LOG_LEVEL" in issue for issue in issues)


def test_validate_default_settings_clean():
    assert Settings().validate() == []


@pytest.mark.parametrize("provider", EMBEDDING_PROVIDERS)
def test_validate_accepts_known_embedding_providers(provider):
    assert Settings(embedding_provider=provider).validate() == []


def test_validate_rejects_unknown_embedding_provider():
    issues = Settings(embedding_provider="word2vec").validate()

    assert issues == ["Invalid EMBEDDING_PROVIDER: word2vec"]

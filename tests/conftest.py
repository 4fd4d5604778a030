import pytest

from chroma_fakes import FakeChromaClient
from semantic_matcher.core.config import Settings
from semantic_matcher.core.matcher import SemanticMatcher


@pytest.fixture
def settings():
    """Settings with a short retry budget and no real delays."""
    return Settings(heartbeat_retries=3, heartbeat_delay_ms=10)


@pytest.fixture
def fake_client():
    return FakeChromaClient()


@pytest.fixture
def make_matcher(settings, fake_client):
    """Build a SemanticMatcher wired to the fake client; sleeps are recorded, not slept."""
    sleeps = []

    def _make(client=None, **kwargs):
        client = client or fake_client
        matcher_settings = kwargs.pop("settings", settings)
        matcher = SemanticMatcher(
            matcher_settings,
            client_factory=lambda _settings: client,
            sleep=sleeps.append,
            **kwargs,
        )
        matcher.sleeps = sleeps
        return matcher

    return _make

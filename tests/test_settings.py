"""
Tests for application settings.
"""

import pytest

from pokechat.config.settings import DEFAULT_KB_PATH, Settings
from pokechat.errors import MissingCredentialError


class TestSettings:
    """Test defaults, environment overrides and the credential check."""

    def test_defaults(self, monkeypatch):
        for name in ("GOOGLE_API_KEY", "GEMINI_MODEL", "SIMILARITY_THRESHOLD", "RETRIEVAL_TOP_K", "KB_DEBUG"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.gemini_model == "gemini-2.5-flash"
        assert settings.similarity_threshold == pytest.approx(0.60)
        assert settings.retrieval_top_k == 2
        assert settings.kb_debug is False
        assert settings.kb_path == DEFAULT_KB_PATH
        assert settings.google_api_key is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SIMILARITY_THRESHOLD", "0.75")
        monkeypatch.setenv("KB_DEBUG", "1")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")

        settings = Settings(_env_file=None)

        assert settings.similarity_threshold == pytest.approx(0.75)
        assert settings.kb_debug is True
        assert settings.gemini_model == "gemini-2.5-pro"

    def test_require_api_key(self):
        assert Settings(_env_file=None, google_api_key="abc").require_api_key() == "abc"

    @pytest.mark.parametrize("key", [None, "", "   "])
    def test_require_api_key_missing(self, key):
        with pytest.raises(MissingCredentialError):
            Settings(_env_file=None, google_api_key=key).require_api_key()

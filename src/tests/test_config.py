"""
Tests for environment-driven configuration.
"""

import pytest

from captionkit.config import ExtractorConfig

_ENV_VARS = (
    "CAPTIONKIT_LANGUAGES",
    "CAPTIONKIT_YT_DLP",
    "YOUTUBE_TRANSCRIPT_API_TOKEN",
    "CAPTIONKIT_HTTP_TIMEOUT",
    "CAPTIONKIT_PROCESS_TIMEOUT",
    "CAPTIONKIT_VTT_JOIN_LINES",
    "CAPTIONKIT_TEMP_DIR",
)


def _clear_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults(monkeypatch):
    """Test defaults with an empty environment."""
    _clear_env(monkeypatch)

    config = ExtractorConfig.from_env()

    assert config == ExtractorConfig()
    assert config.languages == ("en",)
    assert config.api_token is None
    assert config.process_timeout is None


def test_from_env_overrides(monkeypatch):
    """Test every supported variable."""
    _clear_env(monkeypatch)
    monkeypatch.setenv("CAPTIONKIT_LANGUAGES", "de, en ,")
    monkeypatch.setenv("CAPTIONKIT_YT_DLP", "/usr/local/bin/yt-dlp")
    monkeypatch.setenv("YOUTUBE_TRANSCRIPT_API_TOKEN", "abc123")
    monkeypatch.setenv("CAPTIONKIT_HTTP_TIMEOUT", "5")
    monkeypatch.setenv("CAPTIONKIT_PROCESS_TIMEOUT", "120")
    monkeypatch.setenv("CAPTIONKIT_VTT_JOIN_LINES", "true")
    monkeypatch.setenv("CAPTIONKIT_TEMP_DIR", "/tmp/captions")

    config = ExtractorConfig.from_env()

    assert config.languages == ("de", "en")
    assert config.yt_dlp_path == "/usr/local/bin/yt-dlp"
    assert config.api_token == "abc123"
    assert config.http_timeout == 5.0
    assert config.process_timeout == 120.0
    assert config.vtt_join_lines is True
    assert config.temp_dir == "/tmp/captions"


def test_placeholder_token_is_unset(monkeypatch):
    """Test that the sample .env token value is ignored."""
    _clear_env(monkeypatch)
    monkeypatch.setenv("YOUTUBE_TRANSCRIPT_API_TOKEN", "your_transcript_api_token_here")

    assert ExtractorConfig.from_env().api_token is None


def test_from_env_rejects_non_numeric_timeouts(monkeypatch):
    """Test that a bad timeout names the offending variable."""
    _clear_env(monkeypatch)
    monkeypatch.setenv("CAPTIONKIT_PROCESS_TIMEOUT", "ten minutes")

    with pytest.raises(ValueError, match="CAPTIONKIT_PROCESS_TIMEOUT"):
        ExtractorConfig.from_env()

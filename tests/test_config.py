"""Tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from clip_classifier_mcp.config import (
    CacheConfig,
    ClipClassifierConfig,
    DebounceConfig,
    RemoteDetectionConfig,
)


class TestRemoteDetectionConfig:
    """Test remote detection configuration."""

    def test_defaults(self):
        config = RemoteDetectionConfig()
        assert config.provider == "disabled"
        assert config.enabled is False
        assert config.model == "gpt-4o-mini"
        assert config.base_url is None
        assert config.timeout == 10.0
        assert config.max_input_chars == 2000
        assert config.min_length == 50

    def test_from_env(self):
        env = {
            "LANGUAGE_DETECTION_PROVIDER": "OpenAI",
            "LANGUAGE_DETECTION_API_KEY": "detect-key",
            "LANGUAGE_DETECTION_MODEL": "small-model",
            "LANGUAGE_DETECTION_BASE_URL": "https://gateway.example/v1",
            "LANGUAGE_DETECTION_TIMEOUT": "2.5",
            "LANGUAGE_DETECTION_MAX_INPUT_CHARS": "800",
            "LANGUAGE_DETECTION_MIN_LENGTH": "30",
        }
        with patch.dict(os.environ, env, clear=True):
            config = RemoteDetectionConfig.from_env()

        assert config.provider == "openai"
        assert config.enabled is True
        assert config.api_key == "detect-key"
        assert config.model == "small-model"
        assert config.base_url == "https://gateway.example/v1"
        assert config.timeout == 2.5
        assert config.max_input_chars == 800
        assert config.min_length == 30

    def test_api_key_falls_back_to_openai_key(self):
        env = {"LANGUAGE_DETECTION_PROVIDER": "openai", "OPENAI_API_KEY": "openai-key"}
        with patch.dict(os.environ, env, clear=True):
            config = RemoteDetectionConfig.from_env()
        assert config.api_key == "openai-key"

    def test_unknown_provider_is_disabled(self):
        with patch.dict(os.environ, {"LANGUAGE_DETECTION_PROVIDER": "mystery"}, clear=True):
            config = RemoteDetectionConfig.from_env()
        assert config.provider == "disabled"
        assert config.enabled is False

    def test_empty_base_url_is_none(self):
        with patch.dict(os.environ, {"LANGUAGE_DETECTION_BASE_URL": ""}, clear=True):
            assert RemoteDetectionConfig.from_env().base_url is None

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"timeout": 0}, "timeout must be positive"),
            ({"max_input_chars": 0}, "max_input_chars must be positive"),
            ({"min_length": -1}, "min_length cannot be negative"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            RemoteDetectionConfig(**kwargs)


class TestCacheConfig:
    """Test cache configuration."""

    def test_defaults(self):
        config = CacheConfig()
        assert config.enabled is True
        assert config.max_size == 1000
        assert config.max_age_seconds == 3600

    @pytest.mark.parametrize("value, expected", [("false", False), ("0", False), ("yes", True), ("TRUE", True)])
    def test_enabled_from_env(self, value, expected):
        with patch.dict(os.environ, {"CLASSIFIER_CACHE_ENABLED": value}, clear=True):
            assert CacheConfig.from_env().enabled is expected

    def test_sizes_from_env(self):
        env = {"CLASSIFIER_CACHE_MAX_SIZE": "25", "CLASSIFIER_CACHE_MAX_AGE": "90"}
        with patch.dict(os.environ, env, clear=True):
            config = CacheConfig.from_env()
        assert config.max_size == 25
        assert config.max_age_seconds == 90

    def test_validation(self):
        with pytest.raises(ValueError, match="max_size"):
            CacheConfig(max_size=0)
        with pytest.raises(ValueError, match="max_age_seconds"):
            CacheConfig(max_age_seconds=-5)


class TestDebounceConfig:
    """Test debounce configuration."""

    def test_defaults(self):
        config = DebounceConfig()
        assert config.delay == 0.8
        assert config.min_change == 20
        assert config.prefix_length == 100

    def test_from_env(self):
        env = {"DEBOUNCE_DELAY": "0.3", "DEBOUNCE_MIN_CHANGE": "5", "DEBOUNCE_PREFIX_LENGTH": "40"}
        with patch.dict(os.environ, env, clear=True):
            config = DebounceConfig.from_env()
        assert config.delay == 0.3
        assert config.min_change == 5
        assert config.prefix_length == 40

    def test_negative_delay(self):
        with pytest.raises(ValueError, match="delay cannot be negative"):
            DebounceConfig(delay=-1)


class TestClipClassifierConfig:
    """Test the main configuration."""

    def test_defaults(self):
        config = ClipClassifierConfig()
        assert config.remote.enabled is False
        assert config.cache.enabled is True
        assert config.debounce.delay == 0.8
        assert config.max_text_length == 100_000

    def test_from_env(self):
        env = {
            "LANGUAGE_DETECTION_PROVIDER": "openai",
            "LANGUAGE_DETECTION_API_KEY": "detect-key",
            "CLASSIFIER_CACHE_ENABLED": "false",
            "DEBOUNCE_DELAY": "1.5",
            "MAX_TEXT_LENGTH": "2048",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ClipClassifierConfig.from_env()

        assert config.remote.enabled is True
        assert config.cache.enabled is False
        assert config.debounce.delay == 1.5
        assert config.max_text_length == 2048

    def test_from_empty_env_uses_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert ClipClassifierConfig.from_env() == ClipClassifierConfig()

    def test_invalid_max_text_length(self):
        with pytest.raises(ValueError, match="max_text_length"):
            ClipClassifierConfig(max_text_length=0)

    def test_invalid_env_value(self):
        with patch.dict(os.environ, {"CLASSIFIER_CACHE_MAX_SIZE": "-1"}, clear=True):
            with pytest.raises(ValueError):
                ClipClassifierConfig.from_env()

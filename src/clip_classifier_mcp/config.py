"""Configuration for clip-classifier-mcp."""

import os
from dataclasses import dataclass, field
from typing import Literal


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RemoteDetectionConfig:
    """Configuration for the remote language detection service."""

    provider: Literal["openai", "disabled"] = "disabled"
    api_key: str | None = None
    model: str = "gpt-4o-mini"
    # OpenAI-compatible gateway; None means the official endpoint
    base_url: str | None = None
    timeout: float = 10.0
    # Longer input is truncated before it is sent
    max_input_chars: int = 2000
    # Shorter input never reaches the remote service
    min_length: int = 50

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("Remote detection timeout must be positive")
        if self.max_input_chars <= 0:
            raise ValueError("max_input_chars must be positive")
        if self.min_length < 0:
            raise ValueError("min_length cannot be negative")

    @property
    def enabled(self) -> bool:
        return self.provider != "disabled"

    @classmethod
    def from_env(cls) -> "RemoteDetectionConfig":
        """Create configuration from environment variables."""
        provider = os.getenv("LANGUAGE_DETECTION_PROVIDER", "disabled").lower()
        if provider != "openai":
            provider = "disabled"

        return cls(
            provider=provider,
            api_key=os.getenv("LANGUAGE_DETECTION_API_KEY") or os.getenv("OPENAI_API_KEY"),
            model=os.getenv("LANGUAGE_DETECTION_MODEL", "gpt-4o-mini"),
            base_url=os.getenv("LANGUAGE_DETECTION_BASE_URL") or None,
            timeout=float(os.getenv("LANGUAGE_DETECTION_TIMEOUT", "10.0")),
            max_input_chars=int(os.getenv("LANGUAGE_DETECTION_MAX_INPUT_CHARS", "2000")),
            min_length=int(os.getenv("LANGUAGE_DETECTION_MIN_LENGTH", "50")),
        )


@dataclass
class CacheConfig:
    """Configuration for the classification result cache."""

    enabled: bool = True
    max_size: int = 1000
    max_age_seconds: int = 3600

    def __post_init__(self):
        if self.max_size <= 0:
            raise ValueError("Cache max_size must be positive")
        if self.max_age_seconds <= 0:
            raise ValueError("Cache max_age_seconds must be positive")

    @classmethod
    def from_env(cls) -> "CacheConfig":
        """Create configuration from environment variables."""
        return cls(
            enabled=_env_bool("CLASSIFIER_CACHE_ENABLED", True),
            max_size=int(os.getenv("CLASSIFIER_CACHE_MAX_SIZE", "1000")),
            max_age_seconds=int(os.getenv("CLASSIFIER_CACHE_MAX_AGE", "3600")),
        )


@dataclass
class DebounceConfig:
    """Configuration for debounced classification while typing."""

    delay: float = 0.8
    # Smaller length changes with an unchanged prefix are ignored
    min_change: int = 20
    prefix_length: int = 100

    def __post_init__(self):
        if self.delay < 0:
            raise ValueError("Debounce delay cannot be negative")

    @classmethod
    def from_env(cls) -> "DebounceConfig":
        """Create configuration from environment variables."""
        return cls(
            delay=float(os.getenv("DEBOUNCE_DELAY", "0.8")),
            min_change=int(os.getenv("DEBOUNCE_MIN_CHANGE", "20")),
            prefix_length=int(os.getenv("DEBOUNCE_PREFIX_LENGTH", "100")),
        )


@dataclass
class ClipClassifierConfig:
    """Main configuration for clip-classifier-mcp."""

    remote: RemoteDetectionConfig = field(default_factory=RemoteDetectionConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    debounce: DebounceConfig = field(default_factory=DebounceConfig)
    # Server-side input bound; the classifier itself accepts any length
    max_text_length: int = 100_000

    def __post_init__(self):
        if self.max_text_length <= 0:
            raise ValueError("max_text_length must be positive")

    @classmethod
    def from_env(cls) -> "ClipClassifierConfig":
        """Create configuration from environment variables."""
        return cls(
            remote=RemoteDetectionConfig.from_env(),
            cache=CacheConfig.from_env(),
            debounce=DebounceConfig.from_env(),
            max_text_length=int(os.getenv("MAX_TEXT_LENGTH", "100000")),
        )

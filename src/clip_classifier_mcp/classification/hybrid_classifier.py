"""Hybrid classification combining the local heuristic with remote detection."""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from ..config import ClipClassifierConfig
from .cache import ClassificationCache
from .heuristic import classify
from .models import PLAINTEXT, ClassificationResult, DetectionMethod
from .remote import RemoteLanguageDetector, create_remote_detector

logger = logging.getLogger(__name__)


class HybridContentClassifier:
    """
    Classifies content locally and optionally refines the language remotely.

    The local heuristic always decides ``is_code`` and ``confidence``. The
    remote detector is only consulted for text the heuristic already judged
    to be code, and only replaces the language when it names one.
    """

    def __init__(
        self,
        remote_detector: Optional[RemoteLanguageDetector] = None,
        enable_cache: bool = True,
        cache_max_size: int = 1000,
        cache_max_age_seconds: int = 3600,
        remote_min_length: int = 50,
    ):
        """
        Initialize the hybrid classifier.

        Args:
            remote_detector: Optional remote language detector
            enable_cache: Whether to cache detection results
            cache_max_size: Maximum number of cache entries
            cache_max_age_seconds: Maximum age of cache entries in seconds
            remote_min_length: Shorter text is never sent to the remote detector
        """
        self.remote_detector = remote_detector
        self.remote_min_length = remote_min_length

        self.cache_enabled = enable_cache
        if enable_cache:
            self.cache = ClassificationCache(
                max_size=cache_max_size,
                max_age_seconds=cache_max_age_seconds,
            )
            logger.info("Classification cache enabled")
        else:
            self.cache = None
            logger.info("Classification cache disabled")

    @classmethod
    def from_config(cls, config: ClipClassifierConfig) -> "HybridContentClassifier":
        """Build a classifier, including its remote detector, from configuration."""
        return cls(
            remote_detector=create_remote_detector(config.remote),
            enable_cache=config.cache.enabled,
            cache_max_size=config.cache.max_size,
            cache_max_age_seconds=config.cache.max_age_seconds,
            remote_min_length=config.remote.min_length,
        )

    @property
    def remote_enabled(self) -> bool:
        return self.remote_detector is not None

    def classify(self, text: Optional[str]) -> ClassificationResult:
        """Classify text with the local heuristic only."""
        return classify(text)

    def _should_use_remote(self, text: Optional[str], local: ClassificationResult, use_remote: bool) -> bool:
        return (
            use_remote
            and self.remote_detector is not None
            and local.is_code
            and len(text) >= self.remote_min_length
        )

    async def detect(
        self,
        text: Optional[str],
        use_remote: Optional[bool] = None,
        use_cache: Optional[bool] = None,
    ) -> ClassificationResult:
        """
        Classify text, refining the language remotely when possible.

        Args:
            text: The content to classify
            use_remote: Override remote detection (None = use when available)
            use_cache: Override cache setting for this call (None = use default)

        Returns:
            ClassificationResult whose language may come from the remote detector
        """
        should_use_cache = self.cache_enabled if use_cache is None else use_cache
        local = classify(text)

        remote_requested = self.remote_enabled if use_remote is None else use_remote
        if not self._should_use_remote(text, local, remote_requested):
            return local

        if should_use_cache and self.cache is not None:
            cached = self.cache.get(text)
            if cached is not None:
                return cached

        remote = await self.remote_detector.detect(text)
        if remote.language != PLAINTEXT:
            result = replace(
                local,
                detected_language=remote.language,
                method=DetectionMethod.REMOTE,
            )
        else:
            logger.debug(
                f"Remote detector found no language, keeping {local.detected_language}"
            )
            result = local

        if should_use_cache and self.cache is not None:
            self.cache.put(text, result)

        return result

    async def detect_batch(
        self,
        texts: List[str],
        use_remote: Optional[bool] = None,
        use_cache: Optional[bool] = None,
    ) -> List[ClassificationResult]:
        """Classify several texts in order."""
        results = []
        for text in texts:
            results.append(await self.detect(text, use_remote=use_remote, use_cache=use_cache))
        return results

    def get_cache_info(self) -> Optional[Dict]:
        """
        Get cache size, limits and hit counters.

        Returns:
            Dictionary with cache info or None if cache is disabled
        """
        if self.cache is not None:
            return self.cache.get_info()
        return None

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()

    def reset_cache_statistics(self) -> None:
        if self.cache is not None:
            self.cache.reset_statistics()

    async def close(self) -> None:
        if self.remote_detector is not None:
            await self.remote_detector.close()

"""Bounded store for remotely refined classification results."""

import hashlib
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, Optional, Tuple

from .models import ClassificationResult

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class ClassificationCache:
    """
    Remembers the remote refinement of recently seen content.

    Entries are keyed by content digest, so a pasted snippet costs one remote
    call however often it is classified. The least recently used entry goes
    first once ``max_size`` is reached; entries older than ``max_age_seconds``
    are dropped when looked up.
    """

    def __init__(
        self,
        max_size: int = 1000,
        max_age_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_size = max_size
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, ClassificationResult]]" = OrderedDict()
        self._lock = RLock()
        self.stats = CacheStats()

    @staticmethod
    def _key(content: str) -> str:
        return hashlib.sha256(content.encode("utf-8", errors="surrogatepass")).hexdigest()

    def get(self, content: str) -> Optional[ClassificationResult]:
        """Return the stored result for content, or None when absent or stale."""
        key = self._key(content)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                stored_at, result = entry
                if self._clock() - stored_at < self.max_age_seconds:
                    self._entries.move_to_end(key)
                    self.stats.hits += 1
                    return result
                del self._entries[key]

            self.stats.misses += 1
            return None

    def put(self, content: str, result: ClassificationResult) -> None:
        key = self._key(content)
        with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
                self.stats.evictions += 1
            self._entries[key] = (self._clock(), result)
            size = len(self._entries)

        logger.debug(
            f"Cached {result.detected_language} for {len(content)} chars "
            f"({size}/{self.max_size} entries)"
        )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Classification cache cleared")

    def reset_statistics(self) -> None:
        with self._lock:
            self.stats = CacheStats()

    def get_info(self) -> Dict[str, Any]:
        """Size, limits and hit counters, as reported by the status tool."""
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "max_age_seconds": self.max_age_seconds,
                "hits": self.stats.hits,
                "misses": self.stats.misses,
                "evictions": self.stats.evictions,
                "hit_rate": self.stats.hit_rate,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

"""Debounced classification for content that is still being typed."""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from .classification import ClassificationResult, HybridContentClassifier
from .config import DebounceConfig

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ClassificationResult], Union[None, Awaitable[None]]]


class DebouncedClassifier:
    """
    Classifies text at most once per idle pause.

    Every ``submit`` cancels the previously scheduled run, so only the most
    recent text is classified once ``delay`` seconds pass without another
    submission. Runs whose text barely differs from the last classified text
    are skipped.
    """

    def __init__(
        self,
        classifier: HybridContentClassifier,
        delay: float = 0.8,
        min_change: int = 20,
        prefix_length: int = 100,
        on_result: Optional[ResultCallback] = None,
    ):
        """
        Initialize the debounced classifier.

        Args:
            classifier: Classifier invoked after each idle pause
            delay: Idle time in seconds before classifying (default: 0.8)
            min_change: Length difference that always counts as a change
            prefix_length: Leading characters compared for smaller changes
            on_result: Optional callback receiving each new result
        """
        self.classifier = classifier
        self.delay = delay
        self.min_change = min_change
        self.prefix_length = prefix_length
        self.on_result = on_result

        self.result = ClassificationResult(is_code=False, confidence=0.0)
        self.is_detecting = False
        self.runs = 0
        self._last_text = ""
        self._task: Optional[asyncio.Task] = None

    @classmethod
    def from_config(
        cls,
        classifier: HybridContentClassifier,
        config: DebounceConfig,
        on_result: Optional[ResultCallback] = None,
    ) -> "DebouncedClassifier":
        return cls(
            classifier,
            delay=config.delay,
            min_change=config.min_change,
            prefix_length=config.prefix_length,
            on_result=on_result,
        )

    @property
    def has_pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def changed_significantly(self, text: str) -> bool:
        """Check whether text differs enough from the last classified text."""
        last = self._last_text
        if abs(len(text) - len(last)) >= self.min_change:
            return True
        return text[: self.prefix_length] != last[: self.prefix_length]

    def submit(self, text: str) -> None:
        """
        Schedule classification of text, replacing any pending run.

        Must be called from within a running event loop.
        """
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(text))

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Cancelled stale classification run")

    async def wait(self) -> ClassificationResult:
        """
        Wait until no run is pending and return the latest result.

        Texts submitted while waiting are waited for as well.
        """
        while self.has_pending:
            await asyncio.wait({self._task})
        return self.result

    async def _run(self, text: str) -> None:
        await asyncio.sleep(self.delay)

        if not self.changed_significantly(text):
            logger.debug(f"Skipping classification, text of {len(text)} chars barely changed")
            return

        self.is_detecting = True
        try:
            result = await self.classifier.detect(text)
        except Exception as e:
            logger.error(f"Debounced classification failed: {e}")
            return
        finally:
            self.is_detecting = False

        self._last_text = text
        self.result = result
        self.runs += 1
        logger.debug(f"Debounced classification finished: {result}")

        if self.on_result is not None:
            outcome = self.on_result(result)
            if inspect.isawaitable(outcome):
                await outcome

"""Shared pytest fixtures for all tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from clip_classifier_mcp.classification import (
    HybridContentClassifier,
    RemoteDetectionResult,
    RemoteLanguageDetector,
)
from clip_classifier_mcp.config import (
    CacheConfig,
    ClipClassifierConfig,
    DebounceConfig,
    RemoteDetectionConfig,
)


PYTHON_SNIPPET = '''import os


def read_config(path):
    """Load settings from a file."""
    if not os.path.exists(path):
        return {}
    with open(path) as handle:
        return parse(handle.read())
'''

JAVASCRIPT_SNIPPET = """import { useState } from 'react';

export const fetchUsers = async () => {
  const response = await fetch('/api/users');
  return response.json().then((data) => data.filter((u) => u.active));
};
"""

PROSE = (
    "Thanks for the update yesterday. I think we should meet again next week "
    "and go over the plan with the whole team before anything gets decided."
)


@pytest.fixture
def mock_config():
    """Create a configuration with remote detection disabled."""
    return ClipClassifierConfig(
        remote=RemoteDetectionConfig(provider="disabled"),
        cache=CacheConfig(enabled=True, max_size=100, max_age_seconds=3600),
        debounce=DebounceConfig(delay=0.05, min_change=20, prefix_length=100),
        max_text_length=5000,
    )


@pytest.fixture
def mock_remote_detector():
    """Create a remote detector mock answering "typescript"."""
    detector = MagicMock(spec=RemoteLanguageDetector)
    detector.detect = AsyncMock(
        return_value=RemoteDetectionResult(language="typescript", is_code=True)
    )
    detector.close = AsyncMock()
    return detector


@pytest.fixture
def classifier():
    """Create a local-only classifier."""
    return HybridContentClassifier(enable_cache=True)


@pytest.fixture
def hybrid_classifier(mock_remote_detector):
    """Create a classifier backed by the mocked remote detector."""
    return HybridContentClassifier(remote_detector=mock_remote_detector, enable_cache=True)


@pytest.fixture
def python_snippet():
    return PYTHON_SNIPPET


@pytest.fixture
def javascript_snippet():
    return JAVASCRIPT_SNIPPET


@pytest.fixture
def prose():
    return PROSE

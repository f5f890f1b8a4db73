"""Clip Classifier - heuristic code/prose classification for pasted content."""

__version__ = "0.1.0"

from .classification import ClassificationResult, HybridContentClassifier, classify
from .cli import cli
from .debounce import DebouncedClassifier
from .server import create_mcp_server

__all__ = [
    "cli",
    "classify",
    "create_mcp_server",
    "ClassificationResult",
    "DebouncedClassifier",
    "HybridContentClassifier",
    "__version__",
]

"""Content classification for clip-classifier-mcp."""

from .models import (
    PLAINTEXT,
    ClassificationResult,
    CodeScore,
    DetectionMethod,
    LanguageRanking,
    LanguageRule,
    RemoteDetectionResult,
    ScoringRule,
)
from .heuristic import (
    CODE_CONFIDENCE_THRESHOLD,
    MIN_LENGTH_FOR_CLASSIFICATION,
    classify,
    explain,
    rank_languages,
    score_code_likelihood,
)
from .rules import LANGUAGE_RULES, STRUCTURAL_RULES
from .cache import CacheStats, ClassificationCache
from .remote import VALID_LANGUAGES, RemoteLanguageDetector, create_remote_detector
from .hybrid_classifier import HybridContentClassifier

__all__ = [
    "PLAINTEXT",
    "CODE_CONFIDENCE_THRESHOLD",
    "MIN_LENGTH_FOR_CLASSIFICATION",
    "STRUCTURAL_RULES",
    "LANGUAGE_RULES",
    "VALID_LANGUAGES",
    "ClassificationResult",
    "CodeScore",
    "DetectionMethod",
    "LanguageRanking",
    "LanguageRule",
    "RemoteDetectionResult",
    "ScoringRule",
    "classify",
    "explain",
    "rank_languages",
    "score_code_likelihood",
    "CacheStats",
    "ClassificationCache",
    "RemoteLanguageDetector",
    "create_remote_detector",
    "HybridContentClassifier",
]

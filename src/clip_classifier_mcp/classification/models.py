"""Data models for content classification."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


PLAINTEXT = "plaintext"


class DetectionMethod(Enum):
    """Methods used to produce a classification."""

    HEURISTIC = "heuristic"
    REMOTE = "remote"


@dataclass(frozen=True)
class ScoringRule:
    """A weighted pattern signalling that text looks like code."""

    pattern: re.Pattern
    weight: float

    def count_matches(self, text: str) -> int:
        """Count non-overlapping matches of the pattern in text."""
        return sum(1 for _ in self.pattern.finditer(text))


@dataclass(frozen=True)
class LanguageRule:
    """Patterns characteristic of a single language or format."""

    language: str
    patterns: Tuple[re.Pattern, ...]

    def score(self, text: str) -> int:
        """Sum the match counts of every pattern against text."""
        return sum(
            sum(1 for _ in pattern.finditer(text)) for pattern in self.patterns
        )


@dataclass(frozen=True)
class ClassificationResult:
    """Result of classifying a block of text."""

    is_code: bool
    confidence: float
    detected_language: str = PLAINTEXT
    method: DetectionMethod = DetectionMethod.HEURISTIC

    def to_dict(self) -> Dict[str, Any]:
        """Render the result in its wire form."""
        return {
            "isCode": self.is_code,
            "confidence": self.confidence,
            "detectedLanguage": self.detected_language,
            "method": self.method.value,
        }

    def __repr__(self) -> str:
        return (
            f"ClassificationResult(is_code={self.is_code}, confidence={self.confidence:.2f}, "
            f"detected_language='{self.detected_language}', method={self.method.value})"
        )


@dataclass(frozen=True)
class CodeScore:
    """Breakdown of the structural code-likelihood pass."""

    total_score: float = 0.0
    match_count: int = 0
    normalized_score: float = 0.0
    has_indentation: bool = False
    has_braces: bool = False
    has_operators: bool = False
    avg_line_length: float = 0.0
    confidence: float = 0.0
    is_code: bool = False
    rule_hits: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_score": self.total_score,
            "match_count": self.match_count,
            "normalized_score": round(self.normalized_score, 4),
            "has_indentation": self.has_indentation,
            "has_braces": self.has_braces,
            "has_operators": self.has_operators,
            "avg_line_length": round(self.avg_line_length, 4),
            "confidence": round(self.confidence, 4),
            "is_code": self.is_code,
            "rule_hits": {str(index): hits for index, hits in self.rule_hits.items()},
        }


@dataclass(frozen=True)
class LanguageRanking:
    """Outcome of ranking languages by pattern matches."""

    language: str = PLAINTEXT
    score: int = 0
    scores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "score": self.score,
            "scores": dict(self.scores),
        }


@dataclass(frozen=True)
class RemoteDetectionResult:
    """Language reported by the remote detection service."""

    language: str = PLAINTEXT
    is_code: bool = False

"""Heuristic classifier deciding whether text is source code.

Two independent passes share the input text:

* ``score_code_likelihood`` weighs structural patterns, normalizes by the
  square root of the text length and adds flat bonuses for indentation,
  braces, operators and line length.
* ``rank_languages`` counts language-specific pattern matches and picks the
  best-scoring language.

``classify`` composes them and only surfaces a language when the text was
judged to be code.
"""

import logging
import math
import re
from typing import Optional, Sequence, Tuple

from .models import (
    PLAINTEXT,
    ClassificationResult,
    CodeScore,
    DetectionMethod,
    LanguageRanking,
    LanguageRule,
    ScoringRule,
)
from .rules import LANGUAGE_RULES, STRUCTURAL_RULES

logger = logging.getLogger(__name__)

# Texts whose trimmed length is below this are always plaintext
MIN_LENGTH_FOR_CLASSIFICATION = 10

# Confidence at or above this marks text as code
CODE_CONFIDENCE_THRESHOLD = 25

MAX_CONFIDENCE = 100.0

INDENTATION_LINE_RATIO = 0.3
BRACE_COUNT_THRESHOLD = 2
OPERATOR_COUNT_THRESHOLD = 5
MIN_AVG_LINE_LENGTH = 10
MAX_AVG_LINE_LENGTH = 100

INDENTATION_BONUS = 10
BRACES_BONUS = 10
OPERATORS_BONUS = 5
LINE_LENGTH_BONUS = 5

_INDENTED_LINE = re.compile(r"\s{2,}")
_BRACE = re.compile(r"[{}]")
_OPERATOR = re.compile(r"[=<>!+\-*/%&|^~]")


def _too_short(text: Optional[str]) -> bool:
    return not text or len(text.strip()) < MIN_LENGTH_FOR_CLASSIFICATION


def score_code_likelihood(
    text: Optional[str],
    rules: Sequence[ScoringRule] = STRUCTURAL_RULES,
) -> CodeScore:
    """
    Score how code-like a block of text is.

    Args:
        text: Raw, untrimmed text
        rules: Structural rules to apply (defaults to the built-in table)

    Returns:
        CodeScore with the clamped confidence and every intermediate value
    """
    if _too_short(text):
        return CodeScore()

    total_chars = len(text)
    lines = text.split("\n")

    total_score = 0.0
    match_count = 0
    rule_hits = {}
    for index, rule in enumerate(rules):
        hits = rule.count_matches(text)
        if hits:
            rule_hits[index] = hits
            match_count += hits
            total_score += hits * rule.weight

    normalized_score = (total_score / math.sqrt(total_chars)) * 10

    avg_line_length = total_chars / len(lines)
    indented_lines = sum(1 for line in lines if _INDENTED_LINE.match(line))
    has_indentation = indented_lines > len(lines) * INDENTATION_LINE_RATIO
    has_braces = len(_BRACE.findall(text)) > BRACE_COUNT_THRESHOLD
    has_operators = len(_OPERATOR.findall(text)) > OPERATOR_COUNT_THRESHOLD

    confidence = normalized_score
    if has_indentation:
        confidence += INDENTATION_BONUS
    if has_braces:
        confidence += BRACES_BONUS
    if has_operators:
        confidence += OPERATORS_BONUS
    if MIN_AVG_LINE_LENGTH < avg_line_length < MAX_AVG_LINE_LENGTH:
        confidence += LINE_LENGTH_BONUS

    confidence = max(0.0, min(MAX_CONFIDENCE, confidence))

    return CodeScore(
        total_score=total_score,
        match_count=match_count,
        normalized_score=normalized_score,
        has_indentation=has_indentation,
        has_braces=has_braces,
        has_operators=has_operators,
        avg_line_length=avg_line_length,
        confidence=confidence,
        is_code=confidence >= CODE_CONFIDENCE_THRESHOLD,
        rule_hits=rule_hits,
    )


def rank_languages(
    text: Optional[str],
    rules: Sequence[LanguageRule] = LANGUAGE_RULES,
) -> LanguageRanking:
    """
    Rank languages by how many of their characteristic patterns match.

    Ties keep the language evaluated first. With no matches at all the
    ranking falls back to plaintext.
    """
    if not text:
        return LanguageRanking()

    best_language = PLAINTEXT
    best_score = 0
    scores = {}
    for rule in rules:
        score = rule.score(text)
        scores[rule.language] = score
        if score > best_score:
            best_score = score
            best_language = rule.language

    return LanguageRanking(language=best_language, score=best_score, scores=scores)


def classify(
    text: Optional[str],
    structural_rules: Sequence[ScoringRule] = STRUCTURAL_RULES,
    language_rules: Sequence[LanguageRule] = LANGUAGE_RULES,
) -> ClassificationResult:
    """
    Classify text as code or prose and guess its language.

    Never raises; short or empty input is plaintext with zero confidence.
    """
    if _too_short(text):
        return ClassificationResult(is_code=False, confidence=0.0, detected_language=PLAINTEXT)

    code_score = score_code_likelihood(text, structural_rules)
    if not code_score.is_code:
        return ClassificationResult(
            is_code=False,
            confidence=code_score.confidence,
            detected_language=PLAINTEXT,
            method=DetectionMethod.HEURISTIC,
        )

    ranking = rank_languages(text, language_rules)
    logger.debug(
        f"Classified {len(text)} chars as code: confidence={code_score.confidence:.2f}, "
        f"language={ranking.language}"
    )
    return ClassificationResult(
        is_code=True,
        confidence=code_score.confidence,
        detected_language=ranking.language,
        method=DetectionMethod.HEURISTIC,
    )


def explain(text: Optional[str]) -> Tuple[CodeScore, LanguageRanking]:
    """Return the diagnostics of both passes without applying the gate."""
    if _too_short(text):
        return CodeScore(), LanguageRanking()
    return score_code_likelihood(text), rank_languages(text)

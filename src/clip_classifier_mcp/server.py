"""FastMCP server exposing content classification tools."""

import logging

from fastmcp.exceptions import ToolError
from fastmcp.server import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations

from .classification import (
    CODE_CONFIDENCE_THRESHOLD,
    LANGUAGE_RULES,
    MIN_LENGTH_FOR_CLASSIFICATION,
    STRUCTURAL_RULES,
    ClassificationResult,
    HybridContentClassifier,
    explain,
)
from .config import ClipClassifierConfig

logger = logging.getLogger(__name__)


def _format_result(result: ClassificationResult) -> str:
    kind = "code" if result.is_code else "text"
    return (
        f"Classified as {kind} (confidence: {result.confidence:.1f})\n"
        f"Language: {result.detected_language}\n"
        f"Method: {result.method.value}"
    )


def create_mcp_server(
    classifier: HybridContentClassifier,
    config: ClipClassifierConfig | None = None,
) -> FastMCP:
    """
    Create an MCP server for content classification.

    Args:
        classifier: Hybrid classifier serving every tool
        config: Server configuration (defaults to built-in defaults)

    Returns:
        FastMCP server instance
    """
    config = config or ClipClassifierConfig()
    logger.info(
        f"Creating MCP server (remote detection: "
        f"{'enabled' if classifier.remote_enabled else 'disabled'})"
    )
    mcp = FastMCP("clip-classifier-mcp")

    def check_length(text: str) -> None:
        if len(text) > config.max_text_length:
            raise ToolError(
                f"Text is {len(text)} characters long; the limit is {config.max_text_length}. "
                "Truncate it before classifying."
            )

    @mcp.tool(
        annotations=ToolAnnotations(
            title="Classify Content",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        )
    )
    async def classify_content(text: str) -> ToolResult:
        """
        Decide whether text is source code and guess its language.

        Uses only the local heuristic, so the answer is instant and
        deterministic.

        Examples:
            >>> await classify_content("def add(a, b):\\n    return a + b")
            {"isCode": true, "confidence": 30.27, "detectedLanguage": "python", "method": "heuristic"}

        Returns:
            ToolResult with:
            - isCode: Whether the text looks like code
            - confidence: Heuristic score between 0 and 100
            - detectedLanguage: Language tag, "plaintext" when not code
            - method: Always "heuristic"

        Raises:
            ToolError: When the text exceeds the configured length limit

        Notes:
            - Text shorter than 10 characters (trimmed) is always plaintext
            - Confidence of 25 or more means code
        """
        check_length(text)
        try:
            result = classifier.classify(text)
        except Exception as e:
            logger.error(f"Failed to classify content: {e}")
            raise ToolError(f"Failed to classify content: {e}")

        return ToolResult(
            content=[TextContent(type="text", text=_format_result(result))],
            structured_content=result.to_dict(),
        )

    @mcp.tool(
        annotations=ToolAnnotations(
            title="Detect Language",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        )
    )
    async def detect_language(text: str, use_remote: bool = True) -> ToolResult:
        """
        Classify text and refine its language with the remote detector.

        The local heuristic decides whether the text is code. When it is,
        the text is long enough and remote detection is configured, a hosted
        model is asked for the language and its answer replaces the local
        guess.

        Args:
            text: Content to classify
            use_remote: Set to false to skip the remote detector

        Returns:
            ToolResult with isCode, confidence, detectedLanguage and method
            ("heuristic" or "remote")

        Raises:
            ToolError: When the text exceeds the length limit or detection fails
        """
        check_length(text)
        try:
            result = await classifier.detect(text, use_remote=use_remote)
        except Exception as e:
            logger.error(f"Failed to detect language: {e}")
            raise ToolError(f"Failed to detect language: {e}")

        return ToolResult(
            content=[TextContent(type="text", text=_format_result(result))],
            structured_content=result.to_dict(),
        )

    @mcp.tool(
        annotations=ToolAnnotations(
            title="Explain Classification",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        )
    )
    async def explain_classification(text: str) -> ToolResult:
        """
        Show how the heuristic scored a piece of text.

        Returns:
            ToolResult with:
            - code_score: Raw and normalized scores, bonus flags, average
              line length, confidence and hit counts per structural rule index
            - language_ranking: Winning language and per-language scores,
              reported even when the text is not code

        Raises:
            ToolError: When the text exceeds the configured length limit
        """
        check_length(text)
        try:
            code_score, ranking = explain(text)
        except Exception as e:
            logger.error(f"Failed to explain classification: {e}")
            raise ToolError(f"Failed to explain classification: {e}")

        result_text = f"""Classification breakdown:
- Structural score: {code_score.total_score} ({code_score.match_count} matches)
- Normalized score: {code_score.normalized_score:.2f}
- Indentation: {code_score.has_indentation}, braces: {code_score.has_braces}, operators: {code_score.has_operators}
- Average line length: {code_score.avg_line_length:.1f}
- Confidence: {code_score.confidence:.2f} (code: {code_score.is_code})
- Best language: {ranking.language} (score {ranking.score})
"""
        return ToolResult(
            content=[TextContent(type="text", text=result_text)],
            structured_content={
                "code_score": code_score.to_dict(),
                "language_ranking": ranking.to_dict(),
            },
        )

    @mcp.tool(
        annotations=ToolAnnotations(
            title="Classifier Status",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        )
    )
    async def classifier_status() -> ToolResult:
        """
        Report classifier thresholds, rule tables, remote detection and cache state.
        """
        cache_info = classifier.get_cache_info()
        status = {
            "min_length_for_classification": MIN_LENGTH_FOR_CLASSIFICATION,
            "code_confidence_threshold": CODE_CONFIDENCE_THRESHOLD,
            "structural_rules": len(STRUCTURAL_RULES),
            "languages": [rule.language for rule in LANGUAGE_RULES],
            "remote_detection": classifier.remote_enabled,
            "max_text_length": config.max_text_length,
            "cache": cache_info,
        }

        result_text = f"""Classifier Status:
- Minimum length: {MIN_LENGTH_FOR_CLASSIFICATION}
- Code threshold: {CODE_CONFIDENCE_THRESHOLD}
- Structural rules: {len(STRUCTURAL_RULES)}
- Languages: {', '.join(status['languages'])}
- Remote detection: {'enabled' if classifier.remote_enabled else 'disabled'}
"""
        if cache_info:
            result_text += (
                f"- Cache: {cache_info['size']}/{cache_info['max_size']} entries, "
                f"hit rate {cache_info['hit_rate']:.1%}\n"
            )
        else:
            result_text += "- Cache: disabled\n"

        return ToolResult(content=[TextContent(type="text", text=result_text)], structured_content=status)

    return mcp

"""Remote language detection through an OpenAI-compatible chat endpoint."""

import logging
import os
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from ..config import RemoteDetectionConfig
from .models import PLAINTEXT, RemoteDetectionResult

logger = logging.getLogger(__name__)


VALID_LANGUAGES = frozenset({
    "javascript", "typescript", "python", "java", "cpp", "csharp", "php", "ruby",
    "go", "rust", "html", "css", "json", "xml", "sql", "markdown", "yaml", "shell",
    "swift", "kotlin", "scala", "dart", "r", "perl", "lua", "haskell", "elixir",
    "clojure", "graphql", "dockerfile", "makefile", PLAINTEXT,
})

SYSTEM_PROMPT = """You are a code language detector. Analyze the given code and respond ONLY with a single word - the programming language name in lowercase.

Valid responses: javascript, typescript, python, java, cpp, csharp, php, ruby, go, rust, html, css, json, xml, sql, markdown, yaml, shell, swift, kotlin, scala, dart, r, perl, lua, haskell, elixir, clojure, graphql, dockerfile, makefile, plaintext

If uncertain or not code, respond with: plaintext

Do not include any explanation, punctuation, or additional text."""


# Remote tags renamed to the names the local rule table reports
LANGUAGE_ALIASES = {"shell": "bash", "bash": "bash", "sh": "bash"}


def normalize_language(reply: Optional[str]) -> str:
    """Map a raw model reply onto the allowlist, defaulting to plaintext."""
    language = (reply or "").strip().lower()
    if language in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[language]
    return language if language in VALID_LANGUAGES else PLAINTEXT


class RemoteLanguageDetector:
    """Asks a hosted model for the language of a snippet."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout: float = 10.0,
        max_input_chars: int = 2000,
        max_tokens: int = 20,
    ):
        """
        Initialize the remote detector.

        Args:
            api_key: API key (defaults to OPENAI_API_KEY)
            model: Chat model used for detection
            base_url: Optional OpenAI-compatible gateway URL
            timeout: Request timeout in seconds
            max_input_chars: Input is truncated to this many characters
            max_tokens: Completion token limit
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Language detection API key not found. "
                "Set LANGUAGE_DETECTION_API_KEY or OPENAI_API_KEY, or pass api_key."
            )

        self.client = AsyncOpenAI(api_key=self.api_key, base_url=base_url, timeout=timeout)
        self.model = model
        self.max_input_chars = max_input_chars
        self.max_tokens = max_tokens

    async def detect(self, text: str) -> RemoteDetectionResult:
        """
        Detect the language of text.

        Service failures degrade to plaintext and are logged, never raised.
        """
        if not text or not isinstance(text, str):
            return RemoteDetectionResult()

        truncated = text[: self.max_input_chars]

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": truncated},
                ],
                max_tokens=self.max_tokens,
                temperature=0,
            )
        except OpenAIError as e:
            logger.warning(f"Remote language detection failed: {e}")
            return RemoteDetectionResult()

        reply = response.choices[0].message.content if response.choices else None
        language = normalize_language(reply)
        logger.debug(f"Remote detector replied {reply!r} -> {language}")

        return RemoteDetectionResult(language=language, is_code=language != PLAINTEXT)

    async def close(self) -> None:
        await self.client.close()


def create_remote_detector(config: RemoteDetectionConfig) -> Optional[RemoteLanguageDetector]:
    """
    Build a remote detector from configuration.

    Returns:
        Configured detector, or None when disabled or missing an API key
    """
    if not config.enabled:
        return None

    try:
        return RemoteLanguageDetector(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
            max_input_chars=config.max_input_chars,
        )
    except ValueError as e:
        logger.warning(f"Failed to create remote language detector: {e}")
        logger.warning("Remote language detection disabled")
        return None

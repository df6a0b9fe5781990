"""Gemini service for Rehab Estimator.

Provides the google-genai integration used by the estimate and investment
analysis agents: one async generate_content call per request, with Google
Search grounding enabled so costs and comps can be checked against current
web data.

There is no retry here. SDK errors (auth, quota, network) reach the caller
unmodified.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

import structlog
from google import genai
from google.genai import types

from config.settings import Settings, settings as default_settings
from config.errors import EmptyResponseError
from models.estimation import GroundingSource, UploadedFile
from services.grounding import extract_grounding_sources
from utils.response_logger import log_raw_response

logger = structlog.get_logger(__name__)

PromptPart = Union[str, types.Part]


@dataclass
class GenerationResult:
    """Text and citations returned by one model call."""
    text: str
    sources: List[GroundingSource] = field(default_factory=list)
    tokens_used: int = 0
    raw: Any = None


def image_part(file: UploadedFile) -> types.Part:
    """Inline image part for an uploaded photo."""
    return types.Part.from_bytes(data=file.to_bytes(), mime_type=file.mime_type)


class GeminiService:
    """Service for Gemini generate_content calls.

    Wraps the google-genai async client with search grounding, token
    tracking and empty-response handling.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        model: Optional[str] = None
    ):
        """Initialize GeminiService.

        Args:
            settings: Configuration (default: module-level settings).
            model: Model name override (default from settings).

        Raises:
            ConfigurationError: If no Gemini API key is configured.
        """
        self.settings = settings or default_settings
        self.settings.validate()

        self.model = model or self.settings.gemini_model
        self._client: Optional[genai.Client] = None
        self._total_tokens_used = 0

    @property
    def client(self) -> genai.Client:
        """Get google-genai client (lazy initialization)."""
        if self._client is None:
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    @property
    def total_tokens_used(self) -> int:
        """Get total tokens used across all calls."""
        return self._total_tokens_used

    def build_config(self, temperature: float) -> types.GenerateContentConfig:
        """Generation config with the search tool when grounding is enabled."""
        tools = None
        if self.settings.enable_search_grounding:
            tools = [types.Tool(google_search=types.GoogleSearch())]
        return types.GenerateContentConfig(temperature=temperature, tools=tools)

    def build_contents(self, prompt: str, files: Sequence[UploadedFile] = ()) -> types.Content:
        """Single user turn: the prompt text, then one image part per file."""
        parts = [types.Part.from_text(text=prompt)]
        parts.extend(image_part(f) for f in files)
        return types.Content(role="user", parts=parts)

    async def generate(
        self,
        prompt: str,
        temperature: float,
        files: Sequence[UploadedFile] = (),
        operation: str = "request"
    ) -> GenerationResult:
        """Generate a response from Gemini.

        Args:
            prompt: Instruction text.
            temperature: Sampling temperature.
            files: Photos to attach after the prompt.
            operation: Label for logs and errors (e.g., "rehab estimate").

        Returns:
            GenerationResult with text, grounding sources and token usage.

        Raises:
            EmptyResponseError: If the model returned no text.
        """
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=self.build_contents(prompt, files),
            config=self.build_config(temperature)
        )

        text = response.text
        if not text:
            log_raw_response(
                "gemini_empty_response",
                response,
                model=self.model,
                operation=operation
            )
            raise EmptyResponseError(operation, details={"model": self.model})

        tokens_used = 0
        usage = getattr(response, "usage_metadata", None)
        if usage is not None and usage.total_token_count:
            tokens_used = usage.total_token_count
            self._total_tokens_used += tokens_used

        sources = extract_grounding_sources(response)

        logger.info(
            "gemini_generated",
            model=self.model,
            operation=operation,
            image_count=len(files),
            tokens_used=tokens_used,
            content_length=len(text),
            source_count=len(sources)
        )

        return GenerationResult(
            text=text,
            sources=sources,
            tokens_used=tokens_used,
            raw=response
        )

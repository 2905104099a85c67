"""
Gemini inference client for the LifeSync concierge.

Stateless adapter around ``google-genai``: one prompt in, one
``GenerationResult`` out (text, search-grounding citations, inline images).
Agents depend on the ``InferenceClient`` protocol only, so tests and other
backends can substitute their own implementation.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence, Type, TypeVar

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, ValidationError

from lifesync.config import Settings, settings as default_settings
from lifesync.errors import MalformedResponseError, TransportError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResponseFormat(str, Enum):
    FREEFORM = "freeform"
    STRUCTURED_JSON = "structured_json"


class ToolDirective(str, Enum):
    """Built-in backend tools a persona may enable."""
    SEARCH_GROUNDING = "google_search"


@dataclass(frozen=True)
class WebSource:
    uri: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class GroundingChunk:
    """One citation entry returned by the search-grounding tool."""
    web: Optional[WebSource] = None


@dataclass(frozen=True)
class InlineImage:
    mime_type: str
    data: bytes


@dataclass
class GenerationResult:
    """Result from a single generate call."""
    text: str = ""
    grounding_chunks: List[GroundingChunk] = field(default_factory=list)
    inline_images: List[InlineImage] = field(default_factory=list)
    model: str = ""

    def parse(self, model_cls: Type[ModelT], required: Sequence[str] = ()) -> ModelT:
        """
        Decode structured output into ``model_cls``.

        Raises:
            MalformedResponseError: text is not a JSON object, a required field
                is absent, or the payload fails validation.
        """
        payload = extract_json(self.text)
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Response is not valid JSON: {e}", self.text) from e

        if not isinstance(data, dict):
            raise MalformedResponseError("Response JSON is not an object", self.text)

        missing = [name for name in required if name not in data]
        if missing:
            raise MalformedResponseError(f"Missing required field(s): {', '.join(missing)}", self.text)

        try:
            return model_cls.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid {model_cls.__name__} payload: {e}", self.text) from e


def extract_json(text: str) -> str:
    """Helper to extract JSON from markdown blocks if necessary."""
    text = text or ""
    if "```json" in text:
        return text.split("```json")[1].split("```")[0].strip()
    if "```" in text:
        parts = text.split("```")
        if len(parts) >= 3:
            return parts[1].strip()
    return text.strip()


class InferenceClient(Protocol):
    """
    Protocol for inference backends.
    Implementations raise TransportError on unreachable backends or failed responses.
    """

    async def generate_text(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        response_format: ResponseFormat = ResponseFormat.FREEFORM,
        tools: Optional[Sequence[ToolDirective]] = None,
        model: Optional[str] = None,
    ) -> GenerationResult:
        ...

    async def generate_image(
        self,
        prompt: str,
        *,
        aspect_ratio: Optional[str] = None,
        model: Optional[str] = None,
    ) -> GenerationResult:
        ...


class GeminiInferenceClient:
    """Gemini implementation of ``InferenceClient`` using ``google-genai``."""

    def __init__(self, config: Optional[Settings] = None, client: Optional[Any] = None):
        self.config = config or default_settings
        self.model_name = self.config.GEMINI_MODEL_NAME
        self._client = client or genai.Client(api_key=self.config.GOOGLE_API_KEY or None)

    async def generate_text(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        response_format: ResponseFormat = ResponseFormat.FREEFORM,
        tools: Optional[Sequence[ToolDirective]] = None,
        model: Optional[str] = None,
    ) -> GenerationResult:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type=(
                "application/json" if response_format == ResponseFormat.STRUCTURED_JSON else None
            ),
            tools=self._build_tools(tools),
        )
        return await self._generate(model or self.model_name, prompt, config)

    async def generate_image(
        self,
        prompt: str,
        *,
        aspect_ratio: Optional[str] = None,
        model: Optional[str] = None,
    ) -> GenerationResult:
        config = types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio) if aspect_ratio else None,
        )
        contents = types.Content(role="user", parts=[types.Part(text=prompt)])
        return await self._generate(model or self.config.IMAGE_MODEL_NAME, contents, config)

    @staticmethod
    def _build_tools(tools: Optional[Sequence[ToolDirective]]) -> Optional[List[types.Tool]]:
        if not tools:
            return None
        built = []
        for tool in tools:
            if tool == ToolDirective.SEARCH_GROUNDING:
                built.append(types.Tool(google_search=types.GoogleSearch()))
            else:
                raise ValueError(f"Unsupported tool directive: {tool}")
        return built

    async def _generate(self, model: str, contents: Any, config: types.GenerateContentConfig) -> GenerationResult:
        try:
            response = await asyncio.to_thread(
                self._client.models.generate_content,
                model=model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error("Gemini returned an error response (model=%s): %s", model, e)
            raise TransportError(f"Gemini request failed: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Gemini backend unreachable (model=%s): %s", model, e)
            raise TransportError(f"Gemini backend unreachable: {e}") from e

        return self._to_result(response, model)

    @staticmethod
    def _to_result(response: Any, model: str) -> GenerationResult:
        candidates = getattr(response, "candidates", None) or []
        candidate = candidates[0] if candidates else None
        parts = []
        if candidate is not None and getattr(candidate, "content", None) is not None:
            parts = candidate.content.parts or []

        text_parts = [
            part.text for part in parts
            if getattr(part, "text", None) and not getattr(part, "thought", False)
        ]
        text = "".join(text_parts)

        images = []
        for part in parts:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                images.append(InlineImage(mime_type=inline.mime_type or "image/png", data=inline.data))

        chunks = []
        metadata = getattr(candidate, "grounding_metadata", None) if candidate is not None else None
        for chunk in (getattr(metadata, "grounding_chunks", None) or []):
            web = getattr(chunk, "web", None)
            chunks.append(
                GroundingChunk(web=WebSource(uri=web.uri, title=web.title) if web is not None else None)
            )

        return GenerationResult(text=text, grounding_chunks=chunks, inline_images=images, model=model)

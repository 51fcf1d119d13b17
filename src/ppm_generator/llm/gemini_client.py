from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from google import genai
from google.genai import types

from ppm_generator.errors import ConfigurationError, GenerationError

logger = logging.getLogger(__name__)


def make_client(api_key: str | None) -> genai.Client:
    """
    Create a GenAI client bound to one API key.

    A new client is built on every call so a changed key takes effect
    immediately; nothing is cached at module level.
    """
    if not (api_key or "").strip():
        raise ConfigurationError(
            "API key is not set. Define GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY) in the environment or .env"
        )
    return genai.Client(api_key=api_key)


ClientFactory = Callable[[str | None], genai.Client]


@dataclass(frozen=True)
class GenerationParams:
    temperature: float
    top_p: float
    top_k: int
    max_output_tokens: int | None = None
    thinking_budget: int | None = None

    def to_config(self) -> types.GenerateContentConfig:
        thinking = None
        if self.thinking_budget is not None:
            thinking = types.ThinkingConfig(thinking_budget=self.thinking_budget)
        return types.GenerateContentConfig(
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
            max_output_tokens=self.max_output_tokens,
            thinking_config=thinking,
        )


@dataclass(frozen=True)
class GenerationRequest:
    task: str  # used in log lines and error messages, e.g. "generate PPM"
    model: str
    parts: Sequence[types.Part]
    params: GenerationParams


def text_part(text: str) -> types.Part:
    return types.Part.from_text(text=text)


def image_part(data: bytes, mime_type: str) -> types.Part:
    return types.Part.from_bytes(data=data, mime_type=mime_type)


def generate(
    request: GenerationRequest,
    *,
    api_key: str | None,
    client_factory: ClientFactory = make_client,
) -> str:
    """
    Send one single-turn request and return the response text.

    ConfigurationError is raised by the factory before any network call.
    Upstream failures become GenerationError; nothing is retried.
    """
    client = client_factory(api_key)

    logger.info(
        "Gemini request: task=%s model=%s parts=%d",
        request.task,
        request.model,
        len(request.parts),
    )
    try:
        resp = client.models.generate_content(
            model=request.model,
            contents=[types.Content(role="user", parts=list(request.parts))],
            config=request.params.to_config(),
        )
    except Exception as exc:
        logger.exception("Gemini request failed: task=%s", request.task)
        raise GenerationError(f"Failed to {request.task}: {exc}") from exc

    # .text is None when the response has no text parts
    return resp.text or ""

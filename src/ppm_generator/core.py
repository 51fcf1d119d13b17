from __future__ import annotations

from ppm_generator.config import Settings
from ppm_generator.llm.gemini_client import (
    ClientFactory,
    GenerationParams,
    GenerationRequest,
    generate,
    image_part,
    make_client,
    text_part,
)
from ppm_generator.llm.prompts import build_ppm_prompt
from ppm_generator.models import ImagePayload, PPMFormInputs

# Creative, long output with a thinking allowance
PPM_PARAMS = GenerationParams(
    temperature=0.9,
    top_p=0.95,
    top_k=64,
    max_output_tokens=8000,
    thinking_budget=4000,
)
CHAT_PARAMS = GenerationParams(temperature=0.8, top_p=0.9, top_k=40)
# Lower temperature for factual descriptions
IMAGE_PARAMS = GenerationParams(temperature=0.4, top_p=0.8, top_k=32)


def generate_ppm(
    inputs: PPMFormInputs,
    *,
    settings: Settings,
    client_factory: ClientFactory = make_client,
) -> str:
    """
    Build the PPM instruction document from the form and return the
    generated Markdown.
    """
    request = GenerationRequest(
        task="generate PPM",
        model=settings.ppm_model,
        parts=(text_part(build_ppm_prompt(inputs)),),
        params=PPM_PARAMS,
    )
    return generate(request, api_key=settings.api_key, client_factory=client_factory)


def send_chat(
    message: str,
    *,
    settings: Settings,
    client_factory: ClientFactory = make_client,
) -> str:
    # Single turn: earlier messages are not sent.
    request = GenerationRequest(
        task="send chat message",
        model=settings.chat_model,
        parts=(text_part(message),),
        params=CHAT_PARAMS,
    )
    return generate(request, api_key=settings.api_key, client_factory=client_factory)


def analyze_image(
    image: ImagePayload,
    prompt: str,
    *,
    settings: Settings,
    client_factory: ClientFactory = make_client,
) -> str:
    request = GenerationRequest(
        task="analyze image",
        model=settings.image_model,
        parts=(image_part(image.to_bytes(), image.mime_type), text_part(prompt)),
        params=IMAGE_PARAMS,
    )
    return generate(request, api_key=settings.api_key, client_factory=client_factory)

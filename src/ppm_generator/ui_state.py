from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ppm_generator import core
from ppm_generator.config import Settings
from ppm_generator.errors import PPMGeneratorError
from ppm_generator.llm.gemini_client import ClientFactory, make_client
from ppm_generator.models import ChatHistory, ChatMessage, ImagePayload, PPMFormInputs

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_PROMPT = "Jelaskan apa yang Anda lihat dalam gambar ini dan berikan analisis singkat."


@dataclass
class PPMViewState:
    output: str = ""
    is_loading: bool = False
    error: str | None = None


@dataclass
class ChatViewState:
    history: ChatHistory = field(default_factory=ChatHistory)
    is_loading: bool = False


@dataclass
class AnalyzerViewState:
    image: ImagePayload | None = None
    prompt: str = DEFAULT_ANALYSIS_PROMPT
    result: str | None = None
    error: str | None = None
    is_loading: bool = False


def run_ppm_generation(
    state: PPMViewState,
    inputs: PPMFormInputs,
    *,
    settings: Settings,
    client_factory: ClientFactory = make_client,
) -> None:
    if state.is_loading:
        return
    state.is_loading = True
    state.error = None
    state.output = ""
    try:
        state.output = core.generate_ppm(inputs, settings=settings, client_factory=client_factory)
    except (PPMGeneratorError, ValueError) as exc:
        logger.warning("PPM generation failed: %s", exc)
        state.error = str(exc)
    finally:
        state.is_loading = False


def submit_chat_message(
    state: ChatViewState,
    text: str,
    *,
    settings: Settings,
    client_factory: ClientFactory = make_client,
) -> None:
    """
    Append the user's message and then the reply (or an error bubble).
    Blank input, or a message sent while a reply is pending, is ignored.
    """
    if not (text or "").strip() or state.is_loading:
        return

    state.history.append(ChatMessage(sender="user", text=text))
    state.is_loading = True
    try:
        reply = core.send_chat(text, settings=settings, client_factory=client_factory)
        state.history.append(ChatMessage(sender="assistant", text=reply))
    except (PPMGeneratorError, ValueError) as exc:
        logger.warning("Chat request failed: %s", exc)
        state.history.append(
            ChatMessage(sender="assistant", text=f"Error: Failed to get response. {exc}")
        )
    finally:
        state.is_loading = False


def select_image(state: AnalyzerViewState, image: ImagePayload | None) -> None:
    """Replace the selected image; the previous one is released."""
    state.image = image
    state.result = None
    state.error = None


def run_image_analysis(
    state: AnalyzerViewState,
    *,
    settings: Settings,
    client_factory: ClientFactory = make_client,
) -> None:
    if state.is_loading:
        return
    if state.image is None:
        state.error = "Silakan unggah gambar terlebih dahulu."
        return
    if not (state.prompt or "").strip():
        state.error = "Silakan masukkan prompt analisis."
        return

    state.is_loading = True
    state.result = None
    state.error = None
    try:
        state.result = core.analyze_image(
            state.image,
            state.prompt,
            settings=settings,
            client_factory=client_factory,
        )
    except (PPMGeneratorError, ValueError) as exc:
        logger.warning("Image analysis failed: %s", exc)
        state.error = f"Gagal menganalisis gambar: {exc}"
    finally:
        state.is_loading = False

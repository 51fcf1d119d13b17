from __future__ import annotations

import pytest

from conftest import FakeClient, factory_for
from ppm_generator.config import Settings
from ppm_generator.models import ChatMessage, ImagePayload
from ppm_generator.ui_state import (
    DEFAULT_ANALYSIS_PROMPT,
    AnalyzerViewState,
    ChatViewState,
    PPMViewState,
    run_image_analysis,
    run_ppm_generation,
    select_image,
    submit_chat_message,
)

PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="


# --- PPM ---

def test_ppm_success_replaces_previous_output(inputs, settings):
    state = PPMViewState(output="lama", error="error lama")
    run_ppm_generation(state, inputs, settings=settings, client_factory=factory_for(FakeClient(reply="# Baru")))

    assert state.output == "# Baru"
    assert state.error is None
    assert state.is_loading is False


def test_ppm_failure_sets_error(inputs, settings):
    state = PPMViewState(output="lama")
    client = FakeClient(error=RuntimeError("503 UNAVAILABLE"))
    run_ppm_generation(state, inputs, settings=settings, client_factory=factory_for(client))

    assert state.output == ""
    assert state.error == "Failed to generate PPM: 503 UNAVAILABLE"
    assert state.is_loading is False


def test_ppm_missing_key_sets_error(inputs):
    state = PPMViewState()
    run_ppm_generation(state, inputs, settings=Settings(api_key=None))
    assert "API key is not set" in state.error
    assert state.is_loading is False


def test_ppm_ignored_while_loading(inputs, settings):
    client = FakeClient()
    state = PPMViewState(is_loading=True)
    run_ppm_generation(state, inputs, settings=settings, client_factory=factory_for(client))
    assert client.models.calls == []


# --- chat ---

def test_chat_appends_user_then_assistant(settings):
    state = ChatViewState()
    submit_chat_message(state, "hello", settings=settings, client_factory=factory_for(FakeClient(echo=True)))

    assert state.history.messages == (
        ChatMessage("user", "hello"),
        ChatMessage("assistant", "hello"),
    )
    assert state.is_loading is False


def test_chat_error_becomes_assistant_bubble(settings):
    state = ChatViewState()
    client = FakeClient(error=RuntimeError("boom"))
    submit_chat_message(state, "halo", settings=settings, client_factory=factory_for(client))

    last = state.history.messages[-1]
    assert last.sender == "assistant"
    assert last.text == "Error: Failed to get response. Failed to send chat message: boom"
    assert state.is_loading is False


@pytest.mark.parametrize("text", ["", "   "])
def test_chat_blank_input_ignored(settings, text):
    client = FakeClient()
    state = ChatViewState()
    submit_chat_message(state, text, settings=settings, client_factory=factory_for(client))
    assert len(state.history) == 0
    assert client.models.calls == []


def test_chat_history_is_append_only(settings):
    state = ChatViewState()
    factory = factory_for(FakeClient(reply="ok"))
    submit_chat_message(state, "satu", settings=settings, client_factory=factory)
    first = state.history.messages
    submit_chat_message(state, "dua", settings=settings, client_factory=factory)

    assert state.history.messages[: len(first)] == first
    assert len(state.history) == 4
    assert not hasattr(state.history, "remove")


def test_chat_message_rejects_unknown_sender():
    with pytest.raises(ValueError):
        ChatMessage("system", "x")


# --- image analyzer ---

def test_analysis_requires_image(settings):
    state = AnalyzerViewState()
    run_image_analysis(state, settings=settings)
    assert state.error == "Silakan unggah gambar terlebih dahulu."


def test_analysis_requires_prompt(settings):
    state = AnalyzerViewState(image=ImagePayload(PNG_B64), prompt="  ")
    run_image_analysis(state, settings=settings)
    assert state.error == "Silakan masukkan prompt analisis."


def test_analysis_success(settings):
    state = AnalyzerViewState(image=ImagePayload(PNG_B64))
    run_image_analysis(state, settings=settings, client_factory=factory_for(FakeClient(reply="Gambar kecil")))

    assert state.prompt == DEFAULT_ANALYSIS_PROMPT
    assert state.result == "Gambar kecil"
    assert state.error is None
    assert state.is_loading is False


def test_analysis_failure_surfaces_upstream_text_and_clears_loading(settings):
    state = AnalyzerViewState(image=ImagePayload(PNG_B64))
    client = FakeClient(error=RuntimeError("INVALID_ARGUMENT: unsupported image"))
    run_image_analysis(state, settings=settings, client_factory=factory_for(client))

    assert state.result is None
    assert state.error.startswith("Gagal menganalisis gambar: ")
    assert "INVALID_ARGUMENT: unsupported image" in state.error
    assert state.is_loading is False


def test_select_image_supersedes_previous():
    state = AnalyzerViewState(image=ImagePayload(PNG_B64, name="a.png"), result="lama", error="x")
    new = ImagePayload(PNG_B64, name="b.png")
    select_image(state, new)

    assert state.image is new
    assert state.result is None
    assert state.error is None

    select_image(state, None)
    assert state.image is None


def test_chat_ignored_while_loading(settings):
    client = FakeClient()
    state = ChatViewState(is_loading=True)
    submit_chat_message(state, "halo", settings=settings, client_factory=factory_for(client))
    assert len(state.history) == 0
    assert client.models.calls == []
    assert state.is_loading is True


def test_analysis_ignored_while_loading(settings):
    client = FakeClient()
    state = AnalyzerViewState(image=ImagePayload(PNG_B64), is_loading=True)
    run_image_analysis(state, settings=settings, client_factory=factory_for(client))
    assert client.models.calls == []
    assert state.result is None


def test_chat_factory_value_error_becomes_bubble(settings):
    def _factory(api_key):
        raise ValueError("bad client options")

    state = ChatViewState()
    submit_chat_message(state, "halo", settings=settings, client_factory=_factory)

    assert [m.sender for m in state.history] == ["user", "assistant"]
    assert state.history.messages[-1].text == "Error: Failed to get response. bad client options"
    assert state.is_loading is False

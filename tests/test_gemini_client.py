from __future__ import annotations

import pytest

from conftest import FakeClient, factory_for
from ppm_generator.errors import ConfigurationError, GenerationError
from ppm_generator.llm import gemini_client
from ppm_generator.llm.gemini_client import (
    GenerationParams,
    GenerationRequest,
    generate,
    image_part,
    make_client,
    text_part,
)


def _request(**overrides):
    data = dict(
        task="send chat message",
        model="gemini-test",
        parts=(text_part("halo"),),
        params=GenerationParams(temperature=0.8, top_p=0.9, top_k=40),
    )
    data.update(overrides)
    return GenerationRequest(**data)


@pytest.mark.parametrize("key", [None, "", "   "])
def test_make_client_requires_key(monkeypatch, key):
    def _boom(**kwargs):
        raise AssertionError("client must not be built")

    monkeypatch.setattr(gemini_client.genai, "Client", _boom)
    with pytest.raises(ConfigurationError):
        make_client(key)


def test_make_client_builds_fresh_client_each_call(monkeypatch):
    built = []

    def _client(**kwargs):
        built.append(kwargs)
        return object()

    monkeypatch.setattr(gemini_client.genai, "Client", _client)
    a = make_client("k1")
    b = make_client("k2")

    assert a is not b
    assert built == [{"api_key": "k1"}, {"api_key": "k2"}]


def test_params_to_config():
    cfg = GenerationParams(
        temperature=0.9, top_p=0.95, top_k=64, max_output_tokens=8000, thinking_budget=4000
    ).to_config()

    assert cfg.temperature == 0.9
    assert cfg.top_p == 0.95
    assert cfg.top_k == 64
    assert cfg.max_output_tokens == 8000
    assert cfg.thinking_config.thinking_budget == 4000


def test_params_without_thinking():
    cfg = GenerationParams(temperature=0.4, top_p=0.8, top_k=32).to_config()
    assert cfg.thinking_config is None
    assert cfg.max_output_tokens is None


def test_generate_sends_single_user_turn():
    client = FakeClient(reply="jawaban")
    keys = []

    out = generate(_request(), api_key="secret", client_factory=factory_for(client, keys))

    assert out == "jawaban"
    assert keys == ["secret"]
    (call,) = client.models.calls
    assert call["model"] == "gemini-test"
    (content,) = call["contents"]
    assert content.role == "user"
    assert [p.text for p in content.parts] == ["halo"]
    assert call["config"].temperature == 0.8


def test_generate_returns_empty_string_for_missing_text():
    client = FakeClient(reply=None)
    assert generate(_request(), api_key="k", client_factory=factory_for(client)) == ""


def test_generate_wraps_upstream_errors():
    client = FakeClient(error=RuntimeError("quota exceeded"))

    with pytest.raises(GenerationError) as info:
        generate(_request(), api_key="k", client_factory=factory_for(client))

    assert str(info.value) == "Failed to send chat message: quota exceeded"
    assert isinstance(info.value.__cause__, RuntimeError)
    # no retry
    assert len(client.models.calls) == 1


def test_image_part_keeps_bytes_and_mime():
    part = image_part(b"\x89PNG", "image/png")
    assert part.inline_data.data == b"\x89PNG"
    assert part.inline_data.mime_type == "image/png"

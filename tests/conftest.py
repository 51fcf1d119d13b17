from __future__ import annotations

from types import SimpleNamespace

import pytest

from ppm_generator.config import Settings
from ppm_generator.models import PPMFormInputs


class FakeModels:
    def __init__(self, reply: str | None = "ok", error: Exception | None = None, echo: bool = False):
        self.reply = reply
        self.error = error
        self.echo = echo
        self.calls: list[dict] = []

    def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        if self.echo:
            return SimpleNamespace(text="".join(p.text or "" for p in contents[0].parts))
        return SimpleNamespace(text=self.reply)


class FakeClient:
    def __init__(self, **kwargs):
        self.models = FakeModels(**kwargs)


def factory_for(client: FakeClient, seen_keys: list | None = None):
    def _factory(api_key):
        if seen_keys is not None:
            seen_keys.append(api_key)
        return client

    return _factory


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def form_data() -> dict[str, str]:
    return {
        "institution_name": "Madrasah Aliyah Negeri 1",
        "teacher_name": "Harmaji",
        "subject": "Pendidikan Agama Islam",
        "phase": "Fase E",
        "grade": "X",
        "semester": "Ganjil",
        "time_allocation": "90 menit",
        "learning_outcomes": "Peserta didik memahami makna zakat",
        "learning_objectives": "Menjelaskan syarat wajib zakat",
        "content": "Zakat fitrah dan zakat mal",
    }


@pytest.fixture
def inputs(form_data) -> PPMFormInputs:
    return PPMFormInputs.from_mapping(form_data)

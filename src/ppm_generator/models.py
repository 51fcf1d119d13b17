from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field, fields
from typing import Iterator, Mapping

# Indonesian labels shown on the form, in display order
FIELD_LABELS = {
    "institution_name": "Nama Madrasah",
    "teacher_name": "Nama Guru",
    "subject": "Mata Pelajaran",
    "phase": "Fase",
    "grade": "Kelas",
    "semester": "Semester",
    "time_allocation": "Alokasi Waktu",
    "learning_outcomes": "Capaian Pembelajaran",
    "learning_objectives": "Tujuan Pembelajaran",
    "content": "Materi Pembelajaran",
}


@dataclass(frozen=True)
class PPMFormInputs:
    """
    The ten lesson-plan form fields.

    Every field is required; whitespace-only values count as empty.
    Values are kept exactly as typed (no trimming).
    """
    institution_name: str
    teacher_name: str
    subject: str
    phase: str
    grade: str
    semester: str
    time_allocation: str
    learning_outcomes: str
    learning_objectives: str
    content: str

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{FIELD_LABELS[f.name]} wajib diisi.")

    @classmethod
    def from_mapping(cls, data: Mapping[str, str]) -> "PPMFormInputs":
        return cls(**{name: data.get(name, "") for name in FIELD_LABELS})

    @staticmethod
    def field_labels() -> dict[str, str]:
        return dict(FIELD_LABELS)


SENDERS = ("user", "assistant")


@dataclass(frozen=True)
class ChatMessage:
    sender: str
    text: str

    def __post_init__(self) -> None:
        if self.sender not in SENDERS:
            raise ValueError(f"Unknown sender: {self.sender!r}")


@dataclass
class ChatHistory:
    """Append-only list of chat messages, kept for the lifetime of the view."""
    _messages: list[ChatMessage] = field(default_factory=list)

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)


@dataclass(frozen=True)
class ImagePayload:
    """Base64-encoded image (no data-URI prefix) plus its MIME type."""
    data: str
    mime_type: str = "image/png"
    name: str = ""

    def to_bytes(self) -> bytes:
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"Invalid base64 image data: {exc}") from exc

    @property
    def size_bytes(self) -> int:
        return len(self.to_bytes())

from __future__ import annotations

import asyncio
import base64
import mimetypes
import os
import re
from typing import Any, BinaryIO, Union

from ppm_generator.errors import ImageReadError
from ppm_generator.models import ImagePayload

# data:image/png;base64,
_DATA_URI_RE = re.compile(r"^data:[^,]*,", re.IGNORECASE)

FileLike = Union[str, os.PathLike, BinaryIO]


def strip_data_uri(text: str) -> str:
    """Drop a leading ``data:<mime>;base64,`` header if there is one."""
    return _DATA_URI_RE.sub("", (text or "").strip(), count=1)


def _read_bytes(file: FileLike) -> bytes | str:
    if isinstance(file, (str, os.PathLike)):
        with open(file, "rb") as fh:
            return fh.read()

    # Streamlit UploadedFile
    if hasattr(file, "getvalue"):
        value = file.getvalue()
        return value if isinstance(value, str) else bytes(value)

    # pipes and sockets cannot rewind
    if getattr(file, "seekable", lambda: False)():
        file.seek(0)
    return file.read()


def file_to_base64(file: FileLike) -> str:
    """
    Read an image (path, binary handle or uploaded file) and return its
    base64 text, without any data-URI prefix.
    """
    try:
        raw = _read_bytes(file)
    except (OSError, ValueError, AttributeError) as exc:
        raise ImageReadError(f"Gagal membaca file gambar: {exc}") from exc

    if isinstance(raw, str):
        # already text (e.g. a data URL pasted from the browser)
        return strip_data_uri(raw)
    return base64.b64encode(raw).decode("ascii")


async def file_to_base64_async(file: FileLike) -> str:
    return await asyncio.to_thread(file_to_base64, file)


def guess_mime_type(name: str, default: str = "image/png") -> str:
    mime, _ = mimetypes.guess_type(name or "")
    return mime or default


def image_payload_from_upload(uploaded: Any) -> ImagePayload:
    name = getattr(uploaded, "name", "") or ""
    mime = getattr(uploaded, "type", "") or guess_mime_type(name)
    return ImagePayload(data=file_to_base64(uploaded), mime_type=mime, name=name)

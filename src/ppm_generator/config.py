from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_MODEL = "gemini-2.5-flash"

# Checked in order; the first non-empty one wins.
API_KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass(frozen=True)
class Settings:
    """
    Process-level configuration.

    The API key may be empty here: it is only checked when a client is built,
    so the app can start and show a clear error on the first request.
    """
    api_key: str | None = None
    ppm_model: str = DEFAULT_MODEL
    chat_model: str = DEFAULT_MODEL
    image_model: str = DEFAULT_MODEL
    export_author: str = "Harmaji"
    log_level: str = "INFO"


def _get(env: Mapping[str, str], name: str, default: str) -> str:
    return (env.get(name) or "").strip() or default


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    api_key = None
    for name in API_KEY_VARS:
        value = (env.get(name) or "").strip()
        if value:
            api_key = value
            break

    return Settings(
        api_key=api_key,
        ppm_model=_get(env, "PPM_MODEL", DEFAULT_MODEL),
        chat_model=_get(env, "CHAT_MODEL", DEFAULT_MODEL),
        image_model=_get(env, "IMAGE_MODEL", DEFAULT_MODEL),
        export_author=_get(env, "PPM_EXPORT_AUTHOR", "Harmaji"),
        log_level=_get(env, "LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str) -> None:
    """
    Install the root handler once and apply ``level`` on every call, so a
    changed LOG_LEVEL takes effect on the next Streamlit rerun.
    """
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(getattr(logging, (level or "").upper(), logging.INFO))

from __future__ import annotations


class PPMGeneratorError(Exception):
    """Base class for errors shown to the user."""


class ConfigurationError(PPMGeneratorError):
    """Raised when the API key (or another required setting) is missing."""


class GenerationError(PPMGeneratorError):
    """Raised when a Gemini request fails. Carries the upstream message."""


class ImageReadError(PPMGeneratorError, OSError):
    """Raised when an uploaded image cannot be read."""

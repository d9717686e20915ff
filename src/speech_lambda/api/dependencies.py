"""
FastAPI Dependency Injection Providers.

    1. get_settings() - Loads and caches application configuration
    2. get_speech_handler() - Returns the process-wide SpeechHandler

The local server shares the same singleton the Lambda entry point uses,
so both paths run identical code with identical clients.

Usage in Route Handlers:
    @router.post("/v1/speech")
    def speech(handler: SpeechHandler = Depends(get_speech_handler)):
        ...

Tests replace get_speech_handler through app.dependency_overrides.
"""
from __future__ import annotations

from functools import lru_cache

from speech_lambda.core.config import Settings, load_settings
from speech_lambda.handler import SpeechHandler, get_handler


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache application settings.

    Reads SPEECH_LAMBDA_SETTINGS when set, otherwise defaults plus
    environment overrides.
    """
    return load_settings()


def get_speech_handler() -> SpeechHandler:
    """Get the process-wide SpeechHandler."""
    return get_handler(get_settings())

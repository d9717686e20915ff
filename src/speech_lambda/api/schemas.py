"""
Request/Response Schemas.

Pydantic models for the JSON bodies the handler returns. Field names are
the camelCase names browser clients already consume.

Example Success Body:
    {
        "message": "Text successfully converted to speech",
        "audioUrl": "https://my-bucket.s3.amazonaws.com/speech-<uuid>.mp3",
        "fileName": "speech-<uuid>.mp3",
        "voice": "Joanna",
        "language": "en-US",
        "expiresIn": 3600
    }

Example Error Body:
    {"error": "Failed to convert text to speech", "message": "..."}
"""
from __future__ import annotations

from pydantic import BaseModel, Field

SUCCESS_MESSAGE = "Text successfully converted to speech"
CONVERSION_FAILED = "Failed to convert text to speech"


class SpeechRequest(BaseModel):
    """
    Documented shape of the inbound payload.

    The handler does not validate through this model: it applies its own
    ordered rules so that error texts stay stable. The model is used for
    the OpenAPI description of the local server and by the CLI.
    """
    text: str = Field(..., description="Text to synthesize (1-3000 characters)")
    voiceId: str | None = Field(default=None, description="Polly voice, default Joanna")
    languageCode: str | None = Field(default=None, description="Language code, default en-US")


class SpeechResponse(BaseModel):
    """Successful conversion."""
    message: str = SUCCESS_MESSAGE
    audioUrl: str = Field(..., description="Unsigned public URL of the MP3")
    fileName: str = Field(..., description="Object key, speech-<uuid>.mp3")
    voice: str
    language: str
    expiresIn: int = Field(..., description="Informational only, not enforced on the object")


class ErrorResponse(BaseModel):
    """
    Error body for 400 and 500 responses.

    message is only present on 500 responses and carries the fault
    description.
    """
    error: str
    message: str | None = None


class HealthResponse(BaseModel):
    """GET /health on the local server."""
    ok: bool = True
    bucket: str
    region: str | None = None
    default_voice: str
    default_language: str
    max_text_chars: int

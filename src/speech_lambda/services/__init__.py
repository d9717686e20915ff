"""
speech-lambda Services Layer.

Components:
    - speech_service.py: SpeechService (Polly synthesis with engine fallback, S3 upload)
    - validators.py: Body parsing and text validation
    - clients.py: boto3 client construction
"""
from .speech_service import (
    ErrorCode,
    SpeechError,
    SpeechResult,
    SpeechService,
    StorageError,
    StoredObject,
    SynthesisError,
    SynthesisParameters,
)

__all__ = [
    "SpeechService",
    "SpeechResult",
    "SynthesisParameters",
    "StoredObject",
    "SpeechError",
    "SynthesisError",
    "StorageError",
    "ErrorCode",
]

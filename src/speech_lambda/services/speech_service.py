"""
SpeechService - Polly synthesis and S3 storage.

Architecture:
    Resolve defaults → Synthesize (neural, then standard once) → Upload → Result

The service owns no per-request state: the Polly and S3 clients and the
validated HandlerConfig are fixed at construction and shared by every
invocation in the process.

Error Handling:
    - SpeechError: Base exception with a code and the fault description
    - SynthesisError: Both synthesis attempts failed
    - StorageError: The S3 upload failed

Example:
    >>> from speech_lambda.core.config import load_settings
    >>> from speech_lambda.services.clients import make_polly_client, make_s3_client
    >>>
    >>> settings = load_settings()
    >>> service = SpeechService(
    ...     settings.get_handler_config(),
    ...     polly=make_polly_client(settings),
    ...     s3=make_s3_client(settings),
    ... )
    >>> result = service.convert("Hello world")
    >>> print(result.stored.url)
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from speech_lambda.core.config import HandlerConfig
from speech_lambda.core.logging import get_logger, info, verbose, warn
from speech_lambda.utils.timeit import timeit

_LOG = get_logger("speech-lambda.service")


# =============================================================================
# Error Codes and Exceptions
# =============================================================================

class ErrorCode:
    """Error codes carried by SpeechError and ValidationError, used in logs."""
    INVALID_JSON = "INVALID_JSON"
    TEXT_REQUIRED = "TEXT_REQUIRED"
    TEXT_TOO_LONG = "TEXT_TOO_LONG"
    SYNTHESIS_FAILED = "SYNTHESIS_FAILED"
    STORAGE_FAILED = "STORAGE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SpeechError(Exception):
    """
    Base exception for conversion failures.

    Attributes:
        message: Description of the underlying fault, returned to the caller.
        code: Error code from ErrorCode.
        details: Optional dictionary with additional context (logged only).
    """
    def __init__(self, message: str, code: str = ErrorCode.INTERNAL_ERROR, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Log-friendly representation."""
        result: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class SynthesisError(SpeechError):
    """Raised when the fallback synthesis attempt fails."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.SYNTHESIS_FAILED, details)


class StorageError(SpeechError):
    """Raised when the audio upload fails."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.STORAGE_FAILED, details)


# =============================================================================
# Request/Result Dataclasses
# =============================================================================

@dataclass(frozen=True)
class SynthesisParameters:
    """
    One Polly SynthesizeSpeech request.

    Attributes:
        text: Text to speak, exactly as submitted.
        voice_id: Polly voice (e.g. "Joanna").
        language_code: BCP-47 language (e.g. "en-US").
        engine: "neural" or "standard".
        output_format: Audio encoding, always "mp3" here.
    """
    text: str
    voice_id: str
    language_code: str
    engine: str = "neural"
    output_format: str = "mp3"

    def with_engine(self, engine: str) -> "SynthesisParameters":
        """Same request, different engine."""
        return replace(self, engine=engine)

    def to_polly_kwargs(self) -> Dict[str, str]:
        return {
            "Text": self.text,
            "OutputFormat": self.output_format,
            "VoiceId": self.voice_id,
            "LanguageCode": self.language_code,
            "Engine": self.engine,
        }


@dataclass(frozen=True)
class StoredObject:
    """An uploaded audio object. Created once, never updated."""
    key: str
    bucket: str
    content_type: str = "audio/mpeg"

    @property
    def url(self) -> str:
        return public_url(self.bucket, self.key)


@dataclass
class SpeechResult:
    """
    Result of one text-to-speech conversion.

    Attributes:
        stored: Where the audio was written.
        voice: Voice actually used.
        language: Language actually used.
        engine: Engine that produced the audio ("neural" or "standard").
        audio_bytes: Size of the uploaded audio.
        timings: Per-step durations in seconds.
    """
    stored: StoredObject
    voice: str
    language: str
    engine: str
    audio_bytes: int
    timings: Dict[str, float] = field(default_factory=dict)


def new_object_key(prefix: str = "speech-", extension: str = "mp3") -> str:
    """Generate a unique object key, e.g. speech-<uuid4>.mp3."""
    return f"{prefix}{uuid.uuid4()}.{extension}"


def public_url(bucket: str, key: str) -> str:
    """
    Build the virtual-hosted style URL of an S3 object.

    The URL is unsigned: it only resolves if the bucket allows public
    reads.
    """
    return f"https://{bucket}.s3.amazonaws.com/{key}"


# =============================================================================
# Main Service Class
# =============================================================================

class SpeechService:
    """
    Converts text to an MP3 stored in S3.

    Usage:
        service = SpeechService(config, polly=polly_client, s3=s3_client)
        result = service.convert("Hello world", voice_id="Matthew")
    """

    def __init__(self, config: HandlerConfig, polly: Any, s3: Any):
        """
        Args:
            config: Validated handler configuration.
            polly: boto3 Polly client (or anything with synthesize_speech).
            s3: boto3 S3 client (or anything with put_object).
        """
        self._config = config
        self._polly = polly
        self._s3 = s3

    @property
    def config(self) -> HandlerConfig:
        return self._config

    @property
    def bucket(self) -> str:
        return self._config.storage.bucket

    def build_parameters(
        self,
        text: str,
        voice_id: Optional[str] = None,
        language_code: Optional[str] = None,
    ) -> SynthesisParameters:
        """Resolve defaults into the primary-engine synthesis request."""
        polly = self._config.polly
        return SynthesisParameters(
            text=text,
            voice_id=voice_id or polly.default_voice,
            language_code=language_code or polly.default_language,
            engine=polly.primary_engine,
            output_format=polly.output_format,
        )

    # =========================================================================
    # Synthesis
    # =========================================================================

    def _synthesize_once(self, params: SynthesisParameters) -> bytes:
        """
        Run one SynthesizeSpeech call and read its AudioStream to the end.

        Chunks are joined in the order Polly delivers them.
        """
        response = self._polly.synthesize_speech(**params.to_polly_kwargs())
        stream = response["AudioStream"]
        try:
            return b"".join(stream.iter_chunks(chunk_size=self._config.polly.stream_chunk_size))
        finally:
            stream.close()

    def synthesize(self, params: SynthesisParameters) -> tuple[bytes, str]:
        """
        Synthesize speech, falling back to the fallback engine once.

        Any failure of the first attempt, whether the call itself or reading
        the stream, triggers exactly one more attempt with only the engine
        changed. There is no further retry.

        Returns:
            Tuple of (audio bytes, engine that produced them).

        Raises:
            SynthesisError: If the fallback attempt fails too.
        """
        try:
            with timeit("synthesis") as t:
                audio = self._synthesize_once(params)
            verbose(_LOG, "synthesis_done", engine=params.engine, bytes=len(audio), seconds=round(t.seconds, 3))
            return audio, params.engine
        except Exception as e:
            warn(_LOG, "neural_engine_failed", engine=params.engine, error=str(e))

        fallback = params.with_engine(self._config.polly.fallback_engine)
        try:
            with timeit("synthesis") as t:
                audio = self._synthesize_once(fallback)
        except Exception as e:
            raise SynthesisError(str(e), {"engine": fallback.engine, "voice": fallback.voice_id}) from e
        verbose(_LOG, "synthesis_done", engine=fallback.engine, bytes=len(audio), seconds=round(t.seconds, 3))
        return audio, fallback.engine

    # =========================================================================
    # Storage
    # =========================================================================

    def store(self, audio: bytes) -> StoredObject:
        """
        Upload audio under a fresh speech-<uuid>.mp3 key.

        Raises:
            StorageError: If the upload fails. No retry is attempted.
        """
        storage = self._config.storage
        stored = StoredObject(
            key=new_object_key(storage.object_prefix, self._config.polly.output_format),
            bucket=storage.bucket,
            content_type=storage.content_type,
        )
        try:
            self._s3.put_object(
                Bucket=stored.bucket,
                Key=stored.key,
                Body=audio,
                ContentType=stored.content_type,
                CacheControl=storage.cache_control,
            )
        except Exception as e:
            raise StorageError(str(e), {"bucket": stored.bucket, "key": stored.key}) from e
        return stored

    # =========================================================================
    # Public API
    # =========================================================================

    def convert(
        self,
        text: str,
        voice_id: Optional[str] = None,
        language_code: Optional[str] = None,
    ) -> SpeechResult:
        """
        Synthesize text and upload the audio.

        Args:
            text: Already validated text.
            voice_id: Polly voice, default from config when None/empty.
            language_code: Language, default from config when None/empty.

        Returns:
            SpeechResult describing the stored object.

        Raises:
            SynthesisError: Both synthesis attempts failed.
            StorageError: The upload failed.
        """
        params = self.build_parameters(text, voice_id, language_code)
        info(_LOG, "converting", voice=params.voice_id, language=params.language_code, chars=len(text))

        with timeit("synthesis") as t_synth:
            audio, engine = self.synthesize(params)

        with timeit("upload") as t_upload:
            stored = self.store(audio)
        info(_LOG, "audio_uploaded", key=stored.key, bytes=len(audio), seconds=round(t_upload.seconds, 3))

        return SpeechResult(
            stored=stored,
            voice=params.voice_id,
            language=params.language_code,
            engine=engine,
            audio_bytes=len(audio),
            timings={"synthesis": t_synth.seconds, "upload": t_upload.seconds},
        )

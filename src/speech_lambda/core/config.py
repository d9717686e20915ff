"""
Configuration Management for speech-lambda.

Configuration Hierarchy (highest priority first):
    1. Environment variables (S3_BUCKET_NAME, AWS_REGION, ...)
    2. YAML config file (SPEECH_LAMBDA_SETTINGS or an explicit path)
    3. Defaults class values

The Lambda deployment normally sets only S3_BUCKET_NAME; no settings file
is required.

Example settings.yaml:
    storage:
      bucket: my-audio-bucket
      expiry_seconds: 3600

    polly:
      default_voice: Joanna
      default_language: en-US

    logging:
      level: 2
      format: json
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import os
import yaml


class ConfigValidationError(Exception):
    """Raised when a configuration value is out of bounds or missing."""
    pass


class Defaults:
    """
    Centralized default configuration values.

    Sections:
        - Storage: S3 target and object headers
        - Polly: Synthesis defaults and engine order
        - Request: Input limits
        - Logging: Log level
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Storage (S3)
    # ─────────────────────────────────────────────────────────────────────────
    BUCKET_NAME = "your-audio-bucket-name"  # Placeholder when S3_BUCKET_NAME is unset
    AUDIO_EXPIRY_SECONDS = 3600             # Reported as expiresIn, not enforced
    CACHE_CONTROL = "max-age=3600"          # CacheControl header on uploads
    CONTENT_TYPE = "audio/mpeg"
    OBJECT_PREFIX = "speech-"

    # ─────────────────────────────────────────────────────────────────────────
    # Polly
    # ─────────────────────────────────────────────────────────────────────────
    DEFAULT_VOICE = "Joanna"
    DEFAULT_LANGUAGE = "en-US"
    OUTPUT_FORMAT = "mp3"
    PRIMARY_ENGINE = "neural"
    FALLBACK_ENGINE = "standard"
    STREAM_CHUNK_SIZE = 8192                # Bytes per AudioStream read

    # ─────────────────────────────────────────────────────────────────────────
    # Request limits
    # ─────────────────────────────────────────────────────────────────────────
    MAX_TEXT_CHARS = 3000

    # ─────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────
    LOGGING_LEVEL = 2                   # 1=MINIMAL, 2=NORMAL, 3=VERBOSE, 4=DEBUG


@dataclass
class StorageConfig:
    """S3 upload target and per-object headers."""
    bucket: str = Defaults.BUCKET_NAME
    expiry_seconds: int = Defaults.AUDIO_EXPIRY_SECONDS
    cache_control: str = Defaults.CACHE_CONTROL
    content_type: str = Defaults.CONTENT_TYPE
    object_prefix: str = Defaults.OBJECT_PREFIX


@dataclass
class PollyConfig:
    """
    Speech synthesis parameters.

    The primary engine is tried first; the fallback engine is tried once
    if the primary attempt fails for any reason.
    """
    default_voice: str = Defaults.DEFAULT_VOICE
    default_language: str = Defaults.DEFAULT_LANGUAGE
    output_format: str = Defaults.OUTPUT_FORMAT
    primary_engine: str = Defaults.PRIMARY_ENGINE
    fallback_engine: str = Defaults.FALLBACK_ENGINE
    stream_chunk_size: int = Defaults.STREAM_CHUNK_SIZE


@dataclass
class RequestConfig:
    max_text_chars: int = Defaults.MAX_TEXT_CHARS


@dataclass
class HandlerConfig:
    """
    Validated configuration for the request handler.

    Usage:
        settings = load_settings()
        config = HandlerConfig.from_settings(settings)
        print(config.storage.bucket)
    """
    storage: StorageConfig = field(default_factory=StorageConfig)
    polly: PollyConfig = field(default_factory=PollyConfig)
    request: RequestConfig = field(default_factory=RequestConfig)
    region: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "HandlerConfig":
        """
        Create HandlerConfig from Settings with validation.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        raw = settings.raw

        storage_raw = raw.get("storage") or {}
        storage = StorageConfig(
            bucket=str(storage_raw.get("bucket", Defaults.BUCKET_NAME)),
            expiry_seconds=int(storage_raw.get("expiry_seconds", Defaults.AUDIO_EXPIRY_SECONDS)),
            cache_control=str(storage_raw.get("cache_control", Defaults.CACHE_CONTROL)),
            content_type=str(storage_raw.get("content_type", Defaults.CONTENT_TYPE)),
            object_prefix=str(storage_raw.get("object_prefix", Defaults.OBJECT_PREFIX)),
        )
        cls._validate_non_empty("storage.bucket", storage.bucket)
        cls._validate_positive("storage.expiry_seconds", storage.expiry_seconds)

        polly_raw = raw.get("polly") or {}
        polly = PollyConfig(
            default_voice=str(polly_raw.get("default_voice", Defaults.DEFAULT_VOICE)),
            default_language=str(polly_raw.get("default_language", Defaults.DEFAULT_LANGUAGE)),
            output_format=str(polly_raw.get("output_format", Defaults.OUTPUT_FORMAT)),
            primary_engine=str(polly_raw.get("primary_engine", Defaults.PRIMARY_ENGINE)),
            fallback_engine=str(polly_raw.get("fallback_engine", Defaults.FALLBACK_ENGINE)),
            stream_chunk_size=int(polly_raw.get("stream_chunk_size", Defaults.STREAM_CHUNK_SIZE)),
        )
        cls._validate_non_empty("polly.default_voice", polly.default_voice)
        cls._validate_non_empty("polly.default_language", polly.default_language)
        cls._validate_positive("polly.stream_chunk_size", polly.stream_chunk_size)

        request_raw = raw.get("request") or {}
        request = RequestConfig(
            max_text_chars=int(request_raw.get("max_text_chars", Defaults.MAX_TEXT_CHARS)),
        )
        cls._validate_positive("request.max_text_chars", request.max_text_chars)

        return cls(
            storage=storage,
            polly=polly,
            request=request,
            region=settings.region,
        )

    @staticmethod
    def _validate_positive(name: str, value: int | float) -> None:
        """Validate that a value is positive (> 0)."""
        if value <= 0:
            raise ConfigValidationError(f"{name} must be positive, got {value}")

    @staticmethod
    def _validate_non_empty(name: str, value: str) -> None:
        if not value.strip():
            raise ConfigValidationError(f"{name} must not be empty")


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings container.

    This is the raw settings object before validation. Use
    get_handler_config() to get a validated HandlerConfig.

    Attributes:
        raw: Dictionary of raw configuration values.
    """
    raw: Dict[str, Any]

    @property
    def bucket(self) -> str:
        """Get the S3 bucket audio files are written to."""
        return str((self.raw.get("storage") or {}).get("bucket", Defaults.BUCKET_NAME))

    @property
    def region(self) -> Optional[str]:
        """Get the AWS region for both clients (None lets boto3 decide)."""
        return (self.raw.get("aws") or {}).get("region")

    def get_handler_config(self) -> HandlerConfig:
        """
        Get validated HandlerConfig from these settings.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return HandlerConfig.from_settings(self)


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML (optional) and apply environment overrides.

    Environment variable overrides:
        - S3_BUCKET_NAME: storage.bucket
        - AWS_REGION: aws.region

    Args:
        path: Path to a YAML settings file. When omitted the
            SPEECH_LAMBDA_SETTINGS variable is consulted; with neither set
            only defaults and environment overrides apply.

    Returns:
        Settings object with loaded configuration.

    Raises:
        FileNotFoundError: If a settings file was requested but doesn't exist.
    """
    raw: Dict[str, Any] = {}

    path = path or os.getenv("SPEECH_LAMBDA_SETTINGS")
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"settings file not found: {p.resolve()}")
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    bucket = os.getenv("S3_BUCKET_NAME")
    if bucket:
        raw["storage"] = {**(raw.get("storage") or {}), "bucket": bucket}

    region = os.getenv("AWS_REGION")
    if region:
        raw["aws"] = {**(raw.get("aws") or {}), "region": region}

    return Settings(raw=raw)

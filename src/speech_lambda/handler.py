"""
AWS Lambda entry point.

Deploy with handler string ``speech_lambda.handler.handler`` behind an API
Gateway proxy integration (REST API or HTTP API, payload v1 or v2).

Request Flow:
    1. OPTIONS → 200 with CORS headers and an empty body
    2. Parse JSON body                      → 400 "Invalid JSON in request body"
    3. Validate text                        → 400 "Text is required" / too long
    4. Polly (neural, then standard once)   ┐
    5. S3 put_object                        ┴→ 500 "Failed to convert text to speech"
    6. 200 with the public URL of the object

A null body or a non-string text is a fault, not a client error, and
also takes the 500 path. Every response, including errors, carries the
same CORS headers.

Environment:
    S3_BUCKET_NAME: Target bucket (placeholder name when unset)
    AWS_REGION: Set by Lambda; used for both clients
    SPEECH_LAMBDA_LOG_LEVEL: 1-4, see core/logging
"""
from __future__ import annotations

import threading
import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel

from speech_lambda.api.schemas import CONVERSION_FAILED, ErrorResponse, SpeechResponse
from speech_lambda.core.config import Settings, load_settings
from speech_lambda.core.logging import debug, error, get_logger, info, set_request_id, success
from speech_lambda.services.clients import make_polly_client, make_s3_client
from speech_lambda.services.speech_service import SpeechError, SpeechService
from speech_lambda.services.validators import (
    ValidationError,
    parse_body,
    resolve_option,
    validate_text,
)

_LOG = get_logger("speech-lambda.handler")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Content-Type": "application/json",
}


def _respond(status_code: int, body: Optional[BaseModel] = None) -> Dict[str, Any]:
    """Build a proxy-integration response with the CORS header set."""
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": body.model_dump_json(exclude_none=True) if body is not None else "",
    }


def request_method(event: Dict[str, Any]) -> str:
    """HTTP method of a REST API (v1) or HTTP API (v2) proxy event."""
    method = event.get("httpMethod")
    if not method:
        method = (event.get("requestContext") or {}).get("http", {}).get("method", "")
    return str(method).upper()


class SpeechHandler:
    """
    Turns one proxy event into one proxy response.

    Holds nothing but the shared SpeechService, so one instance serves
    every invocation in the process.
    """

    def __init__(self, service: SpeechService):
        self._service = service

    @property
    def service(self) -> SpeechService:
        return self._service

    def handle(self, event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        """
        Handle one invocation.

        Args:
            event: API Gateway proxy event.
            context: Lambda context; only aws_request_id is read.

        Returns:
            Dict with statusCode, headers and a JSON string body.
        """
        rid = getattr(context, "aws_request_id", None) or str(uuid.uuid4())[:12]
        set_request_id(rid)
        debug(_LOG, "event_received", event=event)

        if request_method(event) == "OPTIONS":
            return _respond(200)

        config = self._service.config
        try:
            try:
                payload = parse_body(event.get("body"), bool(event.get("isBase64Encoded")))
                text = validate_text(payload.get("text"), config.request.max_text_chars)
            except ValidationError as e:
                info(_LOG, "request_rejected", code=e.code)
                return _respond(400, ErrorResponse(error=e.message))

            voice = resolve_option(payload.get("voiceId"), config.polly.default_voice)
            language = resolve_option(payload.get("languageCode"), config.polly.default_language)

            result = self._service.convert(text, voice, language)
            success(_LOG, "converted", file=result.stored.key, engine=result.engine)

            return _respond(200, SpeechResponse(
                audioUrl=result.stored.url,
                fileName=result.stored.key,
                voice=result.voice,
                language=result.language,
                expiresIn=config.storage.expiry_seconds,
            ))

        except SpeechError as e:
            error(_LOG, "conversion_failed", **e.to_dict())
            return _respond(500, ErrorResponse(error=CONVERSION_FAILED, message=e.message))

        except Exception as e:
            error(_LOG, "conversion_failed", code="INTERNAL_ERROR", message=str(e))
            return _respond(500, ErrorResponse(error=CONVERSION_FAILED, message=str(e)))


# =============================================================================
# Process-wide Handler
# =============================================================================

_handler: Optional[SpeechHandler] = None
_handler_lock = threading.Lock()


def build_handler(settings: Settings) -> SpeechHandler:
    """
    Build a handler with real AWS clients.

    Raises:
        ConfigValidationError: If the settings are invalid.
    """
    service = SpeechService(
        settings.get_handler_config(),
        polly=make_polly_client(settings),
        s3=make_s3_client(settings),
    )
    info(_LOG, "handler_ready", bucket=service.bucket)
    return SpeechHandler(service)


def get_handler(settings: Optional[Settings] = None) -> SpeechHandler:
    """
    Get or create the process-wide SpeechHandler.

    Thread-safe lazy singleton; built on the first invocation after a cold
    start and reused until the process is recycled.
    """
    global _handler
    if _handler is None:
        with _handler_lock:
            if _handler is None:
                _handler = build_handler(settings or load_settings())
    return _handler


def reset_handler() -> None:
    """Drop the process-wide handler (used by tests)."""
    global _handler
    with _handler_lock:
        _handler = None


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point."""
    return get_handler().handle(event, context)

"""
Input Validation for the Speech Handler.

Validation runs before any AWS call so a bad request never costs a Polly
invocation or leaves an object behind in S3.

Validation Rules (first failing rule wins):
    - Body: must decode as JSON
    - Text: required, non-blank after trimming
    - Text: at most 3000 UTF-16 code units, counted untrimmed

Error Handling:
    All validation functions raise ValidationError with:
        - message: The exact text returned to the caller as "error"
        - code: Machine-readable code used in logs (e.g., "TEXT_TOO_LONG")

    Payloads that cannot be read at all (a null body, a non-string text)
    raise TypeError instead; the handler answers those with a 500.

Usage:
    from speech_lambda.services.validators import parse_body, validate_text

    try:
        payload = parse_body(event.get("body"))
        text = validate_text(payload.get("text"))
    except ValidationError as e:
        return respond(400, {"error": e.message})
"""
from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, Optional

from speech_lambda.core.config import Defaults
from speech_lambda.core.logging import get_logger, verbose

_LOG = get_logger("speech-lambda.validators")

INVALID_JSON_MESSAGE = "Invalid JSON in request body"
TEXT_REQUIRED_MESSAGE = "Text is required"


class ValidationError(Exception):
    """
    Exception raised when input validation fails.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code for logs.

    Example:
        >>> raise ValidationError("Text is required", "TEXT_REQUIRED")
    """

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


def parse_body(body: Optional[str | bytes], is_base64: bool = False) -> Dict[str, Any]:
    """
    Decode a proxy-integration request body into a payload dict.

    API Gateway may deliver the body base64-encoded (binary media types
    or HTTP API payload v2); that flag is honoured before JSON parsing.
    A JSON scalar or array has no fields, so it yields an empty payload
    and then fails the text rule. A JSON null cannot be read at all and
    is a fault rather than a client error.

    Args:
        body: Raw body string, or None when the request had none.
        is_base64: The event's isBase64Encoded flag.

    Returns:
        The decoded JSON object.

    Raises:
        ValidationError: INVALID_JSON if the body is missing or unparsable.
        TypeError: If the body is the JSON literal null.
    """
    if body is None:
        raise ValidationError(INVALID_JSON_MESSAGE, "INVALID_JSON")

    try:
        if is_base64:
            body = base64.b64decode(body, validate=True)
        payload = json.loads(body)
    except (binascii.Error, UnicodeDecodeError, TypeError, ValueError) as e:
        verbose(_LOG, "body_parse_failed", error=str(e))
        raise ValidationError(INVALID_JSON_MESSAGE, "INVALID_JSON")

    if payload is None:
        raise TypeError("Cannot read fields of a null request body")
    if not isinstance(payload, dict):
        return {}
    return payload


def is_absent(value: Any) -> bool:
    """True for None, False, zero and the empty string."""
    return value is None or (isinstance(value, (str, bool, int, float)) and not value)


def text_length(text: str) -> int:
    """
    Length in UTF-16 code units.

    Characters outside the Basic Multilingual Plane (most emoji) count
    as two, matching how browsers and the JavaScript client measure it.
    """
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def validate_text(text: Any, max_length: int = Defaults.MAX_TEXT_CHARS) -> str:
    """
    Validate the text to synthesize.

    The blank check trims whitespace, the length check does not: a
    3000-character string padded with spaces is rejected as too long.

    Args:
        text: The "text" field of the payload (any JSON type).
        max_length: Maximum allowed length, see text_length().

    Returns:
        The text, unmodified.

    Raises:
        ValidationError: TEXT_REQUIRED or TEXT_TOO_LONG.
        TypeError: If text is present but not a string (e.g. 5 or ["a"]).
    """
    if is_absent(text):
        raise ValidationError(TEXT_REQUIRED_MESSAGE, "TEXT_REQUIRED")

    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")

    if not text.strip():
        raise ValidationError(TEXT_REQUIRED_MESSAGE, "TEXT_REQUIRED")

    if text_length(text) > max_length:
        raise ValidationError(
            f"Text is too long. Maximum {max_length} characters allowed.",
            "TEXT_TOO_LONG",
        )

    return text


def resolve_option(value: Any, default: str) -> Any:
    """
    Return value unless it is absent, otherwise the default.

    Present values are passed through untouched, even of the wrong type;
    Polly rejects those and the request fails.
    """
    if is_absent(value):
        return default
    return value

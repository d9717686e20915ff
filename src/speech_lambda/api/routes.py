"""
Local HTTP Routes.

Serves the Lambda contract over plain HTTP for local development and
browser testing, without API Gateway in front.

Endpoints:
    POST    /v1/speech  - Convert text to speech (same body/response as Lambda)
    OPTIONS /v1/speech  - CORS preflight
    GET     /health     - Configuration summary

Request Flow:
    1. Read the raw body (unparsed, so invalid JSON reaches the handler)
    2. Wrap it into an API Gateway v1 proxy event
    3. Run SpeechHandler.handle() in the threadpool (boto3 is blocking)
    4. Relay statusCode, headers and body unchanged

Example Usage:
    curl -X POST http://localhost:8000/v1/speech \\
        -H "Content-Type: application/json" \\
        -d '{"text": "Hello world", "voiceId": "Matthew"}'
"""
from __future__ import annotations

import base64
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool

from speech_lambda.api.dependencies import get_speech_handler
from speech_lambda.api.schemas import HealthResponse
from speech_lambda.handler import SpeechHandler

router = APIRouter()


def event_from_request(method: str, path: str, headers: Dict[str, str], body: bytes) -> Dict[str, Any]:
    """
    Build a proxy event the way API Gateway would.

    Bodies that are not valid UTF-8 are passed base64-encoded with
    isBase64Encoded set, as API Gateway does for binary payloads.
    """
    event: Dict[str, Any] = {
        "httpMethod": method,
        "path": path,
        "headers": headers,
        "body": None,
        "isBase64Encoded": False,
    }
    if body:
        try:
            event["body"] = body.decode("utf-8")
        except UnicodeDecodeError:
            event["body"] = base64.b64encode(body).decode("ascii")
            event["isBase64Encoded"] = True
    return event


@router.api_route("/v1/speech", methods=["POST", "OPTIONS"])
async def speech(request: Request, handler: SpeechHandler = Depends(get_speech_handler)):
    """
    Convert text to speech.

    Returns:
        Response: JSON body and CORS headers exactly as the Lambda returns them.
    """
    body = await request.body()
    event = event_from_request(request.method, request.url.path, dict(request.headers), body)
    result = await run_in_threadpool(handler.handle, event)
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
    )


@router.get("/health", response_model=HealthResponse)
def health(handler: SpeechHandler = Depends(get_speech_handler)):
    """Report the configuration the handler is running with."""
    config = handler.service.config
    return HealthResponse(
        bucket=config.storage.bucket,
        region=config.region,
        default_voice=config.polly.default_voice,
        default_language=config.polly.default_language,
        max_text_chars=config.request.max_text_chars,
    )

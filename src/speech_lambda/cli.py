"""
Command-Line Interface for speech-lambda.

Invokes the Lambda handler in-process, with real AWS credentials from the
environment, without deploying anything.

Usage Examples:
    # Convert text (positional or --text)
    speech-lambda "Hello world"
    speech-lambda --text "Hallo Welt" --voice Vicki --language de-DE

    # Validate only, no AWS calls
    speech-lambda --text "Test" --dry-run --json

    # Replay a captured API Gateway event
    speech-lambda --event event.json

Environment Variables:
    S3_BUCKET_NAME: Target bucket
    AWS_REGION / AWS_PROFILE: Standard boto3 resolution
    SPEECH_LAMBDA_SETTINGS: Optional YAML settings file
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from speech_lambda.api.schemas import SpeechRequest
from speech_lambda.core.config import load_settings
from speech_lambda.core.logging import configure_logging, get_logger, info, set_request_id


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="speech-lambda CLI (local handler invocation)")

    parser.add_argument("text_pos", nargs="?", help="Text to convert (positional)")
    parser.add_argument("--text", help="Text to convert")
    parser.add_argument("--voice", help="Polly voice id (default from settings)")
    parser.add_argument("--language", help="Language code (default from settings)")
    parser.add_argument("--event", metavar="FILE", help="Invoke with a proxy event JSON file")

    parser.add_argument("--settings", help="YAML settings file")
    parser.add_argument("--dry-run", action="store_true",
                        help="Validate and show synthesis parameters without calling AWS")
    parser.add_argument("--json", action="store_true",
                        help="Print the raw JSON response body")

    return parser.parse_args(argv)


def _build_event(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build the proxy event to invoke the handler with.

    Raises:
        SystemExit: If no input was given or inputs conflict.
    """
    text = args.text or args.text_pos

    if args.event:
        if text:
            raise SystemExit("Use --event without --text or positional text.")
        return json.loads(Path(args.event).read_text(encoding="utf-8"))

    if not text:
        raise SystemExit("Provide --text, a positional text or --event.")

    request = SpeechRequest(text=text, voiceId=args.voice, languageCode=args.language)
    return {
        "httpMethod": "POST",
        "body": request.model_dump_json(exclude_none=True),
        "isBase64Encoded": False,
    }


def _dry_run(args: argparse.Namespace, event: Dict[str, Any]) -> int:
    """Run validation only and print the Polly request that would be made."""
    from speech_lambda.services.validators import ValidationError, parse_body, resolve_option, validate_text

    config = load_settings(args.settings).get_handler_config()
    try:
        payload = parse_body(event.get("body"), bool(event.get("isBase64Encoded")))
        text = validate_text(payload.get("text"), config.request.max_text_chars)
    except ValidationError as e:
        print(json.dumps({"ok": False, "dry_run": True, "error": e.message, "code": e.code}))
        return 1
    except TypeError as e:
        print(json.dumps({"ok": False, "dry_run": True, "error": str(e), "code": "UNREADABLE_PAYLOAD"}))
        return 1

    summary = {
        "ok": True,
        "dry_run": True,
        "chars": len(text),
        "voice": resolve_option(payload.get("voiceId"), config.polly.default_voice),
        "language": resolve_option(payload.get("languageCode"), config.polly.default_language),
        "engines": [config.polly.primary_engine, config.polly.fallback_engine],
        "bucket": config.storage.bucket,
    }
    if args.json:
        print(json.dumps(summary, ensure_ascii=False))
    else:
        print(summary)
    print("DRY_RUN_OK")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        0 when the handler answered 200 (or the dry run validated), 1 otherwise.
    """
    args = _parse_args(argv)

    configure_logging()
    log = get_logger("speech-lambda.cli")
    set_request_id(str(uuid4())[:12])

    event = _build_event(args)

    if args.dry_run:
        return _dry_run(args, event)

    from speech_lambda.handler import get_handler

    handler = get_handler(load_settings(args.settings))
    response = handler.handle(event)
    info(log, "cli_done", status=response["statusCode"])

    if args.json:
        print(response["body"])
    else:
        body = json.loads(response["body"]) if response["body"] else {}
        print(f"status: {response['statusCode']}")
        for key, value in body.items():
            print(f"{key}: {value}")

    return 0 if response["statusCode"] == 200 else 1


if __name__ == "__main__":
    raise SystemExit(main())

"""
AWS client construction.

Both clients are created once per process (Lambda cold start) and reused
by every invocation; boto3 clients are thread-safe, so the local server
can share them across request threads too.
"""
from __future__ import annotations

from typing import Any

import boto3

from speech_lambda.core.config import Settings
from speech_lambda.core.logging import get_logger, verbose

_LOG = get_logger("speech-lambda.clients")


def make_polly_client(settings: Settings) -> Any:
    """Create the Amazon Polly client, honouring aws.region when set."""
    verbose(_LOG, "client_created", service="polly", region=settings.region or "default")
    return boto3.client("polly", region_name=settings.region)


def make_s3_client(settings: Settings) -> Any:
    """Create the S3 client, honouring aws.region when set."""
    verbose(_LOG, "client_created", service="s3", region=settings.region or "default")
    return boto3.client("s3", region_name=settings.region)

"""Shared fixtures: fake Polly/S3 clients and a handler wired to them."""
from __future__ import annotations

import json
from typing import Iterable
from unittest.mock import MagicMock

import pytest

from speech_lambda.core.config import Settings
from speech_lambda.handler import SpeechHandler
from speech_lambda.services.speech_service import SpeechService

TEST_BUCKET = "test-audio-bucket"


class FakeAudioStream:
    """Stands in for botocore's StreamingBody."""

    def __init__(self, chunks: Iterable[bytes], fail_after: int | None = None):
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self.closed = False
        self.chunk_size = None

    def iter_chunks(self, chunk_size=1024):
        self.chunk_size = chunk_size
        for i, chunk in enumerate(self._chunks):
            if self._fail_after is not None and i >= self._fail_after:
                raise ConnectionError("stream interrupted")
            yield chunk

    def close(self):
        self.closed = True


def make_polly(chunks=(b"ID3", b"\x00audio", b"-tail"), fail_engines=(), stream_fail_engines=()):
    """
    Build a fake Polly client.

    Engines in fail_engines raise on the call; engines in
    stream_fail_engines return a stream that breaks after one chunk.
    A non-string VoiceId or LanguageCode is rejected like botocore's
    parameter validation does.
    """
    polly = MagicMock()
    polly.streams = []

    def synthesize_speech(**kwargs):
        for name in ("VoiceId", "LanguageCode"):
            if not isinstance(kwargs[name], str):
                raise ValueError(f"Invalid type for parameter {name}, value: {kwargs[name]!r}")
        engine = kwargs["Engine"]
        if engine in fail_engines:
            raise RuntimeError(f"Engine {engine} is not supported for voice {kwargs['VoiceId']}")
        stream = FakeAudioStream(chunks, fail_after=1 if engine in stream_fail_engines else None)
        polly.streams.append(stream)
        return {"AudioStream": stream}

    polly.synthesize_speech.side_effect = synthesize_speech
    return polly


def make_s3(fail: bool = False):
    s3 = MagicMock()
    if fail:
        s3.put_object.side_effect = RuntimeError("Access Denied")
    return s3


def make_handler(polly=None, s3=None, raw=None) -> SpeechHandler:
    settings = Settings(raw=raw or {"storage": {"bucket": TEST_BUCKET}})
    service = SpeechService(
        settings.get_handler_config(),
        polly=polly if polly is not None else make_polly(),
        s3=s3 if s3 is not None else make_s3(),
    )
    return SpeechHandler(service)


def post_event(payload=None, raw_body=None) -> dict:
    body = raw_body if raw_body is not None else json.dumps(payload)
    return {"httpMethod": "POST", "body": body, "isBase64Encoded": False}


@pytest.fixture
def polly():
    return make_polly()


@pytest.fixture
def s3():
    return make_s3()


@pytest.fixture
def speech_handler(polly, s3):
    return make_handler(polly, s3)

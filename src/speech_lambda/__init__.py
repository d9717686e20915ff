"""
speech-lambda: Text-to-speech Lambda backed by Amazon Polly and S3.

One HTTP request in, one MP3 in S3 out:
    - Validates {"text", "voiceId"?, "languageCode"?}
    - Synthesizes with Polly's neural engine, falling back once to standard
    - Uploads the audio as speech-<uuid>.mp3
    - Returns the object's public URL

Entry points:
    - speech_lambda.handler.handler: AWS Lambda handler
    - speech_lambda.main:app: local FastAPI server with the same contract
    - speech-lambda: command-line invocation of the handler

Example Usage:
    >>> from speech_lambda.handler import get_handler
    >>> response = get_handler().handle(
    ...     {"httpMethod": "POST", "body": '{"text": "Hello world"}'}
    ... )
    >>> response["statusCode"]
    200
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

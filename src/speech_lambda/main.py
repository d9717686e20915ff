"""
FastAPI Application Entry Point (local development).

Usage:
    # Run with uvicorn
    uvicorn speech_lambda.main:app --host 0.0.0.0 --port 8000

    # Or use the module directly
    python -m uvicorn speech_lambda.main:app --reload

AWS credentials and S3_BUCKET_NAME are read from the environment as in
Lambda.
"""

from __future__ import annotations

from fastapi import FastAPI

from speech_lambda.api.routes import router
from speech_lambda.core.logging import configure_logging


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance ready to serve requests.
    """
    configure_logging()

    app = FastAPI(title="speech-lambda")
    app.include_router(router)

    return app


app = create_app()

"""
HTTP layer for speech-lambda.

    - schemas.py: Pydantic models for request/response bodies
    - routes.py: Local FastAPI server exposing the Lambda contract
    - dependencies.py: FastAPI dependency injection

schemas.py is imported by the Lambda handler itself; routes.py and
dependencies.py are only loaded by the local server.
"""

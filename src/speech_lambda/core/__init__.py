"""
Core Infrastructure for speech-lambda.

    - config.py: Configuration loading and validation
    - logging/: Structured logging with numeric levels
"""

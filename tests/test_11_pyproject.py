"""Tests for pyproject.toml and package installation."""
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


class TestPackageInstallation:
    """Test that the package is properly installed."""

    def test_version_defined(self):
        import speech_lambda
        assert isinstance(speech_lambda.__version__, str)
        assert len(speech_lambda.__version__) > 0

    def test_core_modules_importable(self):
        from speech_lambda import cli, handler, main
        from speech_lambda.api import routes, schemas
        from speech_lambda.core import config, logging
        from speech_lambda.services import clients, speech_service, validators

        for module in (cli, handler, main, routes, schemas, config, logging,
                       clients, speech_service, validators):
            assert module is not None


class TestCLIEntryPoint:
    """Test the CLI entry point."""

    def test_cli_help_exits_zero(self):
        src = str(PYPROJECT.parent / "src")
        env = dict(os.environ, PYTHONPATH=os.pathsep.join(filter(None, [src, os.environ.get("PYTHONPATH")])))
        result = subprocess.run(
            [sys.executable, "-m", "speech_lambda.cli", "--help"],
            capture_output=True,
            text=True,
            env=env,
        )
        assert result.returncode == 0
        assert "speech-lambda CLI" in result.stdout


class TestPyprojectToml:
    """Test pyproject.toml configuration."""

    @pytest.fixture
    def data(self):
        tomllib = pytest.importorskip("tomllib")
        return tomllib.loads(PYPROJECT.read_text())

    def test_project_name(self, data):
        assert data["project"]["name"] == "speech-lambda"

    def test_dependencies(self, data):
        dep_names = [d.split(">=")[0].split("[")[0] for d in data["project"]["dependencies"]]
        for name in ("boto3", "fastapi", "uvicorn", "pydantic", "pyyaml"):
            assert name in dep_names

    def test_console_script(self, data):
        assert data["project"]["scripts"]["speech-lambda"] == "speech_lambda.cli:main"

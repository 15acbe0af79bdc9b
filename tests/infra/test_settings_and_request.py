"""Tests for environment settings and the invocation request."""

import argparse
from pathlib import Path

import pytest

from swagcli.config import Settings
from swagcli.request import InvocationRequest
from swagcli.swagger import OpenApiSpecVersion, OutputFormat


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.log_level == "info"
        assert settings.environment == "Production"

    def test_from_environment(self):
        settings = Settings.from_env(
            {"SWAGCLI_LOG_LEVEL": "debug", "SWAGCLI_ENVIRONMENT": "Development"}
        )

        assert settings == Settings(log_level="debug", environment="Development")

    def test_empty_values_fall_back(self):
        assert Settings.from_env({"SWAGCLI_LOG_LEVEL": ""}).log_level == "info"


def _namespace(**overrides):
    values = {
        "startup_module": "build/app.py",
        "document_name": "v1",
        "output": None,
        "host": None,
        "basepath": None,
        "serializeasv2": False,
        "yaml": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.mark.unit
class TestInvocationRequest:
    def test_defaults(self):
        request = InvocationRequest.from_args(_namespace())

        assert request.startup_module_path == "build/app.py"
        assert request.document_name == "v1"
        assert request.output_path is None
        assert request.spec_version is OpenApiSpecVersion.V3
        assert request.output_format is OutputFormat.JSON

    def test_output_resolved_against_cwd(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        request = InvocationRequest.from_args(_namespace(output="out/swagger.json"))

        assert request.output_path == Path.cwd() / "out/swagger.json"
        assert request.output_path.is_absolute()

    def test_absolute_output_kept(self, temp_dir):
        target = temp_dir / "swagger.json"

        assert InvocationRequest.from_args(_namespace(output=str(target))).output_path == target

    def test_flags(self):
        request = InvocationRequest.from_args(
            _namespace(
                host="api.example.com", basepath="/v1", serializeasv2=True, yaml=True
            )
        )

        assert request.host_override == "api.example.com"
        assert request.base_path_override == "/v1"
        assert request.spec_version is OpenApiSpecVersion.V2
        assert request.output_format is OutputFormat.YAML

    def test_immutable(self):
        request = InvocationRequest.from_args(_namespace())

        with pytest.raises(AttributeError):
            request.document_name = "v2"  # type: ignore[misc]

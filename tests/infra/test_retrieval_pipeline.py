"""Tests for the in-process retrieval pipeline."""

import io
import json
from unittest.mock import MagicMock

import pytest

from swagcli.cli.output import BufferedOutput
from swagcli.config import Settings
from swagcli.exceptions import (
    HostFactoryConfigError,
    ModuleLoadError,
    ServiceNotRegisteredError,
    UnknownSwaggerDocumentError,
)
from swagcli.pipeline import RetrievalPipeline
from swagcli.request import InvocationRequest
from swagcli.swagger import DocumentRetriever

TWO_FACTORIES = """
from swagcli.hosting import SwaggerHostFactory, WebHostBuilder


class FirstHost(SwaggerHostFactory):
    def build_host(self):
        return WebHostBuilder().build()


class SecondHost(SwaggerHostFactory):
    def build_host(self):
        return WebHostBuilder().build()
"""


def _pipeline(stdout=None, out=None, **kwargs):
    return RetrievalPipeline(
        settings=Settings(),
        out=out or BufferedOutput(),
        stdout=stdout or io.StringIO(),
        **kwargs,
    )


@pytest.mark.unit
class TestRetrievalPipeline:
    def test_stdout(self, write_module, stub_startup_source):
        path = write_module("stub_app.py", stub_startup_source)
        stdout, out = io.StringIO(), BufferedOutput()

        _pipeline(stdout, out).run(InvocationRequest(str(path), "v1"))

        data = json.loads(stdout.getvalue())
        assert data["openapi"] == "3.1.0"
        assert data["info"]["title"] == "Stub API"
        assert "servers" not in data
        assert out.lines == []

    def test_file_with_confirmation(self, write_module, stub_startup_source, temp_dir):
        path = write_module("stub_app.py", stub_startup_source)
        target = temp_dir / "swagger.json"
        stdout, out = io.StringIO(), BufferedOutput()

        _pipeline(stdout, out).run(
            InvocationRequest(
                str(path),
                "v1",
                output_path=target,
                host_override="api.example.com",
                base_path_override="/v1",
                use_legacy_schema=True,
            )
        )

        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["swagger"] == "2.0"
        assert data["host"] == "api.example.com"
        assert data["basePath"] == "/v1"
        assert stdout.getvalue() == ""
        assert out.lines == [f"Swagger JSON successfully written to {target}"]

    def test_yaml_confirmation(self, write_module, stub_startup_source, temp_dir):
        path = write_module("stub_app.py", stub_startup_source)
        target = temp_dir / "swagger.yaml"
        out = BufferedOutput()

        _pipeline(out=out).run(
            InvocationRequest(str(path), "v1", output_path=target, as_yaml=True)
        )

        assert target.read_text(encoding="utf-8").startswith("openapi: 3.1.0")
        assert out.lines == [f"Swagger YAML successfully written to {target}"]

    def test_host_disposed_after_retrieval(self, write_module, stub_startup_source):
        path = write_module("stub_app.py", stub_startup_source)
        hosts = []
        real_get = DocumentRetriever.get

        def spy(self, host, *args, **kwargs):
            hosts.append(host)
            return real_get(self, host, *args, **kwargs)

        retriever = DocumentRetriever()
        retriever.get = spy.__get__(retriever)  # type: ignore[method-assign]

        _pipeline(retriever=retriever).run(InvocationRequest(str(path), "v1"))

        assert hosts[0].services.closed

    def test_two_factories_fail_before_host_built(self, write_module):
        path = write_module("two_hosts.py", TWO_FACTORIES)
        bootstrapper = MagicMock()
        retriever = MagicMock()

        with pytest.raises(HostFactoryConfigError):
            _pipeline(bootstrapper=bootstrapper, retriever=retriever).run(
                InvocationRequest(str(path), "v1")
            )

        bootstrapper.build.assert_not_called()
        retriever.get.assert_not_called()

    def test_unknown_document_leaves_no_file(
        self, write_module, stub_startup_source, temp_dir
    ):
        path = write_module("stub_app.py", stub_startup_source)
        target = temp_dir / "swagger.json"

        with pytest.raises(UnknownSwaggerDocumentError):
            _pipeline().run(InvocationRequest(str(path), "v2", output_path=target))

        assert not target.exists()

    def test_provider_not_registered(self, write_module):
        path = write_module(
            "no_provider.py", "def configure_services(services):\n    pass\n"
        )

        with pytest.raises(ServiceNotRegisteredError):
            _pipeline().run(InvocationRequest(str(path), "v1"))

    def test_module_load_failure(self, temp_dir):
        with pytest.raises(ModuleLoadError):
            _pipeline().run(InvocationRequest(str(temp_dir / "missing.py"), "v1"))

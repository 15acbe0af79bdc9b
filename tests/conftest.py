"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the swagcli test suite: temporary directories,
startup module writers and isolation of the import system and of the
swagcli loggers between tests.
"""

import logging
import shutil
import sys
import tempfile
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers",
        "integration: Integration tests (filesystem, real target applications)",
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full system integration)"
    )
    config.addinivalue_line("markers", "slow: Tests that take >1 second to run")


# =============================================================================
# Startup module sources
# =============================================================================

# Provider returning a fixed document; no web framework needed
STUB_PROVIDER_SOURCE = '''
from swagcli.swagger import OpenApiDocument, SwaggerProvider

SPEC = {
    "openapi": "3.1.0",
    "info": {"title": "Stub API", "version": "1.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "responses": {"200": {"description": "OK"}},
            }
        }
    },
}


class StubProvider(SwaggerProvider):
    @property
    def document_names(self):
        return ["v1"]

    def get_swagger(self, document_name, host=None, base_path=None):
        if document_name != "v1":
            from swagcli.exceptions import UnknownSwaggerDocumentError

            raise UnknownSwaggerDocumentError(document_name, ["v1"])
        document = OpenApiDocument(name=document_name, spec=SPEC)
        return document.with_overrides(host=host, base_path=base_path)
'''

STUB_STARTUP_SOURCE = STUB_PROVIDER_SOURCE + '''

def configure_services(services):
    services.add_singleton(SwaggerProvider, StubProvider())
'''

FASTAPI_STARTUP_SOURCE = '''
from fastapi import FastAPI
from pydantic import BaseModel

from swagcli.swagger.fastapi import add_swagger_gen

app = FastAPI(title="Orders API", version="1.2.0")


class Order(BaseModel):
    id: int
    item: str
    note: str | None = None


@app.get("/orders/{order_id}", response_model=Order, tags=["orders"])
def get_order(order_id: int, verbose: bool = False) -> Order:
    return Order(id=order_id, item="book")


@app.post("/orders", response_model=Order, status_code=201, tags=["orders"])
def create_order(order: Order) -> Order:
    return order


class Startup:
    def __init__(self, env):
        self.env = env

    def configure_services(self, services):
        add_swagger_gen(services, app, name="v1")
'''


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory that is cleaned up after the test.

    Yields:
        Path: Temporary directory path
    """
    temp_path = Path(tempfile.mkdtemp(prefix="swagcli-test-"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def write_module(temp_dir: Path) -> Callable[..., Path]:
    """
    Provide a writer for startup modules in the temporary directory.

    The returned callable takes a file name and source text (dedented) and
    returns the path written. With ``descriptors=True`` empty sibling
    ``.deps.yaml`` and ``.runtimeconfig.yaml`` files are written too.
    """

    def _write(name: str, source: str, descriptors: bool = False) -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        if descriptors:
            stem = path.name[: -len(path.suffix)]
            (path.parent / f"{stem}.deps.yaml").write_text("paths: []\n")
            (path.parent / f"{stem}.runtimeconfig.yaml").write_text("env: {}\n")
        return path

    return _write


@pytest.fixture
def stub_startup_source() -> str:
    """Startup module registering a fixed-document Swagger provider."""
    return STUB_STARTUP_SOURCE


@pytest.fixture
def stub_provider_source() -> str:
    """Module defining StubProvider without registering it."""
    return STUB_PROVIDER_SOURCE


@pytest.fixture
def fastapi_startup_source() -> str:
    """Startup module describing a small FastAPI application."""
    return FASTAPI_STARTUP_SOURCE


@pytest.fixture(autouse=True)
def isolated_imports() -> Generator[None, None, None]:
    """
    Restore sys.path and drop modules loaded from temporary directories.

    Startup modules are registered in sys.modules under their stem; without
    this cleanup a module named "app" in one test would collide with the
    next test's "app".
    """
    saved_path = list(sys.path)
    saved_modules = set(sys.modules)
    temp_root = str(Path(tempfile.gettempdir()).resolve())
    try:
        yield
    finally:
        sys.path[:] = saved_path
        for name in set(sys.modules) - saved_modules:
            file = getattr(sys.modules.get(name), "__file__", None)
            if file and str(Path(file).resolve()).startswith(temp_root):
                sys.modules.pop(name, None)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo handler and propagation changes made to the swagcli logger."""
    yield
    package = logging.getLogger("swagcli")
    for handler in list(package.handlers):
        package.removeHandler(handler)
    package.setLevel(logging.NOTSET)
    package.propagate = True


# =============================================================================
# Test Collection Hooks
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Add the 'unit' marker to tests without another category marker."""
    for item in items:
        if not any(
            mark.name in ["integration", "e2e"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)

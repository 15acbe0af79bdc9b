"""
Minimal web host and its builder.

The host built here is never started: swagcli only needs its service
registry to resolve the application's Swagger provider.

Example:
    host = (create_default_builder()
        .use_startup("app")
        .build())

    with host:
        provider = host.services.get_required_service(SwaggerProvider)
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..config import DEFAULT_ENVIRONMENT, Settings
from ..exceptions import ModuleLoadError, StartupNotFoundError
from .services import ServiceCollection, ServiceProvider

logger = logging.getLogger(__name__)

ServicesCallback = Callable[[ServiceCollection], None]


@dataclass(frozen=True)
class HostEnvironment:
    """
    Information about the hosting environment, registered as a service.

    Attributes:
        application_name: Name of the application (the startup module name)
        environment_name: Environment name, e.g. "Production" or "Development"
        settings: Read-only settings given to the builder
    """

    application_name: str = ""
    environment_name: str = DEFAULT_ENVIRONMENT
    settings: Mapping[str, Any] = field(default_factory=dict)

    def is_environment(self, name: str) -> bool:
        """Case-insensitive comparison with the environment name."""
        return self.environment_name.lower() == name.lower()


class WebHost:
    """
    A built (not running) host owning a service registry.

    Used as a context manager, the host is disposed on exit.
    """

    def __init__(self, services: ServiceProvider, environment: HostEnvironment):
        self._services = services
        self._environment = environment

    @property
    def services(self) -> ServiceProvider:
        """The host's service provider."""
        return self._services

    @property
    def environment(self) -> HostEnvironment:
        return self._environment

    def dispose(self) -> None:
        """Release services created by the host."""
        self._services.close()

    def __enter__(self) -> WebHost:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()


def _accepts_argument(cls: type) -> bool:
    """Check whether a class can be constructed with one positional argument."""
    try:
        sig = inspect.signature(cls)
    except (TypeError, ValueError):
        return False
    params = [
        p
        for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    return bool(params)


def apply_startup(
    module_name: str, environment: HostEnvironment, services: ServiceCollection
) -> None:
    """
    Run the startup hook of a module against a service collection.

    The hook is a module-level ``Startup`` class (constructed with the
    HostEnvironment when its constructor takes an argument) exposing
    ``configure_services(services)``, or a module-level
    ``configure_services(services)`` function.

    Raises:
        ModuleLoadError: If the module cannot be imported
        StartupNotFoundError: If the module has no startup hook
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ModuleLoadError(
            f"Cannot import startup module '{module_name}': {e}"
        ) from e

    startup_cls = getattr(module, "Startup", None)
    if inspect.isclass(startup_cls) and hasattr(startup_cls, "configure_services"):
        if _accepts_argument(startup_cls):
            startup = startup_cls(environment)
        else:
            startup = startup_cls()
        logger.debug("using startup class", extra={"startup": module_name})
        startup.configure_services(services)
        return

    configure = getattr(module, "configure_services", None)
    if callable(configure):
        logger.debug("using configure_services()", extra={"startup": module_name})
        configure(services)
        return

    raise StartupNotFoundError(module_name)


class WebHostBuilder:
    """
    Fluent builder for WebHost instances.

    Example:
        host = (WebHostBuilder()
            .use_environment("Development")
            .use_setting("debug", True)
            .use_startup("app")
            .configure_services(lambda s: s.add_singleton(Clock, FakeClock()))
            .build())
    """

    def __init__(self) -> None:
        self._application_name: str | None = None
        self._environment_name = DEFAULT_ENVIRONMENT
        self._settings: dict[str, Any] = {}
        self._startup_module: str | None = None
        self._callbacks: list[ServicesCallback] = []

    def use_environment(self, name: str) -> WebHostBuilder:
        """Set the environment name (default: "Production")."""
        self._environment_name = name
        return self

    def use_application_name(self, name: str) -> WebHostBuilder:
        """Set the application name (default: the startup module name)."""
        self._application_name = name
        return self

    def use_setting(self, key: str, value: Any) -> WebHostBuilder:
        """Add a setting exposed through HostEnvironment.settings."""
        self._settings[key] = value
        return self

    def use_startup(self, module_name: str) -> WebHostBuilder:
        """Use the startup hook of the named (already importable) module."""
        self._startup_module = module_name
        return self

    def configure_services(self, callback: ServicesCallback) -> WebHostBuilder:
        """Add a callback run after the startup hook, in registration order."""
        self._callbacks.append(callback)
        return self

    def _build_environment(self) -> HostEnvironment:
        return HostEnvironment(
            application_name=self._application_name or self._startup_module or "",
            environment_name=self._environment_name,
            settings=MappingProxyType(dict(self._settings)),
        )

    def build(self) -> WebHost:
        """
        Build the host.

        Raises:
            ModuleLoadError: If the startup module cannot be imported
            StartupNotFoundError: If the startup module has no startup hook
        """
        environment = self._build_environment()
        services = ServiceCollection()
        services.add_singleton(HostEnvironment, environment)

        if self._startup_module is not None:
            apply_startup(self._startup_module, environment, services)
        for callback in self._callbacks:
            callback(services)

        logger.debug(
            "host built",
            extra={
                "app": environment.application_name,
                "env": environment.environment_name,
                "services": len(services),
            },
        )
        return WebHost(services.build_service_provider(), environment)


def create_default_builder(settings: Settings | None = None) -> WebHostBuilder:
    """
    Create a builder with framework defaults applied.

    The environment name comes from ``SWAGCLI_ENVIRONMENT`` (default
    "Production").

    Args:
        settings: Tool settings (defaults to Settings.from_env())

    Returns:
        WebHostBuilder ready for use_startup()
    """
    settings = settings or Settings.from_env()
    return WebHostBuilder().use_environment(settings.environment)

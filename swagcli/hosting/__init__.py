"""
Hosting: the minimal web host, its service registry, and host construction.
"""

from .bootstrap import HostBootstrapper
from .discovery import HostFactoryResolver, find_factory_types
from .factory import SwaggerHostFactory
from .host import (
    HostEnvironment,
    WebHost,
    WebHostBuilder,
    apply_startup,
    create_default_builder,
)
from .services import ServiceCollection, ServiceProvider

__all__ = [
    "HostBootstrapper",
    "HostEnvironment",
    "HostFactoryResolver",
    "ServiceCollection",
    "ServiceProvider",
    "SwaggerHostFactory",
    "WebHost",
    "WebHostBuilder",
    "apply_startup",
    "create_default_builder",
    "find_factory_types",
]

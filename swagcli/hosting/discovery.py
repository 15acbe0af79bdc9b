"""
Discovery of a custom host factory in a loaded startup module.
"""

from __future__ import annotations

import inspect
import logging
from types import ModuleType

from ..exceptions import HostFactoryConfigError
from .factory import SwaggerHostFactory

logger = logging.getLogger(__name__)


def find_factory_types(module: ModuleType) -> list[type[SwaggerHostFactory]]:
    """
    List the host factory types a module defines.

    Only public, concrete classes defined in the module itself count;
    factories imported from elsewhere are ignored.

    Args:
        module: Loaded startup module

    Returns:
        Matching classes in definition order of the module namespace
    """
    found = []
    for name, obj in vars(module).items():
        if name.startswith("_") or not inspect.isclass(obj):
            continue
        if obj.__module__ != module.__name__:
            continue
        if issubclass(obj, SwaggerHostFactory) and not inspect.isabstract(obj):
            found.append(obj)
    return found


class HostFactoryResolver:
    """
    Finds the optional SwaggerHostFactory of a startup module.

    Zero implementations means "use the default builder"; more than one is a
    configuration error reported before any host is built.
    """

    def resolve(self, module: ModuleType) -> SwaggerHostFactory | None:
        """
        Resolve and instantiate the module's host factory.

        Args:
            module: Loaded startup module

        Returns:
            Factory instance, or None if the module defines none

        Raises:
            HostFactoryConfigError: If the module defines more than one
        """
        types = find_factory_types(module)
        if len(types) > 1:
            raise HostFactoryConfigError(
                module.__name__, [f"{t.__module__}.{t.__qualname__}" for t in types]
            )
        if not types:
            return None

        factory_type = types[0]
        logger.info(
            f"SwaggerHostFactory found, using "
            f"{factory_type.__module__}.{factory_type.__qualname__}"
        )
        return factory_type()

"""
Unified exception hierarchy for swagcli.

Every failure of the retrieval pipeline surfaces as one of these exceptions.
The CLI catches ``SwagCliError`` once at the top level, logs it and turns it
into a non-zero exit code; nothing in the pipeline retries.
"""

from typing import Any


class SwagCliError(Exception):
    """
    Base exception for all swagcli errors.

    Example:
        try:
            pipeline.run(request)
        except SwagCliError as e:
            lg.error(f"retrieval failed: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(SwagCliError):
    """
    Configuration-related errors.

    Raised when the target application or the tool itself is configured in a
    way the pipeline cannot work with.
    """

    pass


class DescriptorError(ConfigurationError):
    """Raised when a runtime descriptor file is unreadable or malformed."""

    pass


class HostFactoryConfigError(ConfigurationError):
    """Raised when a startup module defines more than one host factory."""

    def __init__(self, module_name: str, type_names: list[str]) -> None:
        self.module_name = module_name
        self.type_names = type_names
        super().__init__(
            "Multiple SwaggerHostFactory implementations",
            module=module_name,
            types=",".join(type_names),
        )


class StartupNotFoundError(ConfigurationError):
    """Raised when the default host builder cannot find a startup hook."""

    def __init__(self, module_name: str) -> None:
        self.module_name = module_name
        super().__init__(
            f"Module '{module_name}' defines neither a Startup class nor a "
            "configure_services() function",
            module=module_name,
        )


class LaunchError(SwagCliError):
    """Raised when the child process cannot be started."""

    pass


class ModuleLoadError(SwagCliError):
    """Raised when the startup module cannot be loaded."""

    pass


class RetrievalError(SwagCliError):
    """Raised when the Swagger document cannot be obtained from the host."""

    pass


class ServiceNotRegisteredError(RetrievalError):
    """Raised when a required service is missing from the host's services."""

    def __init__(self, key: Any) -> None:
        self.key = key
        name = getattr(key, "__qualname__", None) or str(key)
        super().__init__(f"No service for type '{name}' has been registered")


class UnknownSwaggerDocumentError(RetrievalError):
    """Raised when the Swagger provider does not know the requested document."""

    def __init__(self, document_name: str, known: list[str]) -> None:
        self.document_name = document_name
        self.known = known
        super().__init__(
            f"Unknown Swagger document '{document_name}'",
            known=",".join(known) or "<none>",
        )


class SerializationError(SwagCliError):
    """Raised when a document cannot be serialized or written."""

    pass


class LoggingError(SwagCliError):
    """Raised when logging configuration is invalid (e.g. unknown level)."""

    pass


class ToolError(SwagCliError):
    """Raised when a CLI tool is misconfigured or misused."""

    pass


class ToolRegistrationError(ToolError):
    """Raised when tool registration fails."""

    def __init__(self, tool_name: str, reason: str):
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(f"Failed to register tool '{tool_name}': {reason}")

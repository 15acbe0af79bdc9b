"""
In-memory OpenAPI document returned by a Swagger provider.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class OpenApiDocument:
    """
    Immutable OpenAPI 3 document plus the host/base-path overrides to apply.

    Attributes:
        name: Name the document was registered under (e.g. "v1")
        spec: OpenAPI 3.x mapping (read-only copy)
        host: Host override, e.g. "api.example.com" (optional)
        base_path: Base path override, e.g. "/v1" (optional)
    """

    name: str
    spec: Mapping[str, Any] = field(default_factory=dict)
    host: str | None = None
    base_path: str | None = None

    def __post_init__(self) -> None:
        frozen = MappingProxyType(copy.deepcopy(dict(self.spec)))
        object.__setattr__(self, "spec", frozen)

    @property
    def openapi_version(self) -> str | None:
        return self.spec.get("openapi")

    @property
    def info(self) -> dict[str, Any]:
        return copy.deepcopy(self.spec.get("info") or {})

    @property
    def title(self) -> str | None:
        return self.info.get("title")

    @property
    def version(self) -> str | None:
        return self.info.get("version")

    def with_overrides(
        self, host: str | None = None, base_path: str | None = None
    ) -> OpenApiDocument:
        """
        Return a copy with host and/or base path overridden.

        Arguments left as None keep the current value.
        """
        return replace(
            self,
            spec=self.spec,
            host=host if host is not None else self.host,
            base_path=base_path if base_path is not None else self.base_path,
        )

    def server_url(self) -> str | None:
        """
        Server URL described by the overrides, or None without overrides.

        A host without a scheme yields a scheme-relative URL ("//host/path").
        """
        base_path = self.base_path or ""
        if self.host:
            if "://" in self.host:
                return self.host.rstrip("/") + base_path
            return f"//{self.host}{base_path}"
        return base_path or None

    def to_dict(self) -> dict[str, Any]:
        """Mutable deep copy of the underlying OpenAPI mapping."""
        return copy.deepcopy(dict(self.spec))

"""Descriptors, import request/result, and import outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from apigw_import.exceptions import ConfigError

DEFAULT_ROOT_PATH = "/"


@dataclass(frozen=True)
class GatewayDescriptor:
    id: str
    name: str

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> GatewayDescriptor:
        return cls(id=item["id"], name=item.get("name", ""))


@dataclass(frozen=True)
class ResourceDescriptor:
    id: str
    path: str

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> ResourceDescriptor:
        return cls(id=item["id"], path=item.get("path", ""))


@dataclass(frozen=True)
class ImportRequest:
    """What to look up: a REST API by name, its root path, and extra paths.

    An empty name disables the import entirely.
    """

    name: str = ""
    root_path: str = DEFAULT_ROOT_PATH
    resource_paths: tuple[str, ...] = ()

    @property
    def enabled(self) -> bool:
        return bool(self.name)

    @classmethod
    def from_config(cls, section: dict[str, Any] | None) -> ImportRequest:
        """Build a request from a `custom.importApiGateway` mapping.

        Missing or null keys fall back to defaults: path "/", resources [].

        Raises:
            ConfigError: If the section or one of its keys has the wrong type
        """
        if section is None:
            return cls()
        if not isinstance(section, dict):
            raise ConfigError(f"importApiGateway must be a mapping, got {type(section).__name__}")

        name = section.get("name") or ""
        path = section.get("path") or DEFAULT_ROOT_PATH
        resources = section.get("resources") or []

        if not isinstance(name, str):
            raise ConfigError(f"importApiGateway.name must be a string, got {name!r}")
        if not isinstance(path, str):
            raise ConfigError(f"importApiGateway.path must be a string, got {path!r}")
        if not isinstance(resources, list) or not all(isinstance(p, str) for p in resources):
            raise ConfigError(f"importApiGateway.resources must be a list of paths, got {resources!r}")

        return cls(name=name, root_path=path, resource_paths=tuple(resources))


@dataclass(frozen=True)
class ImportResult:
    rest_api_id: str
    root_resource_id: str
    resources: dict[str, str] = field(default_factory=dict)

    def to_config(self) -> dict[str, Any]:
        return {
            "restApiId": self.rest_api_id,
            "restApiRootResourceId": self.root_resource_id,
            "restApiResources": dict(self.resources),
        }


@dataclass(frozen=True)
class Disabled:
    """No REST API name configured."""


@dataclass(frozen=True)
class Merged:
    result: ImportResult


@dataclass(frozen=True)
class NotFound:
    message: str


@dataclass(frozen=True)
class ProviderFailure:
    message: str
    error: Exception | None = None


Outcome = Union[Disabled, Merged, NotFound, ProviderFailure]

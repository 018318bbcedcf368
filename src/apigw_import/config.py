"""Deployment file access: import section, target section, connection settings."""

from __future__ import annotations

import os
from typing import Any

import yaml

from apigw_import.exceptions import ConfigError

SECTION_KEY = "importApiGateway"
TARGET_KEY = "apiGateway"


def load_service(path: str) -> dict[str, Any]:
    """Read a YAML deployment file (e.g. serverless.yml).

    Raises:
        ConfigError: If the file is missing, unparseable, or not a mapping
    """
    try:
        with open(path, "r") as f:
            service = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Deployment file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Unable to parse {path}: {e}")

    if service is None:
        return {}
    if not isinstance(service, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return service


def save_service(path: str, service: dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w") as f:
        yaml.safe_dump(service, f, sort_keys=False, default_flow_style=False)
    os.replace(tmp, path)


def import_section(service: dict[str, Any]) -> dict[str, Any] | None:
    """Return `custom.importApiGateway`, or None when absent or null."""
    custom = service.get("custom") or {}
    if not isinstance(custom, dict):
        raise ConfigError("custom must be a mapping")
    return custom.get(SECTION_KEY)


def api_gateway_section(service: dict[str, Any]) -> dict[str, Any]:
    """Return `provider.apiGateway`, creating empty mappings along the way."""
    provider = service.get("provider")
    if provider is None:
        provider = service["provider"] = {}
    if not isinstance(provider, dict):
        raise ConfigError("provider must be a mapping")
    target = provider.get(TARGET_KEY)
    if target is None:
        target = provider[TARGET_KEY] = {}
    if not isinstance(target, dict):
        raise ConfigError(f"provider.{TARGET_KEY} must be a mapping")
    return target


def resolve_connection(region: str | None, profile: str | None,
                       service: dict[str, Any] | None = None) -> tuple[str | None, str | None]:
    """Resolve AWS region and profile from flags → env vars → deployment file."""
    provider = (service or {}).get("provider") or {}
    region = (
        region
        or os.environ.get("AWS_REGION")
        or os.environ.get("AWS_DEFAULT_REGION")
        or provider.get("region")
    )
    profile = (
        profile
        or os.environ.get("AWS_PROFILE")
        or provider.get("profile")
    )
    return region, profile

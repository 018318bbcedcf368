"""Match REST APIs by name and resources by path.

Duplicate names or paths are possible in API Gateway; the first entry in
listing order always wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from apigw_import.models import GatewayDescriptor, ResourceDescriptor


def find_by_name(gateways: Iterable[GatewayDescriptor], name: str) -> str | None:
    """Return the id of the first REST API named exactly `name` (case-sensitive)."""
    for gateway in gateways:
        if gateway.name == name:
            return gateway.id
    return None


def find_by_path(resources: Iterable[ResourceDescriptor], path: str) -> str | None:
    """Return the id of the first resource whose path equals `path`."""
    for resource in resources:
        if resource.path == path:
            return resource.id
    return None


def resolve_paths(
    resources: Sequence[ResourceDescriptor], paths: Iterable[str],
) -> tuple[dict[str, str], list[str]]:
    """Resolve a batch of paths against one resource listing.

    Args:
        resources: Resources of a single REST API, in listing order
        paths: Requested paths, in order

    Returns:
        (resolved, missing): path -> id for every path found, and the
        requested paths that were not found, in request order
    """
    resolved: dict[str, str] = {}
    missing: list[str] = []
    for path in paths:
        if path in resolved or path in missing:
            continue
        resource_id = find_by_path(resources, path)
        if resource_id is None:
            missing.append(path)
        else:
            resolved[path] = resource_id
    return resolved, missing

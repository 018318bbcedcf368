"""Resolve an existing REST API and merge its ids into a deployment config."""

from __future__ import annotations

import json
from typing import Any, Callable

from apigw_import.console import cli_log, error_log
from apigw_import.exceptions import retry_hint
from apigw_import.lister import list_gateways, list_resources
from apigw_import.models import (
    Disabled,
    ImportRequest,
    ImportResult,
    Merged,
    NotFound,
    Outcome,
    ProviderFailure,
)
from apigw_import.resolver import find_by_name, find_by_path, resolve_paths


def resolve(request: ImportRequest, provider: Any) -> Outcome:
    """Look up the REST API, its root resource, and every requested path.

    Resources are listed once and reused for the root path and all extra
    paths. Any missing path yields NotFound; nothing is partially resolved.

    Args:
        request: What to look up
        provider: Object exposing paginate(service, operation, page_size, **params)

    Returns:
        Disabled, NotFound, or Merged (carrying the ImportResult)

    Raises:
        Whatever the provider raises; callers decide how to report it
    """
    if not request.enabled:
        return Disabled()

    rest_api_id = find_by_name(list_gateways(provider), request.name)
    if not rest_api_id:
        return NotFound(f"Unable to find REST API named '{request.name}'")

    resources = list_resources(provider, rest_api_id)
    root_resource_id = find_by_path(resources, request.root_path)
    if not root_resource_id:
        return NotFound(
            f"Unable to find root resource ID ({request.root_path}) for REST API ({rest_api_id})"
        )

    resolved, missing = resolve_paths(resources, request.resource_paths)
    if missing:
        return NotFound(f"Unable to find resource path ({missing[0]}) for REST API ({rest_api_id})")

    return Merged(ImportResult(rest_api_id, root_resource_id, resolved))


def merge_into(target: dict[str, Any], result: ImportResult, resource_paths: bool = True) -> None:
    """Write the resolved ids into `target` without touching other keys.

    Only restApiId, restApiRootResourceId and restApiResources are written.
    restApiResources is replaced by the freshly resolved mapping, one entry
    per requested path. Pass resource_paths=False when no extra paths were
    requested so an existing restApiResources is left alone.
    """
    values = result.to_config()
    if not resource_paths:
        del values["restApiResources"]
    target.update(values)


def import_api_gateway(
    request: ImportRequest,
    target: dict[str, Any],
    provider: Any,
    log: Callable[[str], None] = cli_log,
    error: Callable[[str], None] = error_log,
) -> Outcome:
    """Resolve, merge, and report. Never raises for provider failures.

    Args:
        request: What to look up
        target: The provider.apiGateway mapping to merge into
        provider: Object exposing paginate(service, operation, page_size, **params)
        log: Sink for not-found and success lines
        error: Sink for the provider-failure line

    Returns:
        The outcome of this run; target is only modified on Merged
    """
    try:
        outcome = resolve(request, provider)
    except Exception as e:
        message = _format_provider_error(e)
        hint = retry_hint(e)
        error(f"Import API Gateway Error: {message}" + (f" → {hint}" if hint else ""))
        return ProviderFailure(message, e)

    if isinstance(outcome, NotFound):
        log(outcome.message)
    elif isinstance(outcome, Merged):
        merge_into(target, outcome.result, resource_paths=bool(request.resource_paths))
        log(f"Imported API Gateway ({json.dumps(target, default=str)})")
    return outcome


def _format_provider_error(exc: Exception) -> str:
    """Format an exception message with error code and request ID if available."""
    msg = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__

    error_code = getattr(exc, "error_code", None)
    if error_code:
        msg += f" [{error_code}]"

    request_id = getattr(exc, "request_id", None)
    if request_id:
        msg += f" (req-id: {request_id})"

    return msg

"""Paged reads of REST APIs and their resources from API Gateway."""

from __future__ import annotations

from typing import Any

from apigw_import.models import GatewayDescriptor, ResourceDescriptor

SERVICE = "apigateway"
PAGE_SIZE = 500


def _list_items(provider: Any, operation: str, **params: Any) -> list[dict[str, Any]]:
    """Flatten the items of every page of an operation.

    An empty or missing page counts as zero items. Provider errors
    propagate unchanged.
    """
    items: list[dict[str, Any]] = []
    for page in provider.paginate(SERVICE, operation, page_size=PAGE_SIZE, **params):
        items.extend((page or {}).get("items") or [])
    return items


def list_gateways(provider: Any) -> list[GatewayDescriptor]:
    return [GatewayDescriptor.from_item(item) for item in _list_items(provider, "get_rest_apis")]


def list_resources(provider: Any, rest_api_id: str) -> list[ResourceDescriptor]:
    return [
        ResourceDescriptor.from_item(item)
        for item in _list_items(provider, "get_resources", restApiId=rest_api_id)
    ]

#!/usr/bin/env python3
"""CLI entry point for importing an existing API Gateway REST API."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from apigw_import.config import (
    api_gateway_section,
    import_section,
    load_service,
    resolve_connection,
    save_service,
)
from apigw_import.exceptions import ConfigError, ProviderError, retry_hint
from apigw_import.importer import import_api_gateway
from apigw_import.lister import list_gateways, list_resources
from apigw_import.models import ImportRequest, Merged, NotFound, ProviderFailure
from apigw_import.provider import AwsProvider
from apigw_import.resolver import find_by_name

DEFAULT_CONFIG_FILE = "serverless.yml"
NAME_ENV = "APIGW_IMPORT_NAME"


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared across subcommands."""
    parser.add_argument("--region", help="AWS region (or AWS_REGION env var, or provider.region)")
    parser.add_argument("--profile", help="AWS named profile (or AWS_PROFILE env var, or provider.profile)")


def _build_request(args: argparse.Namespace, service: dict[str, Any]) -> ImportRequest:
    """Build the request from the import section, then apply flag → env overrides."""
    section = dict(import_section(service) or {})
    name = getattr(args, "name", None) or os.environ.get(NAME_ENV)
    if name:
        section["name"] = name
    if getattr(args, "path", None):
        section["path"] = args.path
    if getattr(args, "resources", None):
        section["resources"] = args.resources
    return ImportRequest.from_config(section)


def _provider(args: argparse.Namespace, service: dict[str, Any] | None = None) -> AwsProvider:
    region, profile = resolve_connection(args.region, args.profile, service)
    return AwsProvider(region=region, profile=profile)


def cmd_import(args: argparse.Namespace) -> int:
    """Resolve the REST API and merge its ids into provider.apiGateway."""
    service = load_service(args.config)
    request = _build_request(args, service)
    target = api_gateway_section(service)

    outcome = import_api_gateway(request, target, _provider(args, service))

    print(json.dumps(target, indent=2, default=str))

    if isinstance(outcome, Merged):
        if args.write:
            save_service(args.config, service)
            print(f"Updated {args.config}", file=sys.stderr)
        elif args.out:
            save_service(args.out, service)
            print(f"Saved to {args.out}", file=sys.stderr)
    if isinstance(outcome, NotFound):
        return 2
    if isinstance(outcome, ProviderFailure):
        return 1
    return 0


def cmd_gateways(args: argparse.Namespace) -> int:
    """List REST APIs as `id name` lines."""
    for gateway in list_gateways(_provider(args)):
        if args.name and gateway.name != args.name:
            continue
        print(f"{gateway.id}\t{gateway.name}")
    return 0


def cmd_resources(args: argparse.Namespace) -> int:
    """List resources of a REST API as `id path` lines."""
    provider = _provider(args)
    rest_api_id = args.rest_api_id
    if not rest_api_id:
        rest_api_id = find_by_name(list_gateways(provider), args.name)
        if not rest_api_id:
            print(f"Error: Unable to find REST API named '{args.name}'", file=sys.stderr)
            return 2
    for resource in list_resources(provider, rest_api_id):
        print(f"{resource.id}\t{resource.path}")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Import an existing API Gateway REST API into a deployment config",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # import
    p_import = subparsers.add_parser("import", help="Resolve ids and merge into provider.apiGateway")
    add_common_args(p_import)
    p_import.add_argument("--config", default=DEFAULT_CONFIG_FILE,
                          help=f"Deployment file (default: {DEFAULT_CONFIG_FILE})")
    p_import.add_argument("--name", help=f"REST API name (or {NAME_ENV} env var)")
    p_import.add_argument("--path", help="Root resource path (default: /)")
    p_import.add_argument("--resource", dest="resources", action="append",
                          help="Extra resource path to resolve (repeatable)")
    output = p_import.add_mutually_exclusive_group()
    output.add_argument("--write", action="store_true",
                        help="Save the merged deployment file in place")
    output.add_argument("--out", help="Save the merged deployment file to another path")

    # gateways
    p_gateways = subparsers.add_parser("gateways", help="List REST APIs")
    add_common_args(p_gateways)
    p_gateways.add_argument("--name", help="Only show REST APIs with this exact name")

    # resources
    p_resources = subparsers.add_parser("resources", help="List resources of a REST API")
    add_common_args(p_resources)
    target = p_resources.add_mutually_exclusive_group(required=True)
    target.add_argument("--rest-api-id", help="REST API id")
    target.add_argument("--name", help="REST API name")

    args = parser.parse_args(argv)

    logging.getLogger("botocore").setLevel(logging.ERROR)

    commands = {
        "import": cmd_import,
        "gateways": cmd_gateways,
        "resources": cmd_resources,
    }
    try:
        rc = commands[args.command](args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ProviderError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        hint = retry_hint(e)
        if hint:
            print(f"       → {hint}", file=sys.stderr)
        sys.exit(1)
    sys.exit(rc)


if __name__ == "__main__":
    main()

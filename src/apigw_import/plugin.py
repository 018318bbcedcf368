"""Lifecycle-hook adapter for deployment pipelines."""

from __future__ import annotations

from typing import Any, Callable

from apigw_import.config import api_gateway_section, import_section
from apigw_import.console import cli_log, error_log
from apigw_import.exceptions import ConfigError
from apigw_import.importer import import_api_gateway
from apigw_import.models import DEFAULT_ROOT_PATH, ImportRequest, Outcome

HOOK = "before:package:setupProviderConfiguration"


class ImportApiGatewayPlugin:
    """Registers the import on the hook that runs before provider config is finalised.

    The hook is only registered when `custom.importApiGateway.name` is set.
    """

    def __init__(self, service: dict[str, Any], provider: Any,
                 log: Callable[[str], None] = cli_log,
                 error: Callable[[str], None] = error_log) -> None:
        self.service = service
        self.provider = provider
        self.log = log
        self.error = error

        self.config: dict[str, Any] = {}
        self.target: dict[str, Any] = {}
        self.request = ImportRequest()
        self.hooks: dict[str, Callable[[], Outcome]] = {}

        try:
            section = import_section(service)
            self.request = ImportRequest.from_config(section)
            self.target = api_gateway_section(service)
        except ConfigError as e:
            self.request = ImportRequest()
            self.error(f"Import API Gateway Error: {e}")
            return

        self.config = dict(section or {})
        if self.config.get("name"):
            self.config.setdefault("path", DEFAULT_ROOT_PATH)
            self.config.setdefault("resources", [])

        if self.request.enabled:
            self.hooks[HOOK] = self.import_api_gateway

    def import_api_gateway(self) -> Outcome:
        return import_api_gateway(self.request, self.target, self.provider,
                                  log=self.log, error=self.error)

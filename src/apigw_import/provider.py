"""AWS provider: boto3 clients with retry config and error translation."""

from __future__ import annotations

from typing import Any, Iterator

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from apigw_import.exceptions import (
    ProviderError,
    ProviderThrottledError,
    ProviderServerError,
    ProviderConnectionError,
    ProviderBadRequestError,
    ProviderUnauthorizedError,
    ProviderNotFoundError,
)

MAX_RETRIES = 5
CONNECT_TIMEOUT = 10  # seconds
READ_TIMEOUT = 120  # seconds


def translate_error(exc: Exception) -> ProviderError:
    """Map a botocore exception onto the provider exception hierarchy.

    ClientError carries a response of the form:
    {
      "Error": {"Code": "NotFoundException", "Message": "Invalid API identifier specified"},
      "ResponseMetadata": {"HTTPStatusCode": 404, "RequestId": "..."}
    }

    Args:
        exc: Exception raised by a boto3 client call

    Returns:
        A ProviderError instance (or appropriate subclass)
    """
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        metadata = exc.response.get("ResponseMetadata", {})
        status = metadata.get("HTTPStatusCode")
        error_code = error.get("Code")
        message = error.get("Message") or str(exc)
        request_id = metadata.get("RequestId")

        if status == 429 or error_code in ("TooManyRequestsException", "ThrottlingException"):
            exc_class: type[ProviderError] = ProviderThrottledError
        elif status is not None and status >= 500:
            exc_class = ProviderServerError
        elif status == 404 or error_code == "NotFoundException":
            exc_class = ProviderNotFoundError
        elif status in (401, 403) or error_code in ("UnauthorizedException", "AccessDeniedException"):
            exc_class = ProviderUnauthorizedError
        elif status == 400:
            exc_class = ProviderBadRequestError
        else:
            exc_class = ProviderError

        return exc_class(
            message,
            status_code=status,
            error_code=error_code,
            request_id=request_id,
            response=exc.response,
        )

    if isinstance(exc, BotoCoreError):
        return ProviderConnectionError(str(exc))

    return ProviderError(str(exc))


class AwsProvider:
    """Thin wrapper around boto3 with per-service client caching."""

    def __init__(self, region: str | None = None, profile: str | None = None) -> None:
        self.region = region
        self.profile = profile
        try:
            self._session = boto3.session.Session(profile_name=profile, region_name=region)
        except BotoCoreError as e:
            raise translate_error(e) from e
        self._config = Config(
            retries={"max_attempts": MAX_RETRIES, "mode": "standard"},
            connect_timeout=CONNECT_TIMEOUT,
            read_timeout=READ_TIMEOUT,
        )
        self._clients: dict[str, Any] = {}

    def client(self, service: str) -> Any:
        if service not in self._clients:
            self._clients[service] = self._session.client(service, config=self._config)
        return self._clients[service]

    def request(self, service: str, operation: str, **params: Any) -> dict[str, Any]:
        """Call a client operation and return its response dict.

        Args:
            service: boto3 service name (e.g. "apigateway")
            operation: snake_case client method (e.g. "get_rest_apis")
            **params: Operation parameters

        Returns:
            The response dict (ResponseMetadata included)

        Raises:
            ProviderError: On any botocore failure, after botocore's own retries
        """
        method = getattr(self.client(service), operation)
        try:
            return method(**params)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e) from e

    def paginate(self, service: str, operation: str, page_size: int | None = None,
                 **params: Any) -> Iterator[dict[str, Any]]:
        """Yield every page of a paginated client operation.

        Args:
            service: boto3 service name (e.g. "apigateway")
            operation: snake_case paginator name (e.g. "get_resources")
            page_size: Items requested per page
            **params: Operation parameters

        Yields:
            One response dict per page

        Raises:
            ProviderError: On any botocore failure, including mid-pagination
        """
        pagination_config = {"PageSize": page_size} if page_size else {}
        try:
            paginator = self.client(service).get_paginator(operation)
            yield from paginator.paginate(**params, PaginationConfig=pagination_config)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e) from e

"""Tests for the boto3 provider wrapper and error translation."""

from unittest.mock import patch, MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from apigw_import.exceptions import (
    ProviderError,
    ProviderTransientError,
    ProviderPermanentError,
    ProviderThrottledError,
    ProviderServerError,
    ProviderConnectionError,
    ProviderBadRequestError,
    ProviderUnauthorizedError,
    ProviderNotFoundError,
)
from apigw_import.provider import AwsProvider, MAX_RETRIES, translate_error


def client_error(status, code, message="msg", request_id="req-123"):
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status, "RequestId": request_id},
        },
        "GetRestApis",
    )


class TestTranslateError:
    # Tests that status codes and error codes map to the right exception class.
    @pytest.mark.parametrize("status,code,exc_class", [
        (429, "TooManyRequestsException", ProviderThrottledError),
        (400, "ThrottlingException", ProviderThrottledError),
        (500, "InternalFailure", ProviderServerError),
        (503, "ServiceUnavailableException", ProviderServerError),
        (404, "NotFoundException", ProviderNotFoundError),
        (401, "UnauthorizedException", ProviderUnauthorizedError),
        (403, "AccessDeniedException", ProviderUnauthorizedError),
        (400, "BadRequestException", ProviderBadRequestError),
        (409, "ConflictException", ProviderError),
    ])
    def test_mapping(self, status, code, exc_class):
        exc = translate_error(client_error(status, code))
        assert type(exc) is exc_class

    # Tests that details from the error response are carried over.
    def test_carries_details(self):
        exc = translate_error(client_error(404, "NotFoundException", "Invalid API identifier specified"))
        assert exc.message == "Invalid API identifier specified"
        assert exc.status_code == 404
        assert exc.error_code == "NotFoundException"
        assert exc.request_id == "req-123"
        assert isinstance(exc, ProviderPermanentError)

    # Tests that connection failures become transient errors.
    def test_botocore_error(self):
        exc = translate_error(EndpointConnectionError(endpoint_url="https://apigateway.example"))
        assert isinstance(exc, ProviderConnectionError)
        assert isinstance(exc, ProviderTransientError)
        assert "apigateway.example" in exc.message

    def test_repr(self):
        exc = translate_error(client_error(404, "NotFoundException", "gone"))
        assert repr(exc) == (
            "ProviderNotFoundError('gone', status_code=404, "
            "error_code='NotFoundException', request_id='req-123')"
        )


@pytest.fixture
def session():
    with patch("apigw_import.provider.boto3.session.Session") as mock_session:
        yield mock_session


class TestAwsProvider:
    # Tests that the session is built with region and profile.
    def test_session_args(self, session):
        AwsProvider(region="eu-west-1", profile="deploy")
        session.assert_called_once_with(profile_name="deploy", region_name="eu-west-1")

    # Tests that clients are created once per service with retry config.
    def test_client_cached(self, session):
        provider = AwsProvider()
        c1 = provider.client("apigateway")
        c2 = provider.client("apigateway")
        assert c1 is c2
        session.return_value.client.assert_called_once()
        config = session.return_value.client.call_args.kwargs["config"]
        assert config.retries == {"max_attempts": MAX_RETRIES, "mode": "standard"}

    # Tests that request calls the named operation with params.
    def test_request_calls_operation(self, session):
        client = MagicMock()
        client.get_resources.return_value = {"items": []}
        session.return_value.client.return_value = client
        provider = AwsProvider()
        result = provider.request("apigateway", "get_resources", restApiId="abc", limit=500)
        assert result == {"items": []}
        client.get_resources.assert_called_once_with(restApiId="abc", limit=500)

    # Tests that botocore errors are raised as provider errors.
    def test_request_translates_errors(self, session):
        client = MagicMock()
        client.get_rest_apis.side_effect = client_error(429, "TooManyRequestsException", "slow down")
        session.return_value.client.return_value = client
        provider = AwsProvider()
        with pytest.raises(ProviderThrottledError, match="slow down") as exc_info:
            provider.request("apigateway", "get_rest_apis", limit=500)
        assert isinstance(exc_info.value.__cause__, ClientError)

    # Tests that paginate uses the botocore paginator with the page size.
    def test_paginate_uses_paginator(self, session):
        client = MagicMock()
        client.get_paginator.return_value.paginate.return_value = iter([{"items": [1]}, {"items": [2]}])
        session.return_value.client.return_value = client
        provider = AwsProvider()
        pages = list(provider.paginate("apigateway", "get_resources", page_size=500, restApiId="abc"))
        assert pages == [{"items": [1]}, {"items": [2]}]
        client.get_paginator.assert_called_once_with("get_resources")
        client.get_paginator.return_value.paginate.assert_called_once_with(
            restApiId="abc", PaginationConfig={"PageSize": 500},
        )

    # Tests that errors raised while paging are translated.
    def test_paginate_translates_errors(self, session):
        def pages(**kwargs):
            yield {"items": []}
            raise client_error(503, "ServiceUnavailableException", "try later")

        client = MagicMock()
        client.get_paginator.return_value.paginate.side_effect = pages
        session.return_value.client.return_value = client
        provider = AwsProvider()
        with pytest.raises(ProviderServerError, match="try later"):
            list(provider.paginate("apigateway", "get_rest_apis", page_size=500))

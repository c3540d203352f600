"""Tests for public exceptions."""

import json

import pytest

from keda_connector._internal.invoke.models import ErrorResponse
from keda_connector.exceptions import (
    AllAttemptsExhaustedError,
    ConnectorConfigError,
    ConnectorDispatchError,
    ConnectorError,
    InvalidRetryCountError,
    MissingRegionError,
    MissingVariableError,
    NoCredentialSourceError,
    NonSuccessStatusError,
    RequestConstructionError,
)


class TestConnectorError:
    """Tests for base ConnectorError."""

    def test_is_exception(self):
        """ConnectorError should be an Exception."""
        assert issubclass(ConnectorError, Exception)

    def test_can_be_raised(self):
        """ConnectorError should be raisable with message."""
        with pytest.raises(ConnectorError) as exc_info:
            raise ConnectorError("test error")
        assert str(exc_info.value) == "test error"


class TestConfigErrors:
    """Tests for configuration errors."""

    @pytest.mark.parametrize(
        "error_cls",
        [MissingVariableError, InvalidRetryCountError, MissingRegionError, NoCredentialSourceError],
    )
    def test_inherit_from_config_error(self, error_cls):
        """All configuration errors should be ConnectorConfigErrors."""
        assert issubclass(error_cls, ConnectorConfigError)
        assert issubclass(error_cls, ConnectorError)

    def test_missing_variable_names_variable(self):
        """Should expose and mention the missing variable."""
        error = MissingVariableError("HTTP_ENDPOINT")
        assert error.name == "HTTP_ENDPOINT"
        assert "HTTP_ENDPOINT" in str(error)

    def test_invalid_retry_count_keeps_raw_value(self):
        """Should expose and mention the raw value."""
        error = InvalidRetryCountError("abc")
        assert error.raw_value == "abc"
        assert "abc" in str(error)

    def test_aws_messages(self):
        """Should carry descriptive messages."""
        assert str(MissingRegionError()) == "aws region required"
        assert str(NoCredentialSourceError()) == "no aws configuration specified"


class TestConnectorDispatchError:
    """Tests for dispatch errors."""

    def _error_response(self, status: int = 500) -> ErrorResponse:
        return ErrorResponse(
            status=status,
            message="request returned failure",
            http_endpoint="http://fn/",
            source="KEDAConnector",
            body="boom",
            request="hello",
        )

    def test_message_is_serialized_error(self):
        """str() should be the JSON error payload."""
        error = NonSuccessStatusError(self._error_response())
        payload = json.loads(str(error))
        assert payload["status"] == 500
        assert payload["body"] == "boom"
        assert payload["request"] == "hello"

    def test_exposes_status_and_payload(self):
        """Should expose the status code and the ErrorResponse."""
        response = self._error_response(status=503)
        error = AllAttemptsExhaustedError(response)
        assert error.status_code == 503
        assert error.error_response is response

    @pytest.mark.parametrize("error_cls", [AllAttemptsExhaustedError, NonSuccessStatusError])
    def test_can_be_caught_as_dispatch_error(self, error_cls):
        """Should be catchable as ConnectorDispatchError."""
        with pytest.raises(ConnectorDispatchError):
            raise error_cls(self._error_response())


class TestRequestConstructionError:
    """Tests for RequestConstructionError."""

    def test_is_not_a_dispatch_error(self):
        """Construction failures are not retried dispatch failures."""
        assert issubclass(RequestConstructionError, ConnectorError)
        assert not issubclass(RequestConstructionError, ConnectorDispatchError)

    def test_keeps_context(self):
        """Should keep endpoint and source."""
        error = RequestConstructionError("bad url", http_endpoint="http://x:y", source="src")
        assert str(error) == "bad url"
        assert error.http_endpoint == "http://x:y"
        assert error.source == "src"

"""Public exceptions for the KEDA connector SDK."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from keda_connector._internal.invoke.models import ErrorResponse


class ConnectorError(Exception):
    """Base exception for all connector SDK errors."""


class ConnectorConfigError(ConnectorError):
    """Configuration error (missing env vars, invalid config)."""


class MissingVariableError(ConnectorConfigError):
    """A required environment variable is missing or empty."""

    def __init__(self, name: str) -> None:
        super().__init__(f"environment variable not found: {name}")
        self.name = name


class InvalidRetryCountError(ConnectorConfigError):
    """MAX_RETRIES could not be parsed as a non-negative integer."""

    def __init__(self, raw_value: str) -> None:
        super().__init__(
            f"failed to parse value from MAX_RETRIES environment variable: {raw_value!r}"
        )
        self.raw_value = raw_value


class MissingRegionError(ConnectorConfigError):
    """AWS_REGION is not set."""

    def __init__(self) -> None:
        super().__init__("aws region required")


class NoCredentialSourceError(ConnectorConfigError):
    """No endpoint override, static keys or shared credentials file is configured."""

    def __init__(self) -> None:
        super().__init__("no aws configuration specified")


class ConnectorDispatchError(ConnectorError):
    """Function invocation failed.

    The message is the serialized ErrorResponse, so the error can be forwarded
    to an error topic as-is.
    """

    def __init__(self, error_response: "ErrorResponse") -> None:
        super().__init__(error_response.to_json())
        self.error_response = error_response
        self.status_code = error_response.status


class AllAttemptsExhaustedError(ConnectorDispatchError):
    """Every attempt failed at the transport level; no response was obtained."""


class NonSuccessStatusError(ConnectorDispatchError):
    """The final attempt returned a non-success status code."""


class RequestConstructionError(ConnectorError):
    """The invocation request could not be built (e.g. malformed endpoint)."""

    def __init__(self, message: str, *, http_endpoint: str, source: str) -> None:
        super().__init__(message)
        self.http_endpoint = http_endpoint
        self.source = source

"""KEDA connector SDK for Python.

Shared helpers for event-driven connectors that forward messages to a
function endpoint.

Public API:
    parse_connector_metadata - Read connector settings from the environment
    InvocationClient - POST messages to the function endpoint with retries
    handle_http_request - One-shot invocation with a short-lived client
    get_aws_config - Resolve AWS region and credentials from the environment
    setup_logging - Install the JSON log formatter
"""

from keda_connector._internal.aws import AwsConfig, get_aws_config
from keda_connector._internal.invoke import (
    ConnectorMetadata,
    ErrorResponse,
    InvocationClient,
    handle_http_request,
    parse_connector_metadata,
)
from keda_connector._internal.observability import setup_logging
from keda_connector._version import __version__

__all__ = [
    "__version__",
    "AwsConfig",
    "ConnectorMetadata",
    "ErrorResponse",
    "InvocationClient",
    "get_aws_config",
    "handle_http_request",
    "parse_connector_metadata",
    "setup_logging",
]

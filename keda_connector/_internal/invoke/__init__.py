"""Connector metadata and retrying function invocation."""

from keda_connector._internal.invoke.client import InvocationClient, handle_http_request
from keda_connector._internal.invoke.config import parse_connector_metadata
from keda_connector._internal.invoke.models import ConnectorMetadata, ErrorResponse

__all__ = [
    "InvocationClient",
    "handle_http_request",
    "parse_connector_metadata",
    "ConnectorMetadata",
    "ErrorResponse",
]

"""Pydantic models for connector metadata and invocation errors."""

from collections.abc import Mapping

from pydantic import BaseModel, Field

# =============================================================================
# Constants
# =============================================================================

DEFAULT_SOURCE_NAME = "KEDAConnector"

ENV_TOPIC = "TOPIC"
ENV_RESPONSE_TOPIC = "RESPONSE_TOPIC"
ENV_ERROR_TOPIC = "ERROR_TOPIC"
ENV_HTTP_ENDPOINT = "HTTP_ENDPOINT"
ENV_MAX_RETRIES = "MAX_RETRIES"
ENV_CONTENT_TYPE = "CONTENT_TYPE"
ENV_SOURCE_NAME = "SOURCE_NAME"

REQUIRED_ENV_VARS = (ENV_TOPIC, ENV_HTTP_ENDPOINT, ENV_MAX_RETRIES, ENV_CONTENT_TYPE)

STATUS_NO_RESPONSE = 503
MESSAGE_NO_RESPONSE = "every function invocation retry failed; final retry gave empty response"
MESSAGE_REQUEST_FAILED = "request returned failure"

# =============================================================================
# Connector Metadata
# =============================================================================


class ConnectorMetadata(BaseModel):
    """Fields shared by every connector, read once at process start.

    Required fields:
        topic: Topic the connector consumes from
        http_endpoint: Function endpoint invoked for each message
        max_retries: Retries after the first attempt (attempt budget is max_retries + 1)
        content_type: Content type of forwarded messages

    Optional fields:
        response_topic: Topic for function responses
        error_topic: Topic for invocation errors
        source_name: Identifier reported in errors (default: "KEDAConnector")
    """

    topic: str = Field(min_length=1)
    response_topic: str | None = None
    error_topic: str | None = None
    http_endpoint: str = Field(min_length=1)
    max_retries: int = Field(ge=0)
    content_type: str = Field(min_length=1)
    source_name: str = DEFAULT_SOURCE_NAME

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConnectorMetadata":
        """Build metadata from environment variables.

        See `parse_connector_metadata` for the variables read and the errors raised.
        """
        from keda_connector._internal.invoke.config import parse_connector_metadata

        return parse_connector_metadata(environ)


# =============================================================================
# Error Response
# =============================================================================


class ErrorResponse(BaseModel):
    """Structured error describing a failed function invocation.

    Fields:
        status: 503 when no response was obtained, otherwise the endpoint's status
        message: Human-readable failure description
        http_endpoint: The invoked endpoint
        source: The connector's source name
        body: Response body text of the final attempt (empty when none)
        request: The original message body
    """

    status: int
    message: str
    http_endpoint: str
    source: str
    body: str = ""
    request: str

    def to_json(self) -> str:
        """Serialize as compact JSON in wire field order."""
        return self.model_dump_json()

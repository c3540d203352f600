"""Materialize connector metadata from environment variables."""

import os
import re
from collections.abc import Mapping

from keda_connector._internal.invoke.models import (
    DEFAULT_SOURCE_NAME,
    ENV_CONTENT_TYPE,
    ENV_ERROR_TOPIC,
    ENV_HTTP_ENDPOINT,
    ENV_MAX_RETRIES,
    ENV_RESPONSE_TOPIC,
    ENV_SOURCE_NAME,
    ENV_TOPIC,
    REQUIRED_ENV_VARS,
    ConnectorMetadata,
)
from keda_connector.exceptions import InvalidRetryCountError, MissingVariableError

# Leading-zero octal ("017"), which int(x, 0) rejects.
_LEGACY_OCTAL = re.compile(r"[+-]?0[0-7_]*[0-7]")

# Retry counts are signed 64-bit values in every connector.
MAX_RETRY_COUNT = 2**63 - 1


def parse_connector_metadata(environ: Mapping[str, str] | None = None) -> ConnectorMetadata:
    """Parse the fields common to all connectors.

    Required environment variables:
        TOPIC: Topic the connector consumes from.
        HTTP_ENDPOINT: Function endpoint to invoke.
        MAX_RETRIES: Number of retries after the first attempt.
        CONTENT_TYPE: Content type of forwarded messages.

    Optional environment variables:
        RESPONSE_TOPIC: Topic for function responses.
        ERROR_TOPIC: Topic for invocation errors.
        SOURCE_NAME: Source identifier (default: "KEDAConnector").

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Frozen ConnectorMetadata.

    Raises:
        MissingVariableError: A required variable is missing or empty.
        InvalidRetryCountError: MAX_RETRIES is not a non-negative integer.
    """
    env = os.environ if environ is None else environ

    for name in REQUIRED_ENV_VARS:
        if not env.get(name):
            raise MissingVariableError(name)

    raw_retries = env[ENV_MAX_RETRIES]
    max_retries = parse_retry_count(raw_retries)

    return ConnectorMetadata(
        topic=env[ENV_TOPIC],
        response_topic=env.get(ENV_RESPONSE_TOPIC) or None,
        error_topic=env.get(ENV_ERROR_TOPIC) or None,
        http_endpoint=env[ENV_HTTP_ENDPOINT],
        max_retries=max_retries,
        content_type=env[ENV_CONTENT_TYPE],
        source_name=env.get(ENV_SOURCE_NAME) or DEFAULT_SOURCE_NAME,
    )


def parse_retry_count(raw_value: str) -> int:
    """Parse a retry count, honoring 0x/0o/0b prefixes and leading-zero octal."""
    value = raw_value.strip()
    try:
        # int() also accepts non-ASCII digits such as "\uff13".
        if not value.isascii():
            raise ValueError(f"non-ASCII characters in {value!r}")
        if _LEGACY_OCTAL.fullmatch(value):
            count = int(value, 8)
        else:
            count = int(value, 0)
        if count > MAX_RETRY_COUNT:
            raise ValueError(f"{value!r} is out of range")
    except ValueError as e:
        raise InvalidRetryCountError(raw_value) from e

    if count < 0:
        raise InvalidRetryCountError(raw_value)
    return count

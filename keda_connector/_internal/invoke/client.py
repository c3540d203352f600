"""Retrying function invocation client for KEDA connectors."""

import logging
from collections.abc import Mapping, Sequence
from types import TracebackType

import httpx

from keda_connector._internal.http import create_http_client
from keda_connector._internal.invoke.models import (
    MESSAGE_NO_RESPONSE,
    MESSAGE_REQUEST_FAILED,
    STATUS_NO_RESPONSE,
    ConnectorMetadata,
    ErrorResponse,
)
from keda_connector.exceptions import (
    AllAttemptsExhaustedError,
    NonSuccessStatusError,
    RequestConstructionError,
)

_log = logging.getLogger(__name__)

Headers = Mapping[str, Sequence[str]] | httpx.Headers
HeaderItems = list[tuple[str | bytes, bytes]]


class InvocationClient:
    """Sends connector messages to a function endpoint with immediate retries.

    Each call to `handle_http_request` is independent: the client keeps no
    state between calls other than the underlying HTTP client, so one instance
    can be shared across threads.
    """

    def __init__(
        self,
        *,
        http_client: httpx.Client | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the invocation client.

        Args:
            http_client: Client used to send requests. If omitted, one is
                created with `create_http_client()` and closed by `close()`.
            logger: Logger for attempt failures and final errors. Defaults to
                this module's logger.
        """
        self._owns_client = http_client is None
        self._http_client = http_client or create_http_client()
        self._logger = logger or _log

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "InvocationClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def handle_http_request(
        self,
        message: str,
        headers: Headers,
        metadata: ConnectorMetadata,
    ) -> httpx.Response:
        """POST a message to the function endpoint, retrying on failure.

        Up to `metadata.max_retries + 1` attempts are made back to back. The
        first attempt with a 2xx status wins. Transport failures and non-2xx
        responses both move on to the next attempt.

        On success the response is returned with its body unread; the caller
        owns it and must close it.

        Args:
            message: Raw request body.
            headers: Multi-valued headers; every value of every key is sent.
            metadata: Connector metadata providing endpoint, retries and source.

        Returns:
            The successful httpx.Response.

        Raises:
            RequestConstructionError: The request could not be built.
            AllAttemptsExhaustedError: The final attempt got no response.
            NonSuccessStatusError: The final attempt got a failure status.
        """
        header_items = _header_items(headers)

        response: httpx.Response | None = None
        for attempt in range(metadata.max_retries + 1):
            request = self._build_request(message, header_items, metadata)
            if response is not None:
                response.close()
            response = self._send(request, metadata, attempt)
            if response is not None and 200 <= response.status_code < 300:
                return response

        if response is None:
            error = ErrorResponse(
                status=STATUS_NO_RESPONSE,
                message=MESSAGE_NO_RESPONSE,
                http_endpoint=metadata.http_endpoint,
                source=metadata.source_name,
                request=message,
            )
            self._logger.info(error.to_json())
            raise AllAttemptsExhaustedError(error)

        # Status 300 passes this check although the loop above did not accept it.
        if response.status_code < 200 or response.status_code > 300:
            body = self._read_body(response, metadata)

            error = ErrorResponse(
                status=response.status_code,
                message=MESSAGE_REQUEST_FAILED,
                http_endpoint=metadata.http_endpoint,
                source=metadata.source_name,
                body=body,
                request=message,
            )
            self._logger.info(error.to_json())
            raise NonSuccessStatusError(error)

        return response

    def _build_request(
        self,
        message: str,
        header_items: HeaderItems,
        metadata: ConnectorMetadata,
    ) -> httpx.Request:
        """Build the POST request for one attempt."""
        try:
            return self._http_client.build_request(
                "POST",
                metadata.http_endpoint,
                content=message,
                headers=header_items,
            )
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            raise RequestConstructionError(
                "failed to create HTTP request to invoke function. "
                f"http_endpoint: {metadata.http_endpoint}, source: {metadata.source_name}: {e}",
                http_endpoint=metadata.http_endpoint,
                source=metadata.source_name,
            ) from e

    def _send(
        self,
        request: httpx.Request,
        metadata: ConnectorMetadata,
        attempt: int,
    ) -> httpx.Response | None:
        """Send one attempt. Returns None when no response was obtained."""
        try:
            return self._http_client.send(request, stream=True)
        except httpx.HTTPError as e:
            self._logger.error(
                "sending function invocation request failed",
                extra={
                    "error": str(e),
                    "http_endpoint": metadata.http_endpoint,
                    "source": metadata.source_name,
                    "attempt": attempt,
                },
            )
            return None

    def _read_body(self, response: httpx.Response, metadata: ConnectorMetadata) -> str:
        """Read and close a failed response, keeping whatever arrived before a read error."""
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_bytes():
                chunks.append(chunk)
        except httpx.HTTPError as e:
            self._logger.error(
                "reading function response body failed",
                extra={
                    "error": str(e),
                    "http_endpoint": metadata.http_endpoint,
                    "source": metadata.source_name,
                },
            )
        finally:
            response.close()
        return b"".join(chunks).decode(response.charset_encoding or "utf-8", errors="replace")


def _header_items(headers: Headers) -> HeaderItems:
    """Flatten a multi-valued header mapping into (name, value) pairs.

    Values are sent as UTF-8 bytes so non-ASCII values go out unchanged.
    """
    if isinstance(headers, httpx.Headers):
        return list(headers.raw)
    items: HeaderItems = []
    for key, values in headers.items():
        if isinstance(values, str):
            values = [values]
        for value in values:
            items.append((key, value.encode("utf-8")))
    return items


def handle_http_request(
    message: str,
    headers: Headers,
    metadata: ConnectorMetadata,
    *,
    logger: logging.Logger | None = None,
) -> httpx.Response:
    """POST a message to the function endpoint using a short-lived client.

    The returned response is fully read, so it stays usable after the
    underlying client is closed. See `InvocationClient.handle_http_request`.
    """
    with InvocationClient(logger=logger) as client:
        response = client.handle_http_request(message, headers, metadata)
        try:
            response.read()
        finally:
            response.close()
        return response

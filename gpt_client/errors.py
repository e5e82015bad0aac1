"""
Error taxonomy and normalization.

Every public call surfaces failures as exactly one GPTClientError subclass:

  Kind                    Raised for
  ──────────────────────  ──────────────────────────────────────────────
  authentication          HTTP 401
  transport               connect / timeout / TLS / protocol failures
  invalid_response_shape  body received but not of the expected shape
  server_reported         any other non-2xx status or in-stream error
  unknown                 anything else (cause preserved)

normalize_error() is the only place raw failures are classified.
Facades call it once per failure and raise the result `from` the cause.
"""

import json
import logging
from enum import Enum
from typing import Optional

import httpx
from pydantic import ValidationError

from .decoding import StreamEventError
from .types import APIErrorEnvelope

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    TRANSPORT = "transport"
    INVALID_RESPONSE_SHAPE = "invalid_response_shape"
    SERVER_REPORTED = "server_reported"
    UNKNOWN = "unknown"


class GPTClientError(Exception):
    """
    Base class of every error raised by the client.

    Attributes:
        kind:        The ErrorKind of this failure
        message:     Human-readable description (server message when known)
        status_code: HTTP status, if a response was received
        cause:       The underlying raw exception
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r})"
        )


class AuthenticationFailure(GPTClientError):
    """The server rejected the credentials."""
    kind = ErrorKind.AUTHENTICATION


class TransportFailure(GPTClientError):
    """No response was obtained (connectivity, timeout, TLS)."""
    kind = ErrorKind.TRANSPORT


class InvalidResponseShape(GPTClientError):
    """A response was received but did not decode into the expected model."""
    kind = ErrorKind.INVALID_RESPONSE_SHAPE


class ServerReportedFailure(GPTClientError):
    """The server answered with an error; `message` is the server's."""
    kind = ErrorKind.SERVER_REPORTED


class UnknownFailure(GPTClientError):
    """Unclassified failure; see `cause`."""
    kind = ErrorKind.UNKNOWN


def _server_message(response: httpx.Response) -> str:
    """Server error message, falling back to the raw body or reason phrase."""
    try:
        return APIErrorEnvelope.model_validate_json(response.content).error.message
    except ValidationError:
        text = response.text.strip()
        return text or response.reason_phrase or f"HTTP {response.status_code}"


def _classify(exc: Exception) -> GPTClientError:
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        if response.status_code == 401:
            return AuthenticationFailure(
                _server_message(response), status_code=401, cause=exc
            )
        return ServerReportedFailure(
            _server_message(response), status_code=response.status_code, cause=exc
        )

    if isinstance(exc, StreamEventError):
        return ServerReportedFailure(exc.payload.error.message, cause=exc)

    # DecodingError is a RequestError raised after the response arrived
    if isinstance(exc, httpx.DecodingError):
        return InvalidResponseShape(f"undecodable response body: {exc}", cause=exc)

    if isinstance(exc, httpx.RequestError):
        return TransportFailure(f"{type(exc).__name__}: {exc}", cause=exc)

    if isinstance(exc, (ValidationError, json.JSONDecodeError)):
        return InvalidResponseShape(f"unexpected response shape: {exc}", cause=exc)

    return UnknownFailure(f"{type(exc).__name__}: {exc}", cause=exc)


def normalize_error(exc: Exception) -> GPTClientError:
    """
    Map any raw failure to exactly one taxonomy error.

    Total: every exception maps to some kind, UnknownFailure as fallback.
    """
    error = _classify(exc)
    logger.warning(
        "request failed",
        extra={
            "error_kind": error.kind.value,
            "status_code": error.status_code,
            "error_type": type(exc).__name__,
        },
    )
    return error

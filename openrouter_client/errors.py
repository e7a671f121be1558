"""
Error taxonomy for the OpenRouter client.

Every error raised by the request pipeline derives from OpenRouterError, so
callers can catch the whole family or branch on the concrete type:

- SerializationError / RequestConstructionError: the request was malformed
  on our side; never retried.
- TransportError: network-level failure; always retryable.
- ApiError / UnclassifiedHTTPError: the service answered with a failure.
- DecodeError: a 200 body did not fit the requested shape; never retried.
- RetryExhaustedError: all attempts spent, wraps the last failure.
- CancellationError: the caller cancelled or the deadline passed.
"""

from typing import Any, Dict, Optional


class OpenRouterError(Exception):
    """Base class for all client errors."""


class ConfigError(OpenRouterError, ValueError):
    pass


class SerializationError(OpenRouterError):
    def __init__(self, payload_type: str, reason: str):
        super().__init__(f"Failed to serialize {payload_type} payload: {reason}")
        self.payload_type = payload_type
        self.reason = reason


class RequestConstructionError(OpenRouterError):
    def __init__(self, method: str, url: str, reason: str):
        super().__init__(f"Invalid request {method} {url}: {reason}")
        self.method = method
        self.url = url
        self.reason = reason


class TransportError(OpenRouterError):
    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ApiError(OpenRouterError):
    """
    Structured error reported by the remote service.

    status_code always comes from the HTTP response, never from the body.
    A 200 response carrying an embedded error object yields status_code=200.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Any = None,
        type: Optional[str] = None,
        param: Any = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"[{status_code}] API error: {message}" if status_code is not None else f"API error: {message}")
        self.message = message
        self.status_code = status_code
        self.code = code
        self.type = type
        self.param = param
        self.metadata = metadata or {}


class UnclassifiedHTTPError(OpenRouterError):
    """Non-200 response whose body carried no decodable error object."""

    def __init__(self, status_code: int, cause: Optional[Exception] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"HTTP {status_code} with no error body{detail}")
        self.status_code = status_code
        self.cause = cause


class DecodeError(OpenRouterError):
    def __init__(self, target: str, length: int, prefix: bytes, reason: str = ""):
        message = f"Failed to decode {length}-byte response into {target}: prefix={prefix!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.target = target
        self.length = length
        self.prefix = prefix
        self.reason = reason


class RetryExhaustedError(OpenRouterError):
    def __init__(self, attempts: int, last_error: Exception):
        super().__init__(f"All {attempts} attempts failed, last error: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class CancellationError(OpenRouterError):
    def __init__(self, reason: str = "cancelled"):
        super().__init__(f"Call aborted: {reason}")
        self.reason = reason


class UnsupportedModelError(OpenRouterError):
    def __init__(self, model: str):
        super().__init__(f"Model is not supported with this method: {model!r}")
        self.model = model


class StreamNotSupportedError(OpenRouterError):
    def __init__(self):
        super().__init__(
            "Streaming is not supported with this method, build a stream request instead"
        )

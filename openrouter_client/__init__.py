"""
HTTP client for OpenRouter-compatible chat completion APIs.

Provides:
- OpenRouterClient: Authenticated calls with transient-only retry
- ClientConfig: Immutable connection settings (env-loadable)
- CallContext: Cancellation and deadlines for one logical call
- Error taxonomy rooted at OpenRouterError
"""

from openrouter_client.client import OpenRouterClient
from openrouter_client.config import ClientConfig, default_config
from openrouter_client.context import CallContext
from openrouter_client.errors import (
    OpenRouterError,
    ConfigError,
    SerializationError,
    RequestConstructionError,
    TransportError,
    ApiError,
    UnclassifiedHTTPError,
    DecodeError,
    RetryExhaustedError,
    CancellationError,
    UnsupportedModelError,
    StreamNotSupportedError,
)
from openrouter_client.models import resolve_model, supports_model
from openrouter_client.schemas import (
    ChatMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
)

__all__ = [
    "OpenRouterClient",
    "ClientConfig",
    "default_config",
    "CallContext",
    "OpenRouterError",
    "ConfigError",
    "SerializationError",
    "RequestConstructionError",
    "TransportError",
    "ApiError",
    "UnclassifiedHTTPError",
    "DecodeError",
    "RetryExhaustedError",
    "CancellationError",
    "UnsupportedModelError",
    "StreamNotSupportedError",
    "resolve_model",
    "supports_model",
    "ChatMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
]

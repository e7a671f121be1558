#!/usr/bin/env python3
"""
OpenRouter API client.

Orchestrates request building, headers, retry, transport and decoding.

Simplified architecture:
- No streaming response parsing (stream requests can be built, not consumed)
- No response caching or cross-call rate limiting
- Clean composition of focused components
"""

import random
from typing import Any, Callable, Optional

from .api import (
    HeaderPolicy,
    OpenRouterTransport,
    OutgoingRequest,
    RequestBuilder,
    ResponseClassifier,
    ResponseDecoder,
    RetryPolicy,
)
from .config import ClientConfig
from .context import CallContext
from .errors import StreamNotSupportedError, UnsupportedModelError
from .logger import ClientLogger, create_logger
from .models import resolve_model, supports_model as default_supports_model
from .schemas import ChatCompletionRequest, ChatCompletionResponse

CHAT_COMPLETIONS_PATH = "/chat/completions"


class OpenRouterClient:
    """
    Executes OpenRouter API calls with retry, error classification and decoding.

    Responsibilities:
    - Build and authenticate requests
    - Coordinate transport + retry + decoding layers
    - Validate chat requests (model support, no streaming)

    Components:
    - RequestBuilder: URL joining and JSON body encoding
    - HeaderPolicy: content negotiation, attribution and bearer auth
    - RetryPolicy: exponential backoff with jitter, transient-only
    - OpenRouterTransport: one HTTP attempt, 200-only success
    - ResponseDecoder: raw text or typed result

    One client may be shared across threads; each call owns its request
    and retry state, and the config is read-only.
    """

    def __init__(
        self,
        config: ClientConfig,
        supports_model: Optional[Callable[[str], bool]] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[ClientLogger] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Immutable connection settings (key, base URL, session, retry knobs)
            supports_model: Predicate for accepted model ids (default: models.supports_model)
            rng: Random source for backoff jitter (inject a seeded one in tests)
            logger: Logger for client-level events
        """
        self.config = config
        self.supports_model = supports_model or default_supports_model
        self.logger = logger or create_logger("client")

        self.builder = RequestBuilder(config.base_url)
        self.headers = HeaderPolicy(config)
        self.transport = OpenRouterTransport(config, classifier=ResponseClassifier())
        self.retry = RetryPolicy(
            max_retries=config.max_retries,
            initial_backoff=config.initial_backoff,
            max_backoff=config.max_backoff,
            rng=rng,
        )
        self.decoder = ResponseDecoder()

    @classmethod
    def from_env(cls, **overrides) -> "OpenRouterClient":
        return cls(ClientConfig.from_env(**overrides))

    def send(
        self,
        method: str,
        suffix: str,
        payload: Any = None,
        result_type: Any = dict,
        context: Optional[CallContext] = None,
    ) -> Any:
        """
        Run one logical call through the full pipeline.

        Args:
            method: HTTP method
            suffix: Path appended to the base URL (e.g. "/chat/completions")
            payload: JSON-serializable body, pydantic model, or None
            result_type: str for raw text, None to discard, or any pydantic-validatable type
            context: Optional cancellation/deadline handle

        Returns:
            The decoded response body

        Raises:
            SerializationError, RequestConstructionError: before any network I/O
            ApiError, UnclassifiedHTTPError: non-transient service failures
            RetryExhaustedError: transient failures on every attempt
            CancellationError: context cancelled or deadline passed
            DecodeError: 200 body did not match result_type
        """
        request = self.builder.build(method, self.builder.full_url(suffix), payload)
        request = self.headers.apply(request)

        body = self.retry.execute_with_retry(
            lambda attempt_request: self.transport.send(attempt_request, context),
            request,
            context,
        )

        return self.decoder.decode(body, result_type)

    def create_chat_completion(
        self,
        request: ChatCompletionRequest,
        context: Optional[CallContext] = None,
    ) -> ChatCompletionResponse:
        if request.stream:
            raise StreamNotSupportedError()

        model = resolve_model(request.model)
        if not self.supports_model(model):
            raise UnsupportedModelError(request.model)
        request = request.model_copy(update={"model": model})

        response = self.send(
            "POST",
            CHAT_COMPLETIONS_PATH,
            request,
            result_type=ChatCompletionResponse,
            context=context,
        )

        self.logger.debug(
            f"Chat completion: id={response.id}, choices={len(response.choices)}",
            model=response.model or model,
        )
        return response

    def build_stream_request(self, suffix: str, payload: Any, method: str = "POST") -> OutgoingRequest:
        """Build an authenticated event-stream request; consuming the stream is up to the caller."""
        request = self.builder.build(method, self.builder.full_url(suffix), payload)
        return self.headers.apply(request, stream=True)

    def close(self):
        self.config.session.close()

    def __enter__(self) -> "OpenRouterClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

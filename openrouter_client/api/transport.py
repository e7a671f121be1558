#!/usr/bin/env python3
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests

from ..config import ClientConfig
from ..context import CallContext
from ..errors import CancellationError, TransportError
from ..logger import ClientLogger, create_logger
from .request_builder import OutgoingRequest
from .response_parser import ResponseClassifier

# How often a waiting call checks its context for cancel()
CANCEL_POLL_SECONDS = 0.05


class OpenRouterTransport:
    """Sends exactly one request attempt and enforces the success boundary."""

    def __init__(
        self,
        config: ClientConfig,
        classifier: Optional[ResponseClassifier] = None,
        logger: Optional[ClientLogger] = None,
    ):
        self.config = config
        self.session = config.session
        self.classifier = classifier or ResponseClassifier()
        self.logger = logger or create_logger("transport")

    def send(self, request: OutgoingRequest, context: Optional[CallContext] = None) -> bytes:
        """
        Perform one attempt and return the raw 200 body.

        Raises:
            TransportError: connection/timeout failure below HTTP
            ApiError: structured error, including one embedded in a 200 body
            UnclassifiedHTTPError: non-200 without a decodable error body
            CancellationError: the context finished before or during the wait
        """
        if context is not None:
            context.raise_if_done()

        timeout = self._attempt_timeout(context)

        self.logger.debug(
            "OpenRouter API request",
            method=request.method,
            url=request.url,
            body_bytes=len(request.body) if request.body is not None else 0,
        )

        try:
            if context is None:
                response = self._request(request, timeout)
            else:
                response = self._request_cancellable(request, timeout, context)
        except requests.exceptions.RequestException as e:
            if context is not None and context.done:
                raise CancellationError(context.reason()) from e
            raise TransportError(f"Failed to send request: {e}", url=request.url) from e

        try:
            # Single read; both classification and decoding use these bytes
            body = response.content or b""
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Failed to read response body: {e}", url=request.url) from e
        finally:
            response.close()

        if context is not None and context.cancelled:
            raise CancellationError(context.reason())

        self.logger.debug(
            "OpenRouter API response",
            url=request.url,
            status_code=response.status_code,
            body_bytes=len(body),
        )

        if response.status_code != 200:
            raise self.classifier.classify_failure(response.status_code, body)

        embedded = self.classifier.embedded_error(response.status_code, body)
        if embedded is not None:
            raise embedded

        return body

    def _request(self, request: OutgoingRequest, timeout: float) -> requests.Response:
        return self.session.request(
            request.method,
            request.url,
            headers=dict(request.headers),
            data=request.body_stream(),
            timeout=timeout,
        )

    def _request_cancellable(
        self,
        request: OutgoingRequest,
        timeout: float,
        context: CallContext,
    ) -> requests.Response:
        """
        Run the blocking request on a worker thread and wait on it while
        watching the context.

        On cancel() the call returns immediately with CancellationError. The
        worker is abandoned; whatever response it eventually gets is closed.
        """
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="openrouter-transport")
        future = executor.submit(self._request, request, timeout)
        executor.shutdown(wait=False)

        while True:
            if context.done:
                future.add_done_callback(_close_abandoned)
                self.logger.debug(
                    "Abandoning in-flight request",
                    method=request.method,
                    url=request.url,
                    error=context.reason(),
                )
                raise CancellationError(context.reason())
            if future.done():
                # Re-raises the worker's RequestException on this thread
                return future.result()
            context.wait(CANCEL_POLL_SECONDS)

    def _attempt_timeout(self, context: Optional[CallContext]) -> float:
        timeout = self.config.request_timeout
        if context is not None:
            remaining = context.remaining()
            if remaining is not None:
                if remaining <= 0:
                    # Deadline passed after the pre-send check
                    raise CancellationError(context.reason())
                timeout = min(timeout, remaining)
        return timeout


def _close_abandoned(future):
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()

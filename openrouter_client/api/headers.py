#!/usr/bin/env python3
from requests.structures import CaseInsensitiveDict

from ..config import ClientConfig
from .request_builder import OutgoingRequest

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
JSON_ACCEPT = "application/json; charset=utf-8"
STREAM_CONTENT_TYPE = "application/json"
STREAM_ACCEPT = "text/event-stream"


class HeaderPolicy:
    """
    Applies the fixed header set to outgoing requests.

    apply() never mutates its input and is idempotent: applying it to its
    own output yields the same headers. A caller-set Content-Type (e.g.
    multipart/form-data for uploads) is preserved.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def apply(self, request: OutgoingRequest, stream: bool = False) -> OutgoingRequest:
        headers = CaseInsensitiveDict(request.headers)

        if stream:
            if not headers.get("Content-Type"):
                headers["Content-Type"] = STREAM_CONTENT_TYPE
            headers["Accept"] = STREAM_ACCEPT
            headers["Cache-Control"] = "no-cache"
            headers["Connection"] = "keep-alive"
        else:
            if not headers.get("Content-Type"):
                headers["Content-Type"] = JSON_CONTENT_TYPE
            headers["Accept"] = JSON_ACCEPT

        headers["HTTP-Referer"] = self.config.http_referer
        headers["X-Title"] = self.config.x_title
        headers["Authorization"] = f"Bearer {self.config.api_key}"

        return OutgoingRequest(
            method=request.method,
            url=request.url,
            headers=headers,
            body=request.body,
        )

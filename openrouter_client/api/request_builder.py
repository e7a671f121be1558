#!/usr/bin/env python3
import io
import json
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError
from requests.structures import CaseInsensitiveDict

from ..errors import RequestConstructionError, SerializationError

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


@dataclass(frozen=True)
class OutgoingRequest:
    """
    Transport-level request for one logical call.

    The body is an immutable byte string. Every attempt reads it through its
    own body_stream() view, so a drained stream from a failed attempt can
    never leak into a retry.
    """
    method: str
    url: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Optional[bytes] = None

    def body_stream(self) -> Optional[io.BytesIO]:
        if self.body is None:
            return None
        return io.BytesIO(self.body)

    def clone(self) -> "OutgoingRequest":
        return OutgoingRequest(
            method=self.method,
            url=self.url,
            headers=CaseInsensitiveDict(self.headers),
            body=self.body,
        )


class RequestBuilder:
    def __init__(self, base_url: str = ""):
        self.base_url = base_url

    def full_url(self, suffix: str) -> str:
        return f"{self.base_url}{suffix}"

    def build(self, method: str, url: str, payload: Any = None) -> OutgoingRequest:
        method = (method or "").upper()
        if method not in HTTP_METHODS:
            raise RequestConstructionError(method, url, "unsupported HTTP method")

        # Let requests apply its own URL rules (missing scheme, bad host, ...)
        try:
            requests.Request(method, url).prepare()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise RequestConstructionError(method, url, str(e)) from e
        if not url.lower().startswith(("http://", "https://")):
            raise RequestConstructionError(method, url, "URL must be absolute http(s)")

        body = None
        if payload is not None:
            body = serialize_payload(payload)

        return OutgoingRequest(method=method, url=url, body=body)


def serialize_payload(payload: Any) -> bytes:
    """Encode a payload as compact JSON bytes, rejecting NaN/Infinity."""
    payload_type = type(payload).__name__
    try:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json", exclude_none=True, by_alias=True)
        return json.dumps(payload, separators=(",", ":"), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise SerializationError(payload_type, str(e)) from e

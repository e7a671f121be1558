import json
import logging
from typing import Any, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from ..errors import ApiError, DecodeError, UnclassifiedHTTPError

DECODE_PREFIX_BYTES = 64


class ResponseClassifier:
    """
    Turns response bodies into error values.

    OpenRouter reports failures as {"error": {"message": ..., "code": ...}},
    both on non-200 responses and, occasionally, inside 200 envelopes.
    Missing or malformed error bodies are expected and resolve to
    UnclassifiedHTTPError; classification never raises.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_failure(self, status_code: int, body: bytes) -> Exception:
        try:
            data = json.loads(body) if body else None
        except (ValueError, RecursionError) as e:
            self.logger.debug(
                f"Undecodable error body: status={status_code}, "
                f"body_bytes={len(body)}, error={e}"
            )
            return UnclassifiedHTTPError(status_code, cause=e)

        error = self._error_object(data)
        if error is None:
            return UnclassifiedHTTPError(status_code)

        return self._to_api_error(error, status_code)

    def embedded_error(self, status_code: int, body: bytes) -> Optional[ApiError]:
        """Return the logical error carried by a 200 body, if any."""
        try:
            data = json.loads(body)
        except (ValueError, RecursionError):
            # Not JSON at all: left for the decoder to judge
            return None

        error = self._error_object(data)
        if error is None or not error.get("message"):
            return None

        return self._to_api_error(error, status_code)

    @staticmethod
    def _error_object(data: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(data, dict):
            return None
        error = data.get("error")
        if isinstance(error, dict):
            return error
        if isinstance(error, str) and error:
            return {"message": error}
        return None

    @staticmethod
    def _to_api_error(error: Dict[str, Any], status_code: int) -> ApiError:
        message = error.get("message") or f"HTTP {status_code}"
        metadata = error.get("metadata")
        return ApiError(
            message=str(message),
            status_code=status_code,
            code=error.get("code"),
            type=error.get("type"),
            param=error.get("param"),
            metadata=metadata if isinstance(metadata, dict) else None,
        )


class ResponseDecoder:
    def decode(self, body: bytes, target: Any = dict) -> Any:
        if target is None:
            return None
        if target is bytes:
            return body
        if target is str:
            try:
                return body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise self._decode_error(body, target, str(e)) from e

        try:
            return TypeAdapter(target).validate_json(body)
        except ValidationError as e:
            raise self._decode_error(body, target, f"{e.error_count()} validation error(s)") from e

    @staticmethod
    def _decode_error(body: bytes, target: Any, reason: str) -> DecodeError:
        target_name = getattr(target, "__name__", None) or repr(target)
        return DecodeError(
            target=target_name,
            length=len(body),
            prefix=body[:DECODE_PREFIX_BYTES],
            reason=reason,
        )

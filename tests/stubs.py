"""
Stub HTTP plumbing for client tests.

HTTP is stubbed at the requests adapter layer: the real Session, request
preparation and response handling all run, only the socket is replaced.
"""

import json

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

BASE_URL = "https://openrouter.test/api/v1"


def make_response(request, status_code, content=b"", headers=None):
    """Build a fully-read requests.Response for a prepared request."""
    if not isinstance(content, bytes):
        content = json.dumps(content).encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response._content_consumed = True
    response.headers = CaseInsensitiveDict(headers or {"Content-Type": "application/json"})
    response.encoding = "utf-8"
    response.url = request.url
    response.request = request
    return response


class StubAdapter(BaseAdapter):
    """
    Replays scripted outcomes, one per attempt.

    Each outcome is (status_code, content), an exception instance to raise,
    or a callable (prepared_request, body_bytes) -> outcome. The last
    outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes):
        super().__init__()
        self.outcomes = list(outcomes)
        self.requests = []
        self.bodies = []
        self.timeouts = []

    @property
    def calls(self):
        return len(self.requests)

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        body = request.body
        if hasattr(body, "read"):
            body = body.read()
        elif isinstance(body, str):
            body = body.encode("utf-8")

        self.requests.append(request)
        self.bodies.append(body)
        self.timeouts.append(timeout)

        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if callable(outcome):
            outcome = outcome(request, body)
        if isinstance(outcome, BaseException):
            raise outcome

        status_code, content = outcome
        return make_response(request, status_code, content)

    def close(self):
        pass


def echo(request, body):
    """Outcome that answers 200 with the request body."""
    return 200, body or b""


def chat_response(text="Hello!", model="openai/gpt-4o"):
    return {
        "id": "gen-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


class FixedRandom:
    """Jitter source pinned to a constant in [0, 1)."""

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value

"""
OpenRouter request pipeline components.

Clean separation of concerns:
- request_builder.py: Request construction and payload serialization
- headers.py: Required header set
- transport.py: One HTTP attempt
- response_parser.py: Error classification and body decoding
- retry_policy.py: Retry logic
"""

from .request_builder import OutgoingRequest, RequestBuilder
from .headers import HeaderPolicy
from .transport import OpenRouterTransport
from .response_parser import ResponseClassifier, ResponseDecoder
from .retry_policy import RetryPolicy, is_transient

__all__ = [
    'OutgoingRequest',
    'RequestBuilder',
    'HeaderPolicy',
    'OpenRouterTransport',
    'ResponseClassifier',
    'ResponseDecoder',
    'RetryPolicy',
    'is_transient',
]

"""
HTTP Layer

Transport, response classification and retry policy shared by all resources.
"""
from earningsfeed.http.transport import Transport, Request, RawResponse
from earningsfeed.http.classifier import classify
from earningsfeed.http.retry import RetryPolicy, with_retry

__all__ = [
    "Transport",
    "Request",
    "RawResponse",
    "classify",
    "RetryPolicy",
    "with_retry",
]

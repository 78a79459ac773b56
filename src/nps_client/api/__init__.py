"""Generic NPS REST API client package.

Provides request construction with composable options, dispatch through
an injectable ``httpx.Client``, response validation against the API's
error codes and rate-limit tracking.

Exports:
    Client: HTTP client with authentication and error handling.
    errors: Module containing the client's exception hierarchy.
    with_json_body, with_query, with_options: Request options.
    QueryOptions: Base class for declarative query parameter sets.
    RateLimit: Snapshot of the API's rate-limit counters.
    DEFAULT_BASE_URL: Base URL of the NPS API.
    DEFAULT_TIMEOUT: Default HTTP request timeout.
"""

from . import errors
from .client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Client
from .options import (
    Option,
    PendingRequest,
    QueryOptions,
    with_json_body,
    with_options,
    with_query,
)
from .ratelimit import RateLimit

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "Client",
    "Option",
    "PendingRequest",
    "QueryOptions",
    "RateLimit",
    "errors",
    "with_json_body",
    "with_options",
    "with_query",
]

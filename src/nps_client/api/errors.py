"""Error taxonomy for the NPS API client.

Every error raised by the client derives from :class:`NPSError`. Errors
produced from an HTTP response derive from :class:`ResponseError` and
carry the status code and status line so callers never need to inspect
the raw response again.
"""

import httpx
import pydantic


class NPSError(Exception):
    """Base class for all NPS client errors."""


class MissingTokenError(NPSError, ValueError):
    """Raised when a client is constructed without an API key."""


class URLJoinError(NPSError):
    """Raised when a request path cannot be joined onto the base URL."""


class OptionError(NPSError):
    """Raised when a request option fails while building a request."""


class RequestBodyError(OptionError):
    """Raised when a request body cannot be serialized to JSON."""


class QueryEncodingError(OptionError):
    """Raised when query options cannot be encoded as URL parameters."""


class TransportError(NPSError):
    """Raised when the HTTP transport fails before a response is received."""


class DecodeError(NPSError):
    """Raised when a successful response body does not fit the target type."""


class ResponseError(NPSError):
    """Base class for errors derived from an HTTP error response."""

    def __init__(self, message: str, status_code: int, status: str):
        super().__init__(message)
        self.status_code = status_code
        self.status = status


class RateLimitExceededError(ResponseError):
    """The API key is temporarily blocked (429)."""


class UnauthorizedError(ResponseError):
    """The API key is not authorized for the endpoint (401)."""


class BadRequestError(ResponseError):
    """The API did not understand the request (400)."""


class NotFoundError(ResponseError):
    """The API endpoint does not exist (404)."""


class APIError(ResponseError):
    """Structured error returned by the API in its error envelope."""

    def __init__(self, code: str, message: str, status_code: int, status: str):
        super().__init__(f"Code: {code} Message: {message}", status_code, status)
        self.code = code
        self.message = message


class RawAPIError(ResponseError):
    """Error response whose body is not the API's error envelope."""

    def __init__(self, body: str, status_code: int, status: str):
        super().__init__(f"{status}: {body}", status_code, status)
        self.body = body


class UnreadableResponseError(ResponseError):
    """Error response whose body could not be read at all."""


class _ErrorDetail(pydantic.BaseModel):
    code: str = ""
    message: str = ""


class _ErrorEnvelope(pydantic.BaseModel):
    error: _ErrorDetail


def status_line(response: httpx.Response) -> str:
    """Return the HTTP status line of a response, e.g. ``404 Not Found``."""
    return f"{response.status_code} {response.reason_phrase}".strip()


def decode_error_response(response: httpx.Response) -> ResponseError:
    """Turn a failed response into the most specific error available.

    The body is read once. If it holds the API's ``{"error": {...}}``
    envelope an :class:`APIError` is returned, otherwise the raw text is
    wrapped in a :class:`RawAPIError`. A body that cannot be read at all
    yields an :class:`UnreadableResponseError` chained to the read failure.

    A JSON body without an ``error`` object, such as ``{}``, is not treated
    as an envelope with empty code and message: it is reported as a
    :class:`RawAPIError` carrying the body text.

    Args:
        response: Response with a status code of 400 or above.

    Returns:
        The error to raise. This function never raises it itself.
    """
    status = status_line(response)
    try:
        body = response.read()
    except (httpx.HTTPError, httpx.StreamError) as exc:
        err = UnreadableResponseError(
            f"{status}: unable to decode error response: {exc}",
            response.status_code,
            status,
        )
        err.__cause__ = exc
        return err

    try:
        envelope = _ErrorEnvelope.model_validate_json(body)
    except pydantic.ValidationError:
        return RawAPIError(response.text, response.status_code, status)

    return APIError(
        envelope.error.code,
        envelope.error.message,
        response.status_code,
        status,
    )

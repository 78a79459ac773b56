"""Generic NPS REST API client.

Builds authenticated requests, sends them through an injectable
``httpx.Client``, validates every response against the API's known error
codes and decodes successful bodies with Pydantic.
"""

import posixpath
import time
from urllib.parse import quote
from typing import TypeVar

import httpx
import pydantic
import structlog

from .errors import (
    BadRequestError,
    DecodeError,
    MissingTokenError,
    NotFoundError,
    RateLimitExceededError,
    TransportError,
    UnauthorizedError,
    URLJoinError,
    decode_error_response,
    status_line,
)
from .options import Option, PendingRequest
from .ratelimit import RateLimit, RateLimitTracker

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://developer.nps.gov/api/v1/"

DEFAULT_TIMEOUT = 30.0

HEADER_API_KEY = "X-Api-Key"

ACCEPT_JSON = "application/json; charset=utf-8"

T = TypeVar("T")


def join_path(base_url: httpx.URL, path: str) -> httpx.URL:
    """Append ``path`` to the path of ``base_url``.

    Leading slashes in ``path`` do not reset the base path, dot segments
    are cleaned and a trailing slash on ``path`` is kept. Characters that
    are not allowed in a URL path are percent-escaped.

    Raises:
        URLJoinError: If the joined URL is not valid.
    """
    joined = posixpath.normpath(posixpath.join(base_url.path, path.lstrip("/")))
    if path.endswith("/") and not joined.endswith("/"):
        joined += "/"
    # escape "?" and "#" so they stay in the path; existing escapes are kept
    joined = quote(joined, safe="/%:@!$&'()*+,;=")
    try:
        return base_url.copy_with(path=joined)
    except (httpx.InvalidURL, TypeError) as exc:
        msg = f"unable to join path {path!r} onto {base_url}: {exc}"
        raise URLJoinError(msg) from exc


class Client:
    """HTTP client for the NPS REST API.

    Holds the API token, the base URL and the transport. Every response is
    validated before it reaches the caller, and the rate-limit counters the
    API reports are recorded even when the response is an error.

    Safe to share between threads: the only mutable state is the rate-limit
    snapshot, which is guarded by a lock. Can be used as a context manager.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the API client.

        Args:
            token: NPS API key sent with every request.
            base_url: Base URL that request paths are joined onto.
            http_client: Transport to send requests with. A new
                ``httpx.Client`` is created and owned when omitted.
            timeout: Default timeout in seconds for an owned transport.

        Raises:
            MissingTokenError: If token is empty.
            URLJoinError: If base_url is not a valid URL.
        """
        if not token:
            msg = "api key token was empty"
            raise MissingTokenError(msg)

        try:
            self.base_url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            msg = f"invalid base url {base_url!r}: {exc}"
            raise URLJoinError(msg) from exc

        self._token = token
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self._rate_limit = RateLimitTracker()

    def __repr__(self) -> str:
        return f"Client(url={str(self.base_url)!r})"

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and release the transport."""
        self.close()

    def close(self):
        """Close the transport if this client created it."""
        if self._owns_http_client and not self._http.is_closed:
            self._http.close()

    @property
    def rate_limit(self) -> RateLimit:
        """The rate-limit counters reported by the most recent response."""
        return self._rate_limit.snapshot()

    def new_request(
        self,
        method: str,
        path: str,
        *options: Option,
        timeout: float | None = None,
    ) -> httpx.Request:
        """Build an authenticated request for ``path``.

        Args:
            method: HTTP method.
            path: Path relative to the base URL (e.g. ``"parks"``).
            *options: Options applied to the request in order.
            timeout: Optional timeout in seconds governing the send of this
                request. The transport default applies when omitted.

        Returns:
            The request, ready for :meth:`send`.

        Raises:
            URLJoinError: If path cannot be joined onto the base URL.
            OptionError: The error of the first option that fails.
        """
        pending = PendingRequest(method=method.upper(), url=join_path(self.base_url, path))
        pending.headers["Accept"] = ACCEPT_JSON
        pending.headers[HEADER_API_KEY] = self._token
        if timeout is not None:
            pending.extensions["timeout"] = httpx.Timeout(timeout).as_dict()

        for option in options:
            option(pending)

        return pending.build()

    def validate_response(self, response: httpx.Response) -> None:
        """Record rate limits and raise if the API returned an error.

        The rate-limit snapshot is updated first, for every response.
        The well-known status codes 429, 401, 400 and 404 get a fixed
        message; any other error status is decoded from the response body.

        Raises:
            RateLimitExceededError: On 429.
            UnauthorizedError: On 401.
            BadRequestError: On 400.
            NotFoundError: On 404.
            ResponseError: The decoded error for any other status >= 400.
        """
        self._rate_limit.update(response.headers)

        code = response.status_code
        if code < httpx.codes.BAD_REQUEST:
            return

        status = status_line(response)
        logger.warning("API error response", status=status)
        if code == httpx.codes.TOO_MANY_REQUESTS:
            msg = (
                "your API key is being temporarily blocked from making further "
                "requests. The block will automatically be lifted by waiting "
                f"an hour: {status}"
            )
            raise RateLimitExceededError(msg, code, status)
        if code == httpx.codes.UNAUTHORIZED:
            raise UnauthorizedError(f"not authorized for api endpoint: {status}", code, status)
        if code == httpx.codes.BAD_REQUEST:
            raise BadRequestError(f"request to api was not understood: {status}", code, status)
        if code == httpx.codes.NOT_FOUND:
            raise NotFoundError(f"api endpoint was not found: {status}", code, status)

        raise decode_error_response(response)

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send ``request`` and validate the response.

        The returned response is open and its body not yet read; the caller
        must close it. On a validation error the response is closed and
        only the error is raised.

        Raises:
            TransportError: If the request could not be sent.
            ResponseError: If the API returned an error status.
        """
        start_time = time.time()
        logger.debug("Making API request", method=request.method, url=str(request.url))
        try:
            response = self._http.send(request, stream=True)
        except httpx.HTTPError as exc:
            duration = time.time() - start_time
            logger.exception("API request failed", duration_seconds=round(duration, 3))
            raise TransportError(f"{request.method} {request.url}: {exc}") from exc

        duration = time.time() - start_time
        logger.debug(
            "API request completed",
            status_code=response.status_code,
            duration_seconds=round(duration, 3),
        )

        try:
            self.validate_response(response)
        except Exception:
            response.close()
            raise
        return response

    def send_and_decode(self, request: httpx.Request, target: type[T]) -> T:
        """Send ``request`` and decode the JSON body into ``target``.

        ``target`` is anything Pydantic can validate into: a model class,
        ``dict``, ``list[SomeModel]`` and so on. The response is always
        closed before returning.

        Raises:
            TransportError: If the request could not be sent or the body
                could not be read.
            ResponseError: If the API returned an error status.
            DecodeError: If the body does not fit ``target``.
        """
        response = self.send(request)
        try:
            try:
                body = response.read()
            except (httpx.HTTPError, httpx.StreamError) as exc:
                msg = f"unable to read response body: {exc}"
                raise TransportError(msg) from exc

            try:
                return pydantic.TypeAdapter(target).validate_json(body)
            except pydantic.ValidationError as exc:
                msg = f"unable to decode json response: {exc}"
                raise DecodeError(msg) from exc
        finally:
            response.close()

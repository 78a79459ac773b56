"""Resource-oriented entry point to the NPS API."""

from typing import Any

from . import api
from .parks import ParksService


class NPSClient:
    """Client for the NPS API grouped by resource.

    Wraps a generic :class:`nps_client.api.Client` and exposes one service
    per API resource. Can be used as a context manager.
    """

    def __init__(self, token: str, **client_kwargs: Any):
        """Initialize the client and its services.

        Args:
            token: NPS API key.
            **client_kwargs: Passed through to :class:`nps_client.api.Client`
                (``base_url``, ``http_client``, ``timeout``).

        Raises:
            MissingTokenError: If token is empty.
        """
        self.api = api.Client(token, **client_kwargs)

        # Services of the NPS API
        self.parks = ParksService(self)

    def __repr__(self) -> str:
        return f"NPSClient(url={str(self.api.base_url)!r})"

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Release the underlying transport."""
        self.api.close()

    @property
    def rate_limit(self) -> api.RateLimit:
        """The rate-limit counters reported by the most recent response."""
        return self.api.rate_limit

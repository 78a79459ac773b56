"""Thread-safe tracking of the rate-limit counters reported by the API."""

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock

import httpx
import structlog

logger = structlog.get_logger(__name__)

HEADER_RATE_LIMIT = "X-RateLimit-Limit"
HEADER_RATE_LIMIT_REMAINING = "X-RateLimit-Remaining"


@dataclass(frozen=True)
class RateLimit:
    """Most recently observed rate-limit counters.

    Values are kept as the raw header strings; an absent header is an
    empty string. ``last_updated`` is None until the first response.
    """

    limit: str = ""
    remaining: str = ""
    last_updated: datetime | None = None


class RateLimitTracker:
    """Holds the current :class:`RateLimit` snapshot behind a lock.

    Every update replaces the snapshot as a whole, so readers always see
    the counters of a single response.
    """

    def __init__(self):
        self._lock = Lock()
        self._snapshot = RateLimit()

    def update(self, headers: httpx.Headers) -> RateLimit:
        """Replace the snapshot with the counters found in ``headers``.

        Args:
            headers: Response headers.

        Returns:
            The snapshot that was stored.
        """
        snapshot = RateLimit(
            limit=headers.get(HEADER_RATE_LIMIT, ""),
            remaining=headers.get(HEADER_RATE_LIMIT_REMAINING, ""),
            last_updated=datetime.now(timezone.utc),
        )
        with self._lock:
            self._snapshot = snapshot
        logger.debug(
            "Rate limit updated",
            limit=snapshot.limit,
            remaining=snapshot.remaining,
        )
        return snapshot

    def snapshot(self) -> RateLimit:
        """Return the current snapshot."""
        with self._lock:
            return self._snapshot

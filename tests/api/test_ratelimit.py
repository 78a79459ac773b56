"""Tests for the rate-limit snapshot under concurrent updates."""

import threading
from datetime import datetime

import httpx

from nps_client import api
from nps_client.api import ratelimit


def test_tracker_update_returns_stored_snapshot():
    """update() returns exactly what a later snapshot() reads."""
    tracker = ratelimit.RateLimitTracker()
    stored = tracker.update(httpx.Headers({"X-RateLimit-Limit": "1000"}))
    assert tracker.snapshot() is stored
    assert stored.limit == "1000"
    assert stored.remaining == ""
    assert isinstance(stored.last_updated, datetime)


def test_tracker_header_lookup_is_case_insensitive():
    """Header names are matched case-insensitively."""
    tracker = ratelimit.RateLimitTracker()
    tracker.update(httpx.Headers({"x-ratelimit-remaining": "12"}))
    assert tracker.snapshot().remaining == "12"


def test_concurrent_validation_never_tears_snapshot(offline_client: api.Client):
    """50 parallel validations leave one complete written state behind."""
    thread_count = 50
    barrier = threading.Barrier(thread_count)
    responses = [
        httpx.Response(
            200,
            headers={"X-RateLimit-Limit": str(i), "X-RateLimit-Remaining": str(i)},
        )
        for i in range(thread_count)
    ]

    def worker(response: httpx.Response):
        barrier.wait()
        offline_client.validate_response(response)

    threads = [threading.Thread(target=worker, args=(r,)) for r in responses]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    snapshot = offline_client.rate_limit
    assert snapshot.limit == snapshot.remaining
    assert snapshot.limit in {str(i) for i in range(thread_count)}
    assert snapshot.last_updated is not None


def test_concurrent_readers_see_consistent_snapshots(offline_client: api.Client):
    """Readers racing with writers only ever observe matching counter pairs."""
    torn: list[api.RateLimit] = []

    def writer():
        for i in range(500):
            value = str(i)
            offline_client.validate_response(
                httpx.Response(
                    200,
                    headers={"X-RateLimit-Limit": value, "X-RateLimit-Remaining": value},
                ),
            )

    def reader():
        for _ in range(2000):
            snapshot = offline_client.rate_limit
            if snapshot.limit != snapshot.remaining:
                torn.append(snapshot)

    writers = [threading.Thread(target=writer) for _ in range(4)]
    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in writers + readers:
        t.start()
    for t in writers + readers:
        t.join()

    assert torn == []

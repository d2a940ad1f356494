"""Rate limiting utilities for API calls."""

from __future__ import annotations

import os
import threading
import time
from functools import wraps
from typing import Any, Callable, Iterable, Iterator, TypeVar

_F = TypeVar("_F", bound=Callable[..., Any])
_T = TypeVar("_T")

# Rate limit configuration
_K8S_RATE_LIMIT_PER_SECOND = float(os.getenv("K8S_RATE_LIMIT_PER_SECOND", "10.0"))
_AWS_RATE_LIMIT_PER_SECOND = float(os.getenv("AWS_RATE_LIMIT_PER_SECOND", "5.0"))

# Next free call slot per API, shared by all kopf worker threads
_last_call_time: dict[str, float] = {"k8s": 0.0, "aws": 0.0}
_lock = threading.Lock()


def _wait_for_slot(api_type: str, per_second: float) -> None:
    """Reserve the next call slot for ``api_type`` and sleep until it arrives.

    Only the reservation happens under the lock; the sleep happens after it
    is released, so waiting for an AWS slot never holds up Kubernetes calls.
    """
    min_interval = 1.0 / per_second
    with _lock:
        now = time.time()
        slot = max(now, _last_call_time[api_type] + min_interval)
        _last_call_time[api_type] = slot
    delay = slot - now
    if delay > 0:
        time.sleep(delay)


def rate_limit_k8s(func: _F) -> _F:
    """Decorator to rate limit Kubernetes API calls.

    Spaces calls so the API server sees at most K8S_RATE_LIMIT_PER_SECOND
    requests per second from this process.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        _wait_for_slot("k8s", _K8S_RATE_LIMIT_PER_SECOND)
        return func(*args, **kwargs)

    return wrapper  # type: ignore


def rate_limit_aws(func: _F) -> _F:
    """Decorator to rate limit ACM and Route 53 API calls.

    Route 53 in particular allows only a handful of requests per second per
    account, so calls are spaced by AWS_RATE_LIMIT_PER_SECOND. Throttling
    errors are not retried here; they surface to the caller.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        _wait_for_slot("aws", _AWS_RATE_LIMIT_PER_SECOND)
        return func(*args, **kwargs)

    return wrapper  # type: ignore


def rate_limit_aws_pages(pages: Iterable[_T]) -> Iterator[_T]:
    """Yield from a lazy boto3 page iterator, taking an AWS slot before each page request."""
    iterator = iter(pages)
    while True:
        _wait_for_slot("aws", _AWS_RATE_LIMIT_PER_SECOND)
        try:
            page = next(iterator)
        except StopIteration:
            return
        yield page

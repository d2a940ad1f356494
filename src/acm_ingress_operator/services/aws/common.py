"""Instrumentation shared by the AWS service clients."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from ... import metrics


@contextmanager
def track_api_call(api_type: str, operation: str) -> Iterator[None]:
    """Record count, outcome and duration of one AWS API call."""
    start_time = time.time()
    try:
        yield
        metrics.api_call_total.labels(api_type=api_type, operation=operation, result="success").inc()
    except Exception:
        metrics.api_call_total.labels(api_type=api_type, operation=operation, result="error").inc()
        raise
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(api_type=api_type, operation=operation).observe(duration)

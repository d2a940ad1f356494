"""Base handler class with common functionality for resource handlers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

from .. import metrics
from ..constants import CONTROLLER_NAME, FINALIZER
from ..logging import log_resource_event
from ..utils.errors import sanitize_exception
from ..utils.events import emit_reconcile_failed, emit_reconcile_started
from .shared import patch_ingress

_T = TypeVar("_T")


class BaseHandler:
    """Base class for resource handlers with logging, metrics and finalizer helpers."""

    def __init__(self, kind: str, api: Any):
        """Initialize base handler.

        Args:
            kind: The Kubernetes resource kind (e.g., "Ingress")
            api: Kubernetes CustomObjectsApi instance
        """
        self.kind = kind
        self.api = api
        self.logger = logging.getLogger(__name__)

    def _get_resource_context(self, meta: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": meta.get("name", "unknown"),
            "namespace": meta.get("namespace", "default"),
            "uid": meta.get("uid", "unknown"),
        }

    def _log(
        self,
        level: int,
        meta: dict[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        ctx = self._get_resource_context(meta)
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=ctx["name"],
            namespace=ctx["namespace"],
            uid=ctx["uid"],
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(self, meta: dict[str, Any], message: str, reason: str = "Info", **kwargs: Any) -> None:
        """Log an info-level structured log message."""
        self._log(logging.INFO, meta, message, "info", reason, **kwargs)

    def log_warning(self, meta: dict[str, Any], message: str, reason: str = "Warning", **kwargs: Any) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, meta, message, "warning", reason, **kwargs)

    def log_error(
        self,
        meta: dict[str, Any],
        message: str,
        error: Exception | None = None,
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            error: Optional exception to include sanitized error details
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = kwargs.copy()
        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__
        self._log(logging.ERROR, meta, message, "error", reason, **log_data)

    def ensure_finalizer(self, body: dict[str, Any]) -> dict[str, Any]:
        """Add the operator finalizer and persist it.

        The patch carries the observed resourceVersion, so a concurrent
        modification fails with 409 instead of being overwritten.

        Returns:
            The updated resource (unchanged if the finalizer was already present)
        """
        meta = body.get("metadata", {})
        finalizers = list(meta.get("finalizers") or [])
        if FINALIZER in finalizers:
            return body

        finalizers.append(FINALIZER)
        return patch_ingress(
            self.api,
            meta.get("namespace", "default"),
            meta.get("name"),
            {"metadata": {"finalizers": finalizers, "resourceVersion": meta.get("resourceVersion")}},
        )

    def remove_finalizer(self, body: dict[str, Any]) -> dict[str, Any]:
        """Remove the operator finalizer and persist the change."""
        meta = body.get("metadata", {})
        finalizers = list(meta.get("finalizers") or [])
        if FINALIZER not in finalizers:
            return body

        finalizers.remove(FINALIZER)
        return patch_ingress(
            self.api,
            meta.get("namespace", "default"),
            meta.get("name"),
            {"metadata": {"finalizers": finalizers or None, "resourceVersion": meta.get("resourceVersion")}},
        )

    def reconcile_with_metrics(self, body: dict[str, Any], reconcile_fn: Callable[[], _T]) -> _T:
        """Execute reconciliation with events, metrics and error logging.

        Args:
            body: Kubernetes resource
            reconcile_fn: Function to execute for reconciliation

        Returns:
            Whatever ``reconcile_fn`` returns
        """
        meta = body.get("metadata", {})
        emit_reconcile_started(body)
        metrics.reconcile_total.labels(kind=self.kind, result="started").inc()

        start_time = time.time()
        try:
            result = reconcile_fn()
            metrics.reconcile_total.labels(kind=self.kind, result="success").inc()
            return result
        except Exception as e:
            sanitized_error = sanitize_exception(e)
            metrics.error_total.labels(kind=self.kind, error_type=type(e).__name__).inc()
            self.log_error(meta, "Reconciliation failed", error=e, reason="ReconciliationFailed")
            emit_reconcile_failed(body, f"Reconciliation failed: {sanitized_error}")
            metrics.reconcile_total.labels(kind=self.kind, result="error").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.reconcile_duration_seconds.labels(kind=self.kind).observe(duration)

"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_ANNOTATION_INVALID,
    EVENT_REASON_CERTIFICATE_ATTACHED,
    EVENT_REASON_CERTIFICATE_DELETED,
    EVENT_REASON_CERTIFICATE_ISSUED,
    EVENT_REASON_CERTIFICATE_REQUESTED,
    EVENT_REASON_CERTIFICATE_REUSED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_VALIDATION_RECORDS_CREATED,
)


def emit_event(
    body: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body (apiVersion, kind and metadata are used for the reference)
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: dict[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_annotation_invalid(body: dict[str, Any], message: str) -> None:
    """Emit a warning about an annotation that fell back to its default."""
    emit_event(body, EVENT_REASON_ANNOTATION_INVALID, message, type_="Warning")


def emit_certificate_reused(body: dict[str, Any], certificate_arn: str) -> None:
    emit_event(body, EVENT_REASON_CERTIFICATE_REUSED, f"Reusing existing certificate {certificate_arn}")


def emit_certificate_requested(body: dict[str, Any], certificate_arn: str) -> None:
    emit_event(body, EVENT_REASON_CERTIFICATE_REQUESTED, f"Requested certificate {certificate_arn}")


def emit_validation_records_created(body: dict[str, Any], count: int) -> None:
    emit_event(body, EVENT_REASON_VALIDATION_RECORDS_CREATED, f"Upserted {count} DNS validation record(s)")


def emit_certificate_issued(body: dict[str, Any], certificate_arn: str) -> None:
    emit_event(body, EVENT_REASON_CERTIFICATE_ISSUED, f"Certificate {certificate_arn} issued")


def emit_certificate_attached(body: dict[str, Any], certificate_arn: str) -> None:
    emit_event(body, EVENT_REASON_CERTIFICATE_ATTACHED, f"Certificate {certificate_arn} attached to ingress")


def emit_certificate_deleted(body: dict[str, Any], certificate_arn: str) -> None:
    emit_event(body, EVENT_REASON_CERTIFICATE_DELETED, f"Certificate {certificate_arn} deleted")

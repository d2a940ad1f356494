"""Tests for Kubernetes event utilities."""

from __future__ import annotations

from unittest.mock import patch

from acm_ingress_operator.utils.events import (
    emit_annotation_invalid,
    emit_certificate_attached,
    emit_certificate_deleted,
    emit_certificate_requested,
    emit_event,
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_validation_records_created,
)

BODY = {"apiVersion": "networking.k8s.io/v1", "kind": "Ingress", "metadata": {"name": "web", "namespace": "apps"}}


class TestEmitEvent:
    """Test cases for emit_event function."""

    @patch("acm_ingress_operator.utils.events.kopf.event")
    def test_emit_event_normal(self, mock_event):
        """Test emitting normal event."""
        emit_event(BODY, "TestReason", "Test message")

        mock_event.assert_called_once_with(
            BODY,
            reason="TestReason",
            message="Test message",
            type="Normal",
        )

    @patch("acm_ingress_operator.utils.events.kopf.event")
    def test_emit_event_warning(self, mock_event):
        """Test emitting warning event."""
        emit_event(BODY, "TestReason", "Test message", type_="Warning")

        assert mock_event.call_args.kwargs["type"] == "Warning"


class TestEventHelpers:
    """Test cases for the reason-specific helpers."""

    @patch("acm_ingress_operator.utils.events.kopf.event")
    def test_reconcile_events(self, mock_event):
        """Test reconcile started and failed events."""
        emit_reconcile_started(BODY)
        emit_reconcile_failed(BODY, "boom")

        started, failed = mock_event.call_args_list
        assert started.kwargs["reason"] == "ReconcileStarted"
        assert started.kwargs["type"] == "Normal"
        assert failed.kwargs["reason"] == "ReconcileFailed"
        assert failed.kwargs["message"] == "boom"
        assert failed.kwargs["type"] == "Warning"

    @patch("acm_ingress_operator.utils.events.kopf.event")
    def test_annotation_invalid_is_warning(self, mock_event):
        """Test that annotation problems are warnings."""
        emit_annotation_invalid(BODY, "invalid acm.tedens.dev/cert-ttl")

        assert mock_event.call_args.kwargs["reason"] == "AnnotationInvalid"
        assert mock_event.call_args.kwargs["type"] == "Warning"

    @patch("acm_ingress_operator.utils.events.kopf.event")
    def test_certificate_events_mention_arn(self, mock_event):
        """Test that certificate events include the ARN."""
        emit_certificate_requested(BODY, "arn:1")
        emit_certificate_attached(BODY, "arn:1")
        emit_certificate_deleted(BODY, "arn:1")

        reasons = [c.kwargs["reason"] for c in mock_event.call_args_list]
        assert reasons == ["CertificateRequested", "CertificateAttached", "CertificateDeleted"]
        assert all("arn:1" in c.kwargs["message"] for c in mock_event.call_args_list)

    @patch("acm_ingress_operator.utils.events.kopf.event")
    def test_validation_records_created(self, mock_event):
        """Test the record count in the validation event."""
        emit_validation_records_created(BODY, 2)

        assert mock_event.call_args.kwargs["reason"] == "ValidationRecordsCreated"
        assert "2" in mock_event.call_args.kwargs["message"]

"""Handler for Ingress resources."""

from __future__ import annotations

from typing import Any

from ..builders.config import create_config_from_annotations
from ..constants import ANNOTATION_CERTIFICATE_ARN, FINALIZER, KIND_INGRESS, RESYNC_INTERVAL_SECONDS
from ..exceptions import MissingDomainError
from ..models import IngressConfig, ReconcileResult
from ..services.certificates import CertificateManager, certificate_domain
from ..tracing import trace_span
from ..utils.events import emit_annotation_invalid, emit_certificate_attached, emit_certificate_deleted
from .base import BaseHandler
from .shared import get_ingress, patch_ingress

# Reconcile outcomes
STATE_NOT_FOUND = "NotFound"
STATE_UNMANAGED = "Unmanaged"
STATE_ACTIVE = "Active"
STATE_FINALIZED = "Finalized"
STATE_ALREADY_FINALIZED = "AlreadyFinalized"


def resolve_domain(body: dict[str, Any], config: IngressConfig) -> str:
    """Pick the certificate domain: the annotation override, else the first rule's host."""
    if config.domain_override:
        return config.domain_override
    rules = body.get("spec", {}).get("rules") or []
    if rules:
        return rules[0].get("host") or ""
    return ""


class IngressHandler(BaseHandler):
    """Drives an Ingress's certificate through its lifecycle.

    One call to ``reconcile`` is one pass: it reads the Ingress, resolves its
    annotations and either makes sure a certificate is attached or, when the
    Ingress is being deleted, cleans up and releases the finalizer.
    """

    def __init__(self, api: Any, certificates: CertificateManager):
        """Initialize ingress handler."""
        super().__init__(KIND_INGRESS, api)
        self.certificates = certificates

    def reconcile(self, namespace: str, name: str) -> ReconcileResult:
        """Reconcile one Ingress.

        Args:
            namespace: Ingress namespace
            name: Ingress name

        Returns:
            Outcome of the pass, with ``requeue_after`` set when a resync is due

        Raises:
            Exception: Any failure; the caller requeues with backoff
        """
        body = get_ingress(self.api, namespace, name)
        if body is None:
            return ReconcileResult(state=STATE_NOT_FOUND)

        meta = body.get("metadata", {})
        config = create_config_from_annotations(meta.get("annotations"))
        if not config.managed:
            return ReconcileResult(state=STATE_UNMANAGED)

        finalizers = meta.get("finalizers") or []
        if meta.get("deletionTimestamp") and FINALIZER not in finalizers:
            return ReconcileResult(state=STATE_ALREADY_FINALIZED)

        with trace_span("reconcile_ingress", kind=KIND_INGRESS, attributes={"ingress.name": f"{namespace}/{name}"}):
            return self.reconcile_with_metrics(body, lambda: self._reconcile_managed(body, config))

    def _reconcile_managed(self, body: dict[str, Any], config: IngressConfig) -> ReconcileResult:
        meta = body.get("metadata", {})
        for warning in config.warnings:
            self.log_warning(meta, warning, reason="AnnotationInvalid")
            emit_annotation_invalid(body, warning)

        domain = resolve_domain(body, config)

        if meta.get("deletionTimestamp"):
            return self._finalize(body, domain, config)

        body = self.ensure_finalizer(body)
        return self._attach_certificate(body, domain, config)

    def _attach_certificate(self, body: dict[str, Any], domain: str, config: IngressConfig) -> ReconcileResult:
        meta = body.get("metadata", {})
        if not domain:
            raise MissingDomainError(
                "ingress has no acm.tedens.dev/domain annotation and its first rule has no host"
            )

        self.log_info(meta, f"Reconciling managed ingress for {domain}", reason="Reconciling", domain=domain)
        certificate_arn = self.certificates.ensure_certificate(domain, config, body=body)

        annotations = meta.get("annotations") or {}
        if annotations.get(ANNOTATION_CERTIFICATE_ARN) != certificate_arn:
            patch_ingress(
                self.api,
                meta.get("namespace", "default"),
                meta.get("name"),
                {"metadata": {"annotations": {ANNOTATION_CERTIFICATE_ARN: certificate_arn}}},
            )
            emit_certificate_attached(body, certificate_arn)
            self.log_info(meta, "Patched ingress with ACM certificate ARN", reason="CertificateAttached",
                          certificate_arn=certificate_arn)

        return ReconcileResult(
            state=STATE_ACTIVE,
            certificate_arn=certificate_arn,
            requeue_after=RESYNC_INTERVAL_SECONDS,
        )

    def _finalize(self, body: dict[str, Any], domain: str, config: IngressConfig) -> ReconcileResult:
        meta = body.get("metadata", {})
        deleted_arn = None

        if config.delete_cert_on_delete:
            if not domain:
                self.log_warning(meta, "Ingress has no domain, skipping certificate deletion",
                                 reason="CertificateCleanupSkipped")
            else:
                self.log_info(meta, f"Ingress is being deleted, deleting certificate for {domain}",
                              reason="CertificateCleanup", domain=domain)
                # A failure here leaves the finalizer in place so deletion is retried
                if config.wildcard:
                    deleted_arn = self.certificates.delete_certificate_for_domain(
                        domain, certificate_domain(domain, config)
                    )
                else:
                    deleted_arn = self.certificates.delete_certificate_for_domain(domain)
                if deleted_arn:
                    emit_certificate_deleted(body, deleted_arn)

        self.remove_finalizer(body)
        self.log_info(meta, "Removed finalizer", reason="Finalized")
        return ReconcileResult(state=STATE_FINALIZED, certificate_arn=deleted_arn)

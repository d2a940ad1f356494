"""Certificate lifecycle management: reuse, request, validate, delete."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from .. import metrics
from ..constants import (
    CERT_STATUS_FAILED,
    CERT_STATUS_ISSUED,
    CERT_TAG_KEY,
    CERT_TAG_VALUE,
    REUSABLE_CERT_STATUSES,
    VALIDATION_POLL_INTERVAL_SECONDS,
    VALIDATION_PROGRESS_EVERY,
    VALIDATION_TIMEOUT_SECONDS,
)
from ..exceptions import (
    CertificateFailedError,
    DnsValidationError,
    ReconcileCancelledError,
    ValidationTimeoutError,
)
from ..models import IngressConfig
from ..tracing import trace_span
from ..utils.events import (
    emit_certificate_issued,
    emit_certificate_requested,
    emit_certificate_reused,
    emit_validation_records_created,
)
from ..utils.locks import DomainLocks
from .base import CertificateAuthority
from .validation import DnsValidator

logger = logging.getLogger(__name__)


def certificate_domain(domain: str, config: IngressConfig) -> str:
    """Return the name a certificate for ``domain`` is requested under."""
    return f"*.{domain}" if config.wildcard else domain


def wildcard_parent(domain: str) -> str | None:
    """Return the wildcard name covering ``domain``, e.g. "*.example.com" for "app.example.com"."""
    _, _, parent = domain.partition(".")
    if not parent or "." not in parent:
        return None
    return f"*.{parent}"


class CertificateManager:
    """Ensures a usable ACM certificate exists for a domain.

    Validation is waited for in place: ``ensure_certificate`` polls ACM every
    ``poll_interval`` seconds until the certificate is issued, fails, or
    ``validation_timeout`` elapses. Setting ``stop_event`` ends the wait early
    with ``ReconcileCancelledError``; the requested certificate is left in ACM
    and is picked up again through reuse on the next pass.
    """

    def __init__(
        self,
        acm: CertificateAuthority,
        validator: DnsValidator,
        domain_locks: DomainLocks | None = None,
        poll_interval: float = VALIDATION_POLL_INTERVAL_SECONDS,
        validation_timeout: float = VALIDATION_TIMEOUT_SECONDS,
        stop_event: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.acm = acm
        self.validator = validator
        self.domain_locks = domain_locks if domain_locks is not None else DomainLocks()
        self.poll_interval = poll_interval
        self.validation_timeout = validation_timeout
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.clock = clock

    def find_certificate(self, *domains: str) -> str | None:
        """Return the ARN of the first issued or pending certificate named after any of ``domains``.

        Matching is case-insensitive. ACM's listing order decides between
        several matches, not the order of ``domains``.
        """
        wanted = {domain.lower() for domain in domains}
        for summary in self.acm.list_certificates(REUSABLE_CERT_STATUSES):
            if summary.get("DomainName", "").lower() in wanted:
                return summary.get("CertificateArn")
        return None

    def ensure_certificate(
        self,
        domain: str,
        config: IngressConfig,
        body: dict[str, Any] | None = None,
    ) -> str:
        """Return the ARN of a certificate for ``domain``, requesting one if needed.

        Args:
            domain: Domain the certificate must cover
            config: Resolved Ingress configuration
            body: Ingress body; when given, progress is reported as Kubernetes events

        Returns:
            Certificate ARN

        Raises:
            DnsValidationError: Validation records could not be created
            CertificateFailedError: ACM reported the certificate as failed
            ValidationTimeoutError: The certificate was not issued in time
            ReconcileCancelledError: The operator is shutting down
        """
        requested_domain = certificate_domain(domain, config)
        with trace_span("ensure_certificate", attributes={"certificate.domain": requested_domain}):
            with self.domain_locks.hold(domain):
                if config.reuse_existing:
                    existing_arn = self._find_reusable(domain, config)
                    if existing_arn:
                        logger.info(f"Reusing existing certificate {existing_arn} for {domain}")
                        metrics.certificate_operations_total.labels(operation="reuse", result="success").inc()
                        if body is not None:
                            emit_certificate_reused(body, existing_arn)
                        return existing_arn

                certificate_arn = self._request(requested_domain, config)

            if body is not None:
                emit_certificate_requested(body, certificate_arn)

            try:
                records = self.validator.create_validation_records(certificate_arn, config.zone_id)
            except Exception as e:
                metrics.certificate_operations_total.labels(operation="validate", result="failed").inc()
                raise DnsValidationError(
                    f"failed to create DNS validation records for {certificate_arn}: {e}",
                    certificate_arn,
                ) from e

            if body is not None and records:
                emit_validation_records_created(body, records)

            self._wait_for_issuance(certificate_arn, config, records)

            if body is not None:
                emit_certificate_issued(body, certificate_arn)
            return certificate_arn

    def _find_reusable(self, domain: str, config: IngressConfig) -> str | None:
        # A certificate named after the domain itself is always reusable
        existing_arn = self.find_certificate(domain, certificate_domain(domain, config))
        if existing_arn or not config.fallback_wildcard or config.wildcard:
            return existing_arn

        wildcard = wildcard_parent(domain)
        if wildcard is None:
            return None
        existing_arn = self.find_certificate(wildcard)
        if existing_arn:
            logger.info(f"No certificate for {domain}, falling back to wildcard {wildcard}")
        return existing_arn

    def _request(self, requested_domain: str, config: IngressConfig) -> str:
        try:
            certificate_arn = self.acm.request_certificate(
                requested_domain,
                sans=config.sans or None,
                tags={CERT_TAG_KEY: CERT_TAG_VALUE},
            )
        except Exception:
            metrics.certificate_operations_total.labels(operation="request", result="failed").inc()
            raise
        metrics.certificate_operations_total.labels(operation="request", result="success").inc()
        logger.info(f"Requested certificate {certificate_arn} for {requested_domain}, ttl {config.cert_ttl}")
        return certificate_arn

    def _wait_for_issuance(self, certificate_arn: str, config: IngressConfig, records: int) -> None:
        started = self.clock()
        deadline = started + self.validation_timeout
        attempts = 0

        try:
            while True:
                if self.clock() > deadline:
                    metrics.certificate_operations_total.labels(operation="validate", result="timeout").inc()
                    raise ValidationTimeoutError(
                        f"certificate validation timed out: {certificate_arn}", certificate_arn
                    )

                certificate = self.acm.describe_certificate(certificate_arn)
                status = certificate.get("Status")

                attempts += 1
                if attempts % VALIDATION_PROGRESS_EVERY == 0:
                    logger.info(
                        f"Waiting for ACM certificate validation of {certificate_arn} "
                        f"(attempt {attempts}, status {status})"
                    )

                if status == CERT_STATUS_ISSUED:
                    metrics.certificate_operations_total.labels(operation="validate", result="success").inc()
                    return
                if status == CERT_STATUS_FAILED:
                    reason = certificate.get("FailureReason")
                    metrics.certificate_operations_total.labels(operation="validate", result="failed").inc()
                    raise CertificateFailedError(
                        f"certificate validation failed: {reason}", certificate_arn, reason=reason
                    )

                # ACM fills in validation records shortly after the request
                if records == 0:
                    try:
                        records = self.validator.create_validation_records(certificate_arn, config.zone_id)
                    except Exception as e:
                        raise DnsValidationError(
                            f"failed to create DNS validation records for {certificate_arn}: {e}",
                            certificate_arn,
                        ) from e

                if self.stop_event.wait(self.poll_interval):
                    raise ReconcileCancelledError(
                        f"stopped while waiting for validation of {certificate_arn}"
                    )
        finally:
            metrics.validation_wait_seconds.observe(self.clock() - started)

    def delete_certificate_for_domain(self, domain: str, *alternatives: str) -> str | None:
        """Delete the first issued or pending certificate for ``domain``.

        Args:
            domain: Domain the certificate is named after
            *alternatives: Other names that also count as a match, e.g. "*.domain"

        Returns:
            ARN of the deleted certificate, or None when no certificate matched
        """
        certificate_arn = self.find_certificate(domain, *alternatives)
        if certificate_arn is None:
            logger.info(f"No certificate found for {domain}, nothing to delete")
            return None

        try:
            self.acm.delete_certificate(certificate_arn)
        except Exception:
            metrics.certificate_operations_total.labels(operation="delete", result="failed").inc()
            raise
        metrics.certificate_operations_total.labels(operation="delete", result="success").inc()
        return certificate_arn

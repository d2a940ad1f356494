"""Exceptions raised by the ACM Ingress Operator."""

from __future__ import annotations


class AcmOperatorError(Exception):
    """Base class for operator errors."""


class CertificateError(AcmOperatorError):
    """A certificate request that was submitted but did not end up usable.

    The ARN of the already-requested certificate is kept so callers can
    correlate the failure with the certificate left behind in ACM.
    """

    def __init__(self, message: str, certificate_arn: str | None = None):
        super().__init__(message)
        self.certificate_arn = certificate_arn


class DnsValidationError(CertificateError):
    """Validation records for a freshly requested certificate could not be created."""


class ValidationTimeoutError(CertificateError):
    """The certificate did not leave PENDING_VALIDATION before the deadline."""


class CertificateFailedError(CertificateError):
    """ACM moved the certificate to FAILED."""

    def __init__(self, message: str, certificate_arn: str | None = None, reason: str | None = None):
        super().__init__(message, certificate_arn)
        self.reason = reason


class ZoneNotFoundError(AcmOperatorError):
    """No Route 53 hosted zone is a suffix of the domain."""

    def __init__(self, domain: str):
        super().__init__(f"no matching hosted zone found for domain: {domain}")
        self.domain = domain


class MissingDomainError(AcmOperatorError):
    """The Ingress has neither a domain annotation nor a rule host."""


class ReconcileCancelledError(AcmOperatorError):
    """The operator is shutting down while a reconcile pass was waiting."""

"""Utility functions for the ACM Ingress Operator."""

from .errors import sanitize_error_message, sanitize_exception
from .events import emit_event
from .locks import DomainLocks, normalize_domain
from .rate_limit import rate_limit_aws, rate_limit_aws_pages, rate_limit_k8s

__all__ = [
    "emit_event",
    "sanitize_error_message",
    "sanitize_exception",
    "DomainLocks",
    "normalize_domain",
    "rate_limit_aws",
    "rate_limit_aws_pages",
    "rate_limit_k8s",
]

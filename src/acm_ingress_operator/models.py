"""Models shared by the reconciler and the certificate services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import NamedTuple

from .constants import DEFAULT_CERT_TTL


@dataclass
class IngressConfig:
    """Configuration resolved from an Ingress's annotations on every reconcile."""

    managed: bool = False
    domain_override: str | None = None
    zone_id: str | None = None
    wildcard: bool = False
    sans: list[str] = field(default_factory=list)
    cert_ttl: timedelta = DEFAULT_CERT_TTL
    reuse_existing: bool = True
    delete_cert_on_delete: bool = False
    fallback_wildcard: bool = False
    # Annotations that could not be parsed and fell back to their default
    warnings: list[str] = field(default_factory=list, compare=False)


class ValidationRecordKey(NamedTuple):
    """Identity of a DNS validation record within one reconcile pass."""

    name: str
    type: str
    value: str


@dataclass
class ReconcileResult:
    """Outcome of a reconcile pass."""

    state: str
    certificate_arn: str | None = None
    requeue_after: float | None = None

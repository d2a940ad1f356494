"""Certificate and DNS services used by the Ingress reconciler."""

from .certificates import CertificateManager, certificate_domain
from .validation import DnsValidator
from .zones import HostedZoneResolver

__all__ = ["CertificateManager", "DnsValidator", "HostedZoneResolver", "certificate_domain"]

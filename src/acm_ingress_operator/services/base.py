"""Interfaces of the external certificate authority and DNS provider."""

from __future__ import annotations

from typing import Any, Protocol


class CertificateAuthority(Protocol):
    """Protocol defining the certificate authority operations the operator consumes."""

    def list_certificates(self, statuses: list[str]) -> list[dict[str, Any]]:
        """List certificate summaries (CertificateArn, DomainName) in the given statuses."""
        ...

    def request_certificate(
        self,
        domain: str,
        sans: list[str] | None = None,
        tags: dict[str, str] | None = None,
    ) -> str:
        """Request a DNS-validated certificate and return its ARN."""
        ...

    def describe_certificate(self, certificate_arn: str) -> dict[str, Any]:
        """Return the certificate detail (Status, FailureReason, DomainValidationOptions)."""
        ...

    def delete_certificate(self, certificate_arn: str) -> None:
        """Delete a certificate."""
        ...


class DnsProvider(Protocol):
    """Protocol defining the DNS provider operations the operator consumes."""

    def list_hosted_zones(self) -> list[dict[str, Any]]:
        """List all hosted zones (Id, Name)."""
        ...

    def upsert_record(self, zone_id: str, name: str, record_type: str, value: str, ttl: int) -> None:
        """Create or replace a single-value resource record set."""
        ...

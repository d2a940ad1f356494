"""Creation of DNS validation records for ACM certificates."""

from __future__ import annotations

import logging

from .. import metrics
from ..constants import VALIDATION_RECORD_TTL
from ..models import ValidationRecordKey
from ..tracing import trace_span
from .base import CertificateAuthority, DnsProvider
from .zones import HostedZoneResolver

logger = logging.getLogger(__name__)


class DnsValidator:
    """Upserts the Route 53 records ACM needs to validate a certificate."""

    def __init__(
        self,
        acm: CertificateAuthority,
        dns: DnsProvider,
        zone_resolver: HostedZoneResolver | None = None,
        record_ttl: int = VALIDATION_RECORD_TTL,
    ) -> None:
        self.acm = acm
        self.dns = dns
        self.zone_resolver = zone_resolver or HostedZoneResolver(dns)
        self.record_ttl = record_ttl

    def create_validation_records(self, certificate_arn: str, zone_id: str | None = None) -> int:
        """Upsert one record per distinct validation requirement of a certificate.

        Requirements that ACM has not yet populated with a resource record are
        skipped. The first failure aborts the call; records already upserted
        stay in place.

        Args:
            certificate_arn: Certificate whose validation options are read
            zone_id: Hosted zone to use for every record instead of inferring it

        Returns:
            Number of records upserted
        """
        with trace_span("create_validation_records", attributes={"certificate.arn": certificate_arn}):
            certificate = self.acm.describe_certificate(certificate_arn)

            seen: set[ValidationRecordKey] = set()
            for option in certificate.get("DomainValidationOptions", []):
                option_domain = option.get("DomainName", "")
                record = option.get("ResourceRecord")
                if not record:
                    logger.debug(f"No validation record yet for {option_domain} on {certificate_arn}")
                    continue

                key = ValidationRecordKey(record.get("Name", ""), record.get("Type", ""), record.get("Value", ""))
                if key in seen:
                    continue
                seen.add(key)

                hosted_zone_id = zone_id or self.zone_resolver.find_zone_id(option_domain)

                logger.info(
                    f"Upserting validation record {key.name} {key.type} in zone {hosted_zone_id} for {option_domain}"
                )
                try:
                    self.dns.upsert_record(hosted_zone_id, key.name, key.type, key.value, self.record_ttl)
                except Exception:
                    metrics.validation_records_total.labels(result="failed").inc()
                    raise
                metrics.validation_records_total.labels(result="success").inc()

            return len(seen)

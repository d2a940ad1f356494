"""Tests for DNS validation record creation."""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest
from botocore.exceptions import ClientError

from acm_ingress_operator.exceptions import ZoneNotFoundError
from acm_ingress_operator.services.validation import DnsValidator

CERT_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/abc"


def _option(domain: str, name: str | None = None, value: str = "_x.acm-validations.aws.") -> dict:
    option = {"DomainName": domain, "ValidationMethod": "DNS"}
    if name is not None:
        option["ResourceRecord"] = {"Name": name, "Type": "CNAME", "Value": value}
    return option


@pytest.fixture
def acm() -> MagicMock:
    return MagicMock()


@pytest.fixture
def dns() -> MagicMock:
    dns = MagicMock()
    dns.list_hosted_zones.return_value = [{"Id": "/hostedzone/ZROOT", "Name": "example.com."}]
    return dns


class TestDnsValidator:
    """Test cases for DnsValidator.create_validation_records."""

    def test_upserts_each_record(self, acm, dns):
        """Test that every validation option gets a record in the inferred zone."""
        acm.describe_certificate.return_value = {
            "DomainValidationOptions": [
                _option("example.com", "_a.example.com.", "_va.acm-validations.aws."),
                _option("www.example.com", "_b.www.example.com.", "_vb.acm-validations.aws."),
            ]
        }

        count = DnsValidator(acm, dns).create_validation_records(CERT_ARN)

        assert count == 2
        acm.describe_certificate.assert_called_once_with(CERT_ARN)
        dns.upsert_record.assert_has_calls([
            call("ZROOT", "_a.example.com.", "CNAME", "_va.acm-validations.aws.", 300),
            call("ZROOT", "_b.www.example.com.", "CNAME", "_vb.acm-validations.aws.", 300),
        ])

    def test_identical_records_upserted_once(self, acm, dns):
        """Test that a wildcard and its apex sharing one record produce one upsert."""
        acm.describe_certificate.return_value = {
            "DomainValidationOptions": [
                _option("*.example.com", "_a.example.com."),
                _option("example.com", "_a.example.com."),
            ]
        }

        count = DnsValidator(acm, dns).create_validation_records(CERT_ARN)

        assert count == 1
        assert dns.upsert_record.call_count == 1

    def test_options_without_record_are_skipped(self, acm, dns):
        """Test that options ACM has not populated yet are ignored."""
        acm.describe_certificate.return_value = {
            "DomainValidationOptions": [_option("example.com")]
        }

        assert DnsValidator(acm, dns).create_validation_records(CERT_ARN) == 0
        dns.upsert_record.assert_not_called()
        dns.list_hosted_zones.assert_not_called()

    def test_zone_override_skips_lookup(self, acm, dns):
        """Test that an explicit zone ID is used without listing zones."""
        acm.describe_certificate.return_value = {
            "DomainValidationOptions": [_option("foo.example.net", "_a.foo.example.net.")]
        }

        DnsValidator(acm, dns).create_validation_records(CERT_ARN, zone_id="ZOVERRIDE")

        dns.list_hosted_zones.assert_not_called()
        dns.upsert_record.assert_called_once_with(
            "ZOVERRIDE", "_a.foo.example.net.", "CNAME", "_x.acm-validations.aws.", 300
        )

    def test_zone_not_found_propagates(self, acm, dns):
        """Test that a missing zone aborts the call."""
        dns.list_hosted_zones.return_value = []
        acm.describe_certificate.return_value = {
            "DomainValidationOptions": [_option("foo.example.com", "_a.foo.example.com.")]
        }

        with pytest.raises(ZoneNotFoundError):
            DnsValidator(acm, dns).create_validation_records(CERT_ARN)

        dns.upsert_record.assert_not_called()

    def test_upsert_failure_aborts_remaining_records(self, acm, dns):
        """Test that the first failed upsert stops processing."""
        acm.describe_certificate.return_value = {
            "DomainValidationOptions": [
                _option("example.com", "_a.example.com."),
                _option("www.example.com", "_b.www.example.com."),
            ]
        }
        dns.upsert_record.side_effect = ClientError(
            {"Error": {"Code": "Throttling", "Message": "Rate exceeded"}}, "ChangeResourceRecordSets"
        )

        with pytest.raises(ClientError):
            DnsValidator(acm, dns).create_validation_records(CERT_ARN)

        assert dns.upsert_record.call_count == 1

    def test_custom_record_ttl(self, acm, dns):
        """Test that the record TTL is configurable."""
        acm.describe_certificate.return_value = {
            "DomainValidationOptions": [_option("example.com", "_a.example.com.")]
        }

        DnsValidator(acm, dns, record_ttl=60).create_validation_records(CERT_ARN)

        assert dns.upsert_record.call_args[0][4] == 60

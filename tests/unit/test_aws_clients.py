"""Tests for the boto3-backed ACM and Route 53 clients."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from acm_ingress_operator.services.aws import AcmClient, Route53Client


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture(autouse=True)
def mock_wait_for_slot():
    with patch("acm_ingress_operator.utils.rate_limit._wait_for_slot") as mock_wait:
        yield mock_wait


class TestAcmClient:
    """Test cases for AcmClient."""

    def test_list_certificates_reads_all_pages(self):
        """Test that every page of summaries is returned."""
        boto_client = MagicMock()
        paginator = boto_client.get_paginator.return_value
        paginator.paginate.return_value = [
            {"CertificateSummaryList": [{"CertificateArn": "arn:1", "DomainName": "a.example.com"}]},
            {"CertificateSummaryList": [{"CertificateArn": "arn:2", "DomainName": "b.example.com"}]},
            {},
        ]

        summaries = AcmClient(client=boto_client).list_certificates(["ISSUED", "PENDING_VALIDATION"])

        assert [s["CertificateArn"] for s in summaries] == ["arn:1", "arn:2"]
        boto_client.get_paginator.assert_called_once_with("list_certificates")
        paginator.paginate.assert_called_once_with(CertificateStatuses=["ISSUED", "PENDING_VALIDATION"])

    def test_list_certificates_rate_limits_every_page(self, mock_wait_for_slot):
        """Test that each page request takes an AWS slot."""
        boto_client = MagicMock()
        boto_client.get_paginator.return_value.paginate.return_value = [
            {"CertificateSummaryList": []},
            {"CertificateSummaryList": []},
        ]

        AcmClient(client=boto_client).list_certificates(["ISSUED"])

        assert mock_wait_for_slot.call_count == 3
        assert all(c.args[0] == "aws" for c in mock_wait_for_slot.call_args_list)

    def test_request_certificate(self):
        """Test the request parameters sent to ACM."""
        boto_client = MagicMock()
        boto_client.request_certificate.return_value = {"CertificateArn": "arn:new"}

        arn = AcmClient(client=boto_client).request_certificate(
            "*.example.com", sans=["example.com"], tags={"ManagedBy": "acm-manager"}
        )

        assert arn == "arn:new"
        boto_client.request_certificate.assert_called_once_with(
            DomainName="*.example.com",
            ValidationMethod="DNS",
            SubjectAlternativeNames=["example.com"],
            Tags=[{"Key": "ManagedBy", "Value": "acm-manager"}],
        )

    def test_request_certificate_without_sans(self):
        """Test that SubjectAlternativeNames is omitted when empty."""
        boto_client = MagicMock()
        boto_client.request_certificate.return_value = {"CertificateArn": "arn:new"}

        AcmClient(client=boto_client).request_certificate("example.com")

        assert boto_client.request_certificate.call_args.kwargs == {
            "DomainName": "example.com",
            "ValidationMethod": "DNS",
        }

    def test_describe_certificate(self):
        """Test that the Certificate detail is unwrapped."""
        boto_client = MagicMock()
        boto_client.describe_certificate.return_value = {"Certificate": {"Status": "ISSUED"}}

        assert AcmClient(client=boto_client).describe_certificate("arn:1") == {"Status": "ISSUED"}
        boto_client.describe_certificate.assert_called_once_with(CertificateArn="arn:1")

    def test_delete_certificate_error_propagates(self):
        """Test that ACM errors are raised to the caller."""
        boto_client = MagicMock()
        boto_client.delete_certificate.side_effect = _client_error("ResourceInUseException", "DeleteCertificate")

        with pytest.raises(ClientError):
            AcmClient(client=boto_client).delete_certificate("arn:1")

    @patch("acm_ingress_operator.services.aws.acm.boto3")
    def test_default_client_uses_region(self, mock_boto3):
        """Test that a client is built for the configured region."""
        AcmClient(region="eu-west-1")

        mock_boto3.client.assert_called_once_with("acm", region_name="eu-west-1")


class TestRoute53Client:
    """Test cases for Route53Client."""

    def test_list_hosted_zones_reads_all_pages(self):
        """Test that every page of zones is returned."""
        boto_client = MagicMock()
        boto_client.get_paginator.return_value.paginate.return_value = [
            {"HostedZones": [{"Id": "/hostedzone/Z1", "Name": "example.com."}]},
            {"HostedZones": [{"Id": "/hostedzone/Z2", "Name": "example.org."}]},
        ]

        zones = Route53Client(client=boto_client).list_hosted_zones()

        assert [z["Id"] for z in zones] == ["/hostedzone/Z1", "/hostedzone/Z2"]
        boto_client.get_paginator.assert_called_once_with("list_hosted_zones")

    def test_list_hosted_zones_rate_limits_every_page(self, mock_wait_for_slot):
        """Test that later pages are throttled like the first one."""
        boto_client = MagicMock()
        boto_client.get_paginator.return_value.paginate.return_value = [
            {"HostedZones": [{"Id": f"/hostedzone/Z{i}", "Name": f"zone{i}.com."}]} for i in range(3)
        ]

        Route53Client(client=boto_client).list_hosted_zones()

        # one slot per page plus the check that ends iteration
        assert mock_wait_for_slot.call_count == 4

    def test_upsert_record(self):
        """Test the change batch sent to Route 53."""
        boto_client = MagicMock()

        Route53Client(client=boto_client).upsert_record(
            "Z1", "_a.example.com.", "CNAME", "_b.acm-validations.aws.", 300
        )

        kwargs = boto_client.change_resource_record_sets.call_args.kwargs
        assert kwargs["HostedZoneId"] == "Z1"
        change = kwargs["ChangeBatch"]["Changes"][0]
        assert change["Action"] == "UPSERT"
        assert change["ResourceRecordSet"] == {
            "Name": "_a.example.com.",
            "Type": "CNAME",
            "TTL": 300,
            "ResourceRecords": [{"Value": "_b.acm-validations.aws."}],
        }

    def test_upsert_record_error_propagates(self):
        """Test that Route 53 errors are raised to the caller."""
        boto_client = MagicMock()
        boto_client.change_resource_record_sets.side_effect = _client_error(
            "InvalidChangeBatch", "ChangeResourceRecordSets"
        )

        with pytest.raises(ClientError):
            Route53Client(client=boto_client).upsert_record("Z1", "a.", "CNAME", "b.", 300)

"""AWS Certificate Manager client implementation."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from ...utils.rate_limit import rate_limit_aws, rate_limit_aws_pages
from .common import track_api_call

logger = logging.getLogger(__name__)


class AcmClient:
    """ACM certificate authority implementation."""

    def __init__(self, region: str | None = None, client: Any | None = None) -> None:
        """Initialize the ACM client.

        Args:
            region: AWS region; falls back to the boto3 default chain when None
            client: Pre-built boto3 ACM client (tests inject a mock here)
        """
        self.region = region
        self.client = client if client is not None else boto3.client("acm", region_name=region)

    def list_certificates(self, statuses: list[str]) -> list[dict[str, Any]]:
        """List certificate summaries in the given statuses, across all pages."""
        summaries: list[dict[str, Any]] = []
        try:
            with track_api_call("acm", "list_certificates"):
                paginator = self.client.get_paginator("list_certificates")
                for page in rate_limit_aws_pages(paginator.paginate(CertificateStatuses=statuses)):
                    summaries.extend(page.get("CertificateSummaryList", []))
        except ClientError as e:
            logger.error(f"Failed to list certificates: {e}")
            raise
        return summaries

    @rate_limit_aws
    def request_certificate(
        self,
        domain: str,
        sans: list[str] | None = None,
        tags: dict[str, str] | None = None,
    ) -> str:
        """Request a DNS-validated certificate.

        Args:
            domain: Primary domain name, possibly a "*." wildcard
            sans: Subject alternative names
            tags: Tags to attach to the certificate

        Returns:
            ARN of the requested certificate
        """
        params: dict[str, Any] = {
            "DomainName": domain,
            "ValidationMethod": "DNS",
        }
        if sans:
            params["SubjectAlternativeNames"] = list(sans)
        if tags:
            params["Tags"] = [{"Key": key, "Value": value} for key, value in tags.items()]

        try:
            with track_api_call("acm", "request_certificate"):
                response = self.client.request_certificate(**params)
        except ClientError as e:
            logger.error(f"Failed to request certificate for {domain}: {e}")
            raise

        certificate_arn = response["CertificateArn"]
        logger.info(f"Requested certificate {certificate_arn} for {domain}")
        return certificate_arn

    @rate_limit_aws
    def describe_certificate(self, certificate_arn: str) -> dict[str, Any]:
        """Return the Certificate detail structure."""
        try:
            with track_api_call("acm", "describe_certificate"):
                response = self.client.describe_certificate(CertificateArn=certificate_arn)
        except ClientError as e:
            logger.error(f"Failed to describe certificate {certificate_arn}: {e}")
            raise
        return response.get("Certificate", {})

    @rate_limit_aws
    def delete_certificate(self, certificate_arn: str) -> None:
        """Delete a certificate."""
        try:
            with track_api_call("acm", "delete_certificate"):
                self.client.delete_certificate(CertificateArn=certificate_arn)
        except ClientError as e:
            logger.error(f"Failed to delete certificate {certificate_arn}: {e}")
            raise
        logger.info(f"Deleted certificate {certificate_arn}")

"""AWS Route 53 client implementation."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from ...utils.rate_limit import rate_limit_aws, rate_limit_aws_pages
from .common import track_api_call

logger = logging.getLogger(__name__)


class Route53Client:
    """Route 53 DNS provider implementation."""

    def __init__(self, client: Any | None = None) -> None:
        """Initialize the Route 53 client.

        Route 53 is a global service, so no region is taken.

        Args:
            client: Pre-built boto3 Route 53 client (tests inject a mock here)
        """
        self.client = client if client is not None else boto3.client("route53")

    def list_hosted_zones(self) -> list[dict[str, Any]]:
        """List all hosted zones, across all pages."""
        zones: list[dict[str, Any]] = []
        try:
            with track_api_call("route53", "list_hosted_zones"):
                paginator = self.client.get_paginator("list_hosted_zones")
                for page in rate_limit_aws_pages(paginator.paginate()):
                    zones.extend(page.get("HostedZones", []))
        except ClientError as e:
            logger.error(f"Failed to list hosted zones: {e}")
            raise
        return zones

    @rate_limit_aws
    def upsert_record(self, zone_id: str, name: str, record_type: str, value: str, ttl: int) -> None:
        """Create or replace a single-value resource record set.

        Args:
            zone_id: Hosted zone ID without the /hostedzone/ prefix
            name: Record name
            record_type: Record type (CNAME for ACM validation)
            value: Record value
            ttl: Record TTL in seconds
        """
        change_batch = {
            "Comment": "ACM DNS validation",
            "Changes": [
                {
                    "Action": "UPSERT",
                    "ResourceRecordSet": {
                        "Name": name,
                        "Type": record_type,
                        "TTL": ttl,
                        "ResourceRecords": [{"Value": value}],
                    },
                }
            ],
        }
        try:
            with track_api_call("route53", "change_resource_record_sets"):
                self.client.change_resource_record_sets(HostedZoneId=zone_id, ChangeBatch=change_batch)
        except ClientError as e:
            logger.error(f"Failed to upsert {record_type} record {name} in zone {zone_id}: {e}")
            raise

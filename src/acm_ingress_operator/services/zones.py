"""Hosted zone resolution by longest suffix match."""

from __future__ import annotations

import logging

from ..constants import HOSTED_ZONE_ID_PREFIX
from ..exceptions import ZoneNotFoundError
from .base import DnsProvider

logger = logging.getLogger(__name__)


class HostedZoneResolver:
    """Finds the hosted zone a domain's records belong in."""

    def __init__(self, dns: DnsProvider) -> None:
        self.dns = dns

    def find_zone_id(self, domain: str) -> str:
        """Return the ID of the zone whose name is the longest suffix of ``domain``.

        Zones are listed on every call. Among zones of equal length the first
        one listed wins.

        Raises:
            ZoneNotFoundError: No zone name is a suffix of the domain
        """
        matched_zone_id: str | None = None
        longest_match_len = 0

        for zone in self.dns.list_hosted_zones():
            zone_name = zone.get("Name", "")
            if zone_name.endswith("."):
                zone_name = zone_name[:-1]
            if domain.endswith(zone_name) and len(zone_name) > longest_match_len:
                matched_zone_id = zone.get("Id", "")
                longest_match_len = len(zone_name)

        if not matched_zone_id:
            raise ZoneNotFoundError(domain)

        if matched_zone_id.startswith(HOSTED_ZONE_ID_PREFIX):
            matched_zone_id = matched_zone_id[len(HOSTED_ZONE_ID_PREFIX):]
        logger.debug(f"Resolved hosted zone {matched_zone_id} for {domain}")
        return matched_zone_id

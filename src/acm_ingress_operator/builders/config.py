"""Builder for Ingress configurations."""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from ..constants import (
    ANNOTATION_CERT_TTL,
    ANNOTATION_DELETE_CERT,
    ANNOTATION_DOMAIN,
    ANNOTATION_FALLBACK_WILDCARD,
    ANNOTATION_MANAGED,
    ANNOTATION_REUSE_EXISTING,
    ANNOTATION_SAN,
    ANNOTATION_WILDCARD,
    ANNOTATION_ZONE_ID,
    DEFAULT_CERT_TTL,
)
from ..models import IngressConfig

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta | None:
    """Parse a duration such as "1h30m", "8760h" or "2.5s".

    Returns None when the string is not a valid duration.
    """
    text = value
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        return None

    seconds = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            return None
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    try:
        return timedelta(seconds=sign * seconds)
    except OverflowError:
        return None


def _parse_bool(annotations: dict[str, str], key: str, warnings: list[str]) -> bool:
    raw = annotations.get(key)
    if raw is None:
        return False
    lowered = raw.lower()
    if lowered not in ("true", "false"):
        warnings.append(f"{key}={raw!r} is not a boolean, treating it as false")
    return lowered == "true"


def _parse_sans(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [san.strip() for san in raw.split(",") if san.strip()]


def create_config_from_annotations(annotations: dict[str, Any] | None) -> IngressConfig:
    """Create an IngressConfig from an Ingress's annotations.

    Malformed values never raise. They fall back to the default and a
    human-readable note is added to ``IngressConfig.warnings``.

    Args:
        annotations: Ingress metadata.annotations, may be None

    Returns:
        Resolved configuration
    """
    annotations = annotations or {}
    warnings: list[str] = []

    managed = _parse_bool(annotations, ANNOTATION_MANAGED, warnings)

    # Reuse is the default; only the exact string "false" turns it off
    raw_reuse = annotations.get(ANNOTATION_REUSE_EXISTING)
    reuse_existing = raw_reuse != "false"
    if raw_reuse is not None and raw_reuse not in ("true", "false"):
        warnings.append(f"{ANNOTATION_REUSE_EXISTING}={raw_reuse!r} is not \"true\" or \"false\", treating it as true")

    cert_ttl = DEFAULT_CERT_TTL
    raw_ttl = annotations.get(ANNOTATION_CERT_TTL)
    if raw_ttl is not None:
        parsed = parse_duration(raw_ttl)
        if parsed is None:
            warnings.append(f"{ANNOTATION_CERT_TTL}={raw_ttl!r} is not a valid duration, using the default")
        else:
            cert_ttl = parsed

    return IngressConfig(
        managed=managed,
        domain_override=annotations.get(ANNOTATION_DOMAIN) or None,
        zone_id=annotations.get(ANNOTATION_ZONE_ID) or None,
        wildcard=_parse_bool(annotations, ANNOTATION_WILDCARD, warnings),
        sans=_parse_sans(annotations.get(ANNOTATION_SAN)),
        cert_ttl=cert_ttl,
        reuse_existing=reuse_existing,
        delete_cert_on_delete=_parse_bool(annotations, ANNOTATION_DELETE_CERT, warnings),
        fallback_wildcard=_parse_bool(annotations, ANNOTATION_FALLBACK_WILDCARD, warnings),
        warnings=warnings,
    )

"""JSON log lines for Ingress reconciliation."""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any

from .utils.errors import sanitize_error_message

# SDK loggers that are chatty at INFO (request signing, connection pools)
_NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "kubernetes")


def setup_structured_logging(level: str | None = None) -> None:
    """Send one JSON document per line to stdout.

    Args:
        level: Root log level name; defaults to LOG_LEVEL or INFO
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    resource_name: str,
    namespace: str,
    uid: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log one reconcile step of a resource as a JSON object.

    Extra keyword fields are added as-is unless they are None. The message
    is redacted like error text since it often embeds certificate ARNs.
    """
    entry = {
        "controller": controller,
        "resource": resource_kind,
        "namespace": namespace,
        "name": resource_name,
        "uid": uid,
        "event": event,
        "reason": reason,
        "message": sanitize_error_message(message),
    }
    entry.update({key: value for key, value in kwargs.items() if value is not None})
    if logger.isEnabledFor(level):
        logger.log(level, json.dumps(entry, default=str))

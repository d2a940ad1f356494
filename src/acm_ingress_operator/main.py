"""Main entry point for the ACM Ingress Operator."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any

import kopf

from . import health
from . import logging as structured_logging
from .builders.config import create_config_from_annotations
from .constants import (
    ANNOTATION_CERTIFICATE_ARN,
    INGRESS_GROUP,
    INGRESS_PLURAL,
    INGRESS_VERSION,
    RESYNC_INTERVAL_SECONDS,
    VALIDATION_POLL_INTERVAL_SECONDS,
)
from .exceptions import MissingDomainError, ReconcileCancelledError
from .handlers.ingress import IngressHandler
from .handlers.shared import get_k8s_client
from .services.aws import AcmClient, Route53Client
from .services.certificates import CertificateManager
from .services.validation import DnsValidator
from .tracing import initialize_tracing
from .utils.errors import sanitize_exception
from .utils.locks import DomainLocks

logger = logging.getLogger(__name__)

# Set on operator shutdown; interrupts validation polling
shutdown_event = threading.Event()

_handler: IngressHandler | None = None
_handler_lock = threading.Lock()


def build_handler() -> IngressHandler:
    """Wire the Kubernetes and AWS clients into an IngressHandler."""
    acm = AcmClient(region=os.getenv("AWS_REGION"))
    dns = Route53Client()
    certificates = CertificateManager(
        acm,
        DnsValidator(acm, dns),
        domain_locks=DomainLocks(),
        stop_event=shutdown_event,
    )
    return IngressHandler(get_k8s_client(), certificates)


def get_handler() -> IngressHandler:
    """Return the process-wide IngressHandler, building it on first use."""
    global _handler
    with _handler_lock:
        if _handler is None:
            _handler = build_handler()
        return _handler


def is_managed(annotations: dict[str, Any], **_: Any) -> bool:
    """kopf filter: only managed Ingresses are handled at all."""
    return create_config_from_annotations(annotations).managed


def only_certificate_annotation_changed(diff: Any) -> bool:
    """True when an update touches nothing but the annotation this operator writes."""
    if not diff:
        return False
    for item in diff:
        field = tuple(item[1])
        if field != ("metadata", "annotations", ANNOTATION_CERTIFICATE_ARN):
            return False
    return True


def run_reconcile(namespace: str, name: str) -> None:
    """Run one reconcile pass and translate failures for kopf.

    Raises:
        kopf.PermanentError: The Ingress is misconfigured; retrying cannot help
        kopf.TemporaryError: Anything else; kopf retries after a delay
    """
    try:
        result = get_handler().reconcile(namespace, name)
    except MissingDomainError as e:
        raise kopf.PermanentError(str(e)) from e
    except ReconcileCancelledError as e:
        raise kopf.TemporaryError(str(e), delay=VALIDATION_POLL_INTERVAL_SECONDS) from e
    except Exception as e:
        raise kopf.TemporaryError(f"Reconciliation failed: {sanitize_exception(e)}") from e
    logger.debug(f"Reconciled ingress {namespace}/{name}: {result.state}")


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Ingress status cannot hold kopf's progress, so keep it in annotations
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = logging.WARNING
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = int(os.getenv("MAX_WORKERS", "4"))

    metrics_port = int(os.getenv("METRICS_PORT", "8080"))
    health.start_metrics_server(metrics_port)


@kopf.on.cleanup()
def stop(**_: Any) -> None:
    """Interrupt in-flight validation waits so workers can exit."""
    shutdown_event.set()


@kopf.on.create(INGRESS_GROUP, INGRESS_VERSION, INGRESS_PLURAL, when=is_managed)
@kopf.on.resume(INGRESS_GROUP, INGRESS_VERSION, INGRESS_PLURAL, when=is_managed)
def handle_ingress(namespace: str, name: str, **_: Any) -> None:
    """Handle Ingress creation and operator restarts."""
    run_reconcile(namespace, name)


@kopf.on.update(INGRESS_GROUP, INGRESS_VERSION, INGRESS_PLURAL, when=is_managed)
def handle_ingress_update(namespace: str, name: str, diff: Any, **_: Any) -> None:
    """Handle Ingress changes, ignoring the certificate ARN this operator wrote."""
    if only_certificate_annotation_changed(diff):
        return
    run_reconcile(namespace, name)


@kopf.timer(
    INGRESS_GROUP,
    INGRESS_VERSION,
    INGRESS_PLURAL,
    interval=RESYNC_INTERVAL_SECONDS,
    initial_delay=RESYNC_INTERVAL_SECONDS,
    when=is_managed,
)
def resync_ingress(namespace: str, name: str, **_: Any) -> None:
    """Re-evaluate the certificate periodically to pick up out-of-band changes."""
    run_reconcile(namespace, name)


@kopf.on.delete(INGRESS_GROUP, INGRESS_VERSION, INGRESS_PLURAL, optional=True, when=is_managed)
def handle_ingress_delete(namespace: str, name: str, **_: Any) -> None:
    """Clean up the certificate and release the finalizer of a deleted Ingress."""
    run_reconcile(namespace, name)


def main() -> None:
    """Run the operator (equivalent to ``kopf run -m acm_ingress_operator.main``)."""
    kopf.configure(verbose=False)
    kopf.run(clusterwide=True)

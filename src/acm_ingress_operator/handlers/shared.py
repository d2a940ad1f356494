"""Shared Kubernetes API helpers for handlers."""

from __future__ import annotations

import time
from typing import Any

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from .. import metrics
from ..constants import INGRESS_GROUP, INGRESS_PLURAL, INGRESS_VERSION
from ..utils.rate_limit import rate_limit_k8s


def get_k8s_client() -> client.CustomObjectsApi:
    """Get Kubernetes CustomObjectsApi client.

    The generic objects API is used for Ingresses so that objects come back
    as plain dicts, the same shape kopf hands to handlers.

    Returns:
        CustomObjectsApi instance
    """
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()

    return client.CustomObjectsApi()


def get_ingress(api: Any, namespace: str, name: str) -> dict[str, Any] | None:
    """Read an Ingress.

    Args:
        api: Kubernetes CustomObjectsApi instance
        namespace: Ingress namespace
        name: Ingress name

    Returns:
        Ingress object, or None if it no longer exists

    Raises:
        ApiException: On any API error other than 404
    """
    start_time = time.time()
    try:
        ingress = rate_limit_k8s(api.get_namespaced_custom_object)(
            group=INGRESS_GROUP,
            version=INGRESS_VERSION,
            namespace=namespace,
            plural=INGRESS_PLURAL,
            name=name,
        )
        metrics.api_call_total.labels(api_type="k8s", operation="get_ingress", result="success").inc()
        return ingress
    except ApiException as e:
        if e.status == 404:
            metrics.api_call_total.labels(api_type="k8s", operation="get_ingress", result="not_found").inc()
            return None
        metrics.api_call_total.labels(api_type="k8s", operation="get_ingress", result="error").inc()
        raise
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(api_type="k8s", operation="get_ingress").observe(duration)


def patch_ingress(api: Any, namespace: str, name: str, body: dict[str, Any]) -> dict[str, Any]:
    """Apply a JSON merge patch to an Ingress.

    Args:
        api: Kubernetes CustomObjectsApi instance
        namespace: Ingress namespace
        name: Ingress name
        body: Merge patch document

    Returns:
        The patched Ingress
    """
    start_time = time.time()
    try:
        patched = rate_limit_k8s(api.patch_namespaced_custom_object)(
            group=INGRESS_GROUP,
            version=INGRESS_VERSION,
            namespace=namespace,
            plural=INGRESS_PLURAL,
            name=name,
            body=body,
        )
        metrics.api_call_total.labels(api_type="k8s", operation="patch_ingress", result="success").inc()
        return patched
    except Exception:
        metrics.api_call_total.labels(api_type="k8s", operation="patch_ingress", result="error").inc()
        raise
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(api_type="k8s", operation="patch_ingress").observe(duration)

"""Kubernetes operator issuing ACM certificates for annotated Ingresses."""

__version__ = "0.1.0"

"""Resource handlers."""

from .base import BaseHandler
from .ingress import IngressHandler, resolve_domain

__all__ = ["BaseHandler", "IngressHandler", "resolve_domain"]

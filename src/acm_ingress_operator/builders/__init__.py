"""Builders turning Kubernetes objects into operator configuration."""

from .config import create_config_from_annotations, parse_duration

__all__ = ["create_config_from_annotations", "parse_duration"]

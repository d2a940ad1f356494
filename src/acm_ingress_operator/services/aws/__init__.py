"""boto3-backed clients for ACM and Route 53."""

from .acm import AcmClient
from .route53 import Route53Client

__all__ = ["AcmClient", "Route53Client"]

"""Constants for the ACM Ingress Operator."""

from datetime import timedelta

# Watched resource
INGRESS_GROUP = "networking.k8s.io"
INGRESS_VERSION = "v1"
INGRESS_PLURAL = "ingresses"
KIND_INGRESS = "Ingress"

# Annotations
ANNOTATION_PREFIX = "acm.tedens.dev"
ANNOTATION_MANAGED = f"{ANNOTATION_PREFIX}/managed"
ANNOTATION_DOMAIN = f"{ANNOTATION_PREFIX}/domain"
ANNOTATION_ZONE_ID = f"{ANNOTATION_PREFIX}/zone-id"
ANNOTATION_WILDCARD = f"{ANNOTATION_PREFIX}/wildcard"
ANNOTATION_REUSE_EXISTING = f"{ANNOTATION_PREFIX}/reuse-existing"
ANNOTATION_DELETE_CERT = f"{ANNOTATION_PREFIX}/delete-cert-on-ingress-delete"
ANNOTATION_FALLBACK_WILDCARD = f"{ANNOTATION_PREFIX}/fallback-wildcard"
ANNOTATION_SAN = f"{ANNOTATION_PREFIX}/san"
ANNOTATION_CERT_TTL = f"{ANNOTATION_PREFIX}/cert-ttl"

# Read by the AWS load balancer controller
ANNOTATION_CERTIFICATE_ARN = "alb.ingress.kubernetes.io/certificate-arn"

# Finalizers
FINALIZER = f"{ANNOTATION_PREFIX}/finalizer"

CONTROLLER_NAME = "acm-ingress-operator"

# Certificate defaults
DEFAULT_CERT_TTL = timedelta(days=365)
CERT_TAG_KEY = "ManagedBy"
CERT_TAG_VALUE = "acm-manager"
CERT_STATUS_ISSUED = "ISSUED"
CERT_STATUS_PENDING = "PENDING_VALIDATION"
CERT_STATUS_FAILED = "FAILED"
REUSABLE_CERT_STATUSES = [CERT_STATUS_ISSUED, CERT_STATUS_PENDING]

# Timing
VALIDATION_POLL_INTERVAL_SECONDS = 15.0
VALIDATION_TIMEOUT_SECONDS = 10 * 60.0
VALIDATION_PROGRESS_EVERY = 4
RESYNC_INTERVAL_SECONDS = 12 * 60 * 60.0
VALIDATION_RECORD_TTL = 300

HOSTED_ZONE_ID_PREFIX = "/hostedzone/"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_ANNOTATION_INVALID = "AnnotationInvalid"
EVENT_REASON_CERTIFICATE_REUSED = "CertificateReused"
EVENT_REASON_CERTIFICATE_REQUESTED = "CertificateRequested"
EVENT_REASON_VALIDATION_RECORDS_CREATED = "ValidationRecordsCreated"
EVENT_REASON_CERTIFICATE_ISSUED = "CertificateIssued"
EVENT_REASON_CERTIFICATE_ATTACHED = "CertificateAttached"
EVENT_REASON_CERTIFICATE_DELETED = "CertificateDeleted"

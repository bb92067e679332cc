from __future__ import annotations

from prometheus_client import Counter

# Privileged user management
user_provisioning_total = Counter(
    "portal_user_provisioning_total",
    "Privileged user operations by operation and outcome",
    labelnames=("operation", "outcome"),
)
user_provisioning_rollbacks_total = Counter(
    "portal_user_provisioning_rollbacks_total",
    "Compensating account deletions after a failed role assignment",
)

# Documents
document_uploads_total = Counter(
    "portal_document_uploads_total",
    "Competition document files stored",
)

# Auto-archive
competitions_auto_archived_total = Counter(
    "portal_competitions_auto_archived_total",
    "Competitions archived automatically after their end date",
)

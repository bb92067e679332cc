from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Optional

from django.db import DatabaseError
from django.utils import timezone

from .models import AuditLog

logger = logging.getLogger(__name__)


def record_audit(
    actor,
    action: str,
    target_type: str,
    target_id,
    data: Optional[dict[str, Any]] = None,
    ip: Optional[str] = None,
) -> Optional[AuditLog]:
    """
    Append an audit entry chained to the previous entry for the same target.

    The hash covers the previous hash, the actor, the action, the target and the
    payload, so tampering with any row breaks the chain for that target.
    Audit failures are logged and never abort the operation being audited.
    """
    target_id = str(target_id)
    data = data or {}
    actor_id = getattr(actor, "id", None) if actor is not None and getattr(actor, "is_authenticated", False) else None
    try:
        prev = AuditLog.objects.filter(target_type=target_type, target_id=target_id).order_by("-timestamp", "-id").first()
        prev_hash = prev.hash if prev else ""
        now = timezone.now()
        payload = "|".join(
            [
                prev_hash,
                str(actor_id),
                action,
                target_type,
                target_id,
                json.dumps(data, sort_keys=True, default=str),
                now.isoformat(),
            ]
        )
        digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
        return AuditLog.objects.create(
            actor_user_id=actor_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            timestamp=now,
            ip=ip,
            data=data,
            prev_hash=prev_hash,
            hash=digest,
        )
    except DatabaseError:
        logger.exception("Could not record audit entry %s for %s:%s", action, target_type, target_id)
        return None


def client_ip(request) -> Optional[str]:
    if request is None:
        return None
    return request.META.get("REMOTE_ADDR")

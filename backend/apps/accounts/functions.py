"""
Privileged user-management operations.

Each handler receives the already-authorized ``CallerContext`` (see guards) and
the request payload, and returns the JSON-able success payload. Failures are
raised as ``apps.core.errors`` exceptions and rendered as ``{"error": ...}``.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.utils.translation import gettext_lazy as _

from apps.core.audit import record_audit
from apps.core.errors import NotFound, StoreError, ValidationFailed, validated_data
from apps.core.metrics import user_provisioning_rollbacks_total, user_provisioning_total

from .guards import CallerContext, require_role
from .models import UserRole
from .provider import AuthProvider, get_provider, institutional_domain, is_institutional_email, normalize_email
from .serializers import CreateUserSerializer, DeleteUserSerializer

logger = logging.getLogger(__name__)


def assign_role(user_id: int, role: str) -> UserRole:
    with transaction.atomic():
        return UserRole.objects.create(user_id=user_id, role=role)


def create_user(caller: CallerContext, payload: dict, provider: Optional[AuthProvider] = None) -> dict:
    require_role(caller, UserRole.ROLE_ADMIN, message=_("Nu aveți permisiunea de a crea utilizatori."))
    provider = provider or get_provider()

    values = validated_data(CreateUserSerializer(data=payload))
    email = normalize_email(values["email"])
    password = values["password"]
    role = values["role"]

    if not is_institutional_email(email):
        raise ValidationFailed(_("Email-ul trebuie să fie @%(domain)s") % {"domain": institutional_domain()})
    try:
        validate_password(password)
    except DjangoValidationError as e:
        raise ValidationFailed(" ".join(e.messages))

    try:
        user = provider.create_user(email, password, email_confirm=True)
    except DatabaseError:
        logger.exception("Account creation failed for %s", email)
        user_provisioning_total.labels(operation="create", outcome="error").inc()
        raise StoreError(_("Eroare la crearea utilizatorului."))

    try:
        assign_role(user.pk, role)
    except DatabaseError:
        logger.exception("Role assignment failed for %s; removing the new account", email)
        user_provisioning_rollbacks_total.inc()
        user_provisioning_total.labels(operation="create", outcome="rolled_back").inc()
        try:
            provider.delete_user(user.pk)
        except DatabaseError:
            logger.exception("Compensating delete failed; account id=%s is left without a role", user.pk)
        raise StoreError(_("Eroare la atribuirea rolului."))

    record_audit(caller.user, "user_create", "user", user.pk, data={"email": email, "role": role}, ip=caller.ip)
    user_provisioning_total.labels(operation="create", outcome="ok").inc()
    return {
        "success": True,
        "user": {"id": user.pk, "email": user.email},
        "message": str(_("Utilizator creat cu succes.")),
    }


def list_users(caller: CallerContext, payload: Optional[dict] = None, provider: Optional[AuthProvider] = None) -> dict:
    require_role(caller, UserRole.ROLE_ADMIN, message=_("Nu aveți permisiunea de a gestiona utilizatori."))
    provider = provider or get_provider()
    try:
        roles = list(UserRole.objects.all())
    except DatabaseError:
        logger.exception("Could not read user roles")
        raise StoreError()

    users = []
    # One lookup per role row; staff lists are a handful of accounts.
    for row in roles:
        account = provider.get_user_by_id(row.user_id)
        if account is None:
            logger.warning("Role row %s references missing account %s", row.id, row.user_id)
            continue
        users.append({"id": row.id, "user_id": row.user_id, "role": row.role, "email": account.email})
    return {"users": users}


def delete_user(caller: CallerContext, payload: dict, provider: Optional[AuthProvider] = None) -> dict:
    require_role(caller, UserRole.ROLE_ADMIN, message=_("Nu aveți permisiunea de a gestiona utilizatori."))
    provider = provider or get_provider()

    raw_id = payload.get("user_id", payload.get("userId"))
    user_id = validated_data(DeleteUserSerializer(data={"user_id": raw_id}))["user_id"]
    if user_id == caller.user_id:
        raise ValidationFailed(_("Nu vă puteți șterge propriul cont."))

    try:
        with transaction.atomic():
            roles_deleted, _details = UserRole.objects.filter(user_id=user_id).delete()
            account_deleted = provider.delete_user(user_id)
            if not roles_deleted and not account_deleted:
                raise NotFound(_("Utilizatorul nu a fost găsit."))
    except DatabaseError:
        logger.exception("Deleting account id=%s failed", user_id)
        user_provisioning_total.labels(operation="delete", outcome="error").inc()
        raise StoreError(_("Eroare la ștergerea utilizatorului."))

    record_audit(caller.user, "user_delete", "user", user_id, ip=caller.ip)
    user_provisioning_total.labels(operation="delete", outcome="ok").inc()
    return {"success": True, "message": str(_("Utilizator șters."))}

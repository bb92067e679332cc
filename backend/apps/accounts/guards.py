from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from django.utils.translation import gettext_lazy as _

from apps.core.audit import client_ip
from apps.core.errors import Forbidden, Unauthenticated

from .models import UserRole, role_for
from .provider import AuthProvider, get_provider


@dataclass(frozen=True)
class CallerContext:
    """Who is calling, resolved once per request and passed to handlers explicitly."""

    user: Any
    role: Optional[str]
    ip: Optional[str] = None

    @property
    def user_id(self):
        return self.user.pk

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ROLE_ADMIN

    @property
    def has_panel_access(self) -> bool:
        return self.role in (UserRole.ROLE_ADMIN, UserRole.ROLE_EDITOR)


def bearer_token(request) -> Optional[str]:
    header = request.META.get("HTTP_AUTHORIZATION", "")
    if not header:
        return None
    scheme, _sep, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def caller_from_user(user, request=None) -> CallerContext:
    return CallerContext(user=user, role=role_for(user), ip=client_ip(request))


def resolve_caller(request, provider: Optional[AuthProvider] = None) -> CallerContext:
    """Resolve the bearer token of ``request`` to a caller; raises Unauthenticated."""
    if "HTTP_AUTHORIZATION" not in request.META:
        raise Unauthenticated(_("Nu sunteți autentificat."))
    token = bearer_token(request)
    user = (provider or get_provider()).get_user(token) if token else None
    if user is None:
        raise Unauthenticated(_("Token invalid."))
    return caller_from_user(user, request)


def require_role(caller: CallerContext, *roles: str, message=None) -> CallerContext:
    """Allow the caller through only if their role is one of ``roles``."""
    if caller.role not in roles:
        raise Forbidden(message or _("Nu aveți permisiunea necesară."))
    return caller


def require_admin(request, provider: Optional[AuthProvider] = None, message=None) -> CallerContext:
    return require_role(resolve_caller(request, provider), UserRole.ROLE_ADMIN, message=message)

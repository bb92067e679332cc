from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError, transaction
from django.utils.crypto import get_random_string
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.core.errors import Unauthenticated, ValidationFailed

logger = logging.getLogger(__name__)
User = get_user_model()

# Unambiguous characters only (no 0/O, 1/l/I)
TEMP_PASSWORD_CHARS = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789"


def normalize_email(email) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def institutional_domain() -> str:
    return settings.INSTITUTIONAL_EMAIL_DOMAIN.lstrip("@").lower()


def is_institutional_email(email) -> bool:
    email = normalize_email(email)
    local, sep, domain = email.rpartition("@")
    return bool(local) and bool(sep) and domain == institutional_domain()


def generate_temporary_password(length: int = 12) -> str:
    return get_random_string(length, TEMP_PASSWORD_CHARS)


class AuthProvider:
    """
    Account store and token issuer behind the admin panel.

    Accounts are Django users keyed by email (the email doubles as username);
    bearer tokens are SimpleJWT access tokens. The admin half of the API
    (create/delete/lookup) is only called from the privileged functions.
    """

    def __init__(self):
        self._jwt = JWTAuthentication()

    # Sessions / tokens

    def get_user(self, token: str):
        """Resolve a bearer token to an active account, or None."""
        if not token:
            return None
        try:
            validated = self._jwt.get_validated_token(token.encode("utf-8"))
            return self._jwt.get_user(validated)
        except (InvalidToken, TokenError, AuthenticationFailed):
            return None

    def check_credentials(self, email: str, password: str, request=None):
        """Return the account for ``email``/``password``; raises Unauthenticated."""
        email = normalize_email(email)
        if not is_institutional_email(email):
            raise Unauthenticated(
                _("Doar utilizatorii cu email @%(domain)s pot accesa panoul de administrare.")
                % {"domain": institutional_domain()}
            )
        user = authenticate(request, username=email, password=password)
        if user is None:
            raise Unauthenticated(_("Email sau parolă incorectă."))
        return user

    def sign_in(self, email: str, password: str) -> dict:
        return self.issue_tokens(self.check_credentials(email, password))

    def issue_tokens(self, user) -> dict:
        refresh = RefreshToken.for_user(user)
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
            "user": {"id": user.pk, "email": user.email},
        }

    # Admin API

    def create_user(self, email: str, password: str, email_confirm: bool = True):
        email = normalize_email(email)
        if User.objects.filter(username__iexact=email).exists():
            raise ValidationFailed(_("Există deja un cont cu acest email."))
        try:
            with transaction.atomic():
                user = User(username=email, email=email, is_active=email_confirm)
                user.set_password(password)
                user.save()
        except IntegrityError:
            raise ValidationFailed(_("Există deja un cont cu acest email."))
        logger.info("Created account %s (id=%s)", email, user.pk)
        return user

    def delete_user(self, user_id) -> bool:
        deleted, _details = User.objects.filter(pk=user_id).delete()
        if deleted:
            logger.info("Deleted account id=%s", user_id)
        return bool(deleted)

    def get_user_by_id(self, user_id) -> Optional[object]:
        return User.objects.filter(pk=user_id).first()


def get_provider() -> AuthProvider:
    return AuthProvider()

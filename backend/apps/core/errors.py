from __future__ import annotations

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException


class Unauthenticated(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Nu sunteți autentificat.")
    default_code = "unauthenticated"


class Forbidden(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Nu aveți permisiunea necesară.")
    default_code = "forbidden"


class ValidationFailed(APIException):
    """
    Malformed input. ``fields`` optionally carries per-field messages for forms.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Date invalide.")
    default_code = "invalid"

    def __init__(self, detail=None, code=None, fields: dict | None = None):
        super().__init__(detail, code)
        self.fields = fields or {}


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("Resursa solicitată nu a fost găsită.")
    default_code = "not_found"


class StoreError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("Eroare la salvarea datelor.")
    default_code = "store_error"


def validated_data(serializer) -> dict:
    """Run ``serializer`` and return its data, or raise ValidationFailed with the first message."""
    if not serializer.is_valid():
        errors = serializer.errors
        first = next(iter(errors.values()))
        message = first[0] if isinstance(first, list) and first else str(first)
        raise ValidationFailed(str(message), fields=errors)
    return serializer.validated_data

from __future__ import annotations

from rest_framework import serializers

from .models import UserRole

CREDENTIALS_REQUIRED = "Email-ul și parola sunt obligatorii."
INVALID_USER_ID = "Identificator de utilizator invalid."


def _messages(required: str, invalid: str) -> dict:
    return {"required": required, "blank": required, "null": required, "invalid": invalid}


class LoginSerializer(serializers.Serializer):
    # Domain and credential checks happen in the provider, with their own messages
    email = serializers.CharField(error_messages=_messages(CREDENTIALS_REQUIRED, "Email invalid."))
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        error_messages=_messages(CREDENTIALS_REQUIRED, "Parolă invalidă."),
    )


class CreateUserSerializer(serializers.Serializer):
    email = serializers.CharField(error_messages=_messages("Email-ul este obligatoriu.", "Email invalid."))
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        error_messages=_messages("Parola este obligatorie.", "Parolă invalidă."),
    )
    role = serializers.ChoiceField(
        choices=[UserRole.ROLE_ADMIN, UserRole.ROLE_EDITOR],
        error_messages={"required": "Rol invalid.", "null": "Rol invalid.", "invalid_choice": "Rol invalid."},
    )


class DeleteUserSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(
        error_messages={
            "required": INVALID_USER_ID,
            "null": INVALID_USER_ID,
            "invalid": INVALID_USER_ID,
            "max_string_length": INVALID_USER_ID,
        }
    )

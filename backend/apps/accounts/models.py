from __future__ import annotations

from django.db import models


class UserRole(models.Model):
    """
    Admin-panel role of an auth account.

    ``user_id`` is a plain reference to the auth provider's account id: roles do
    not own accounts and accounts are managed through the provider only.
    """

    ROLE_ADMIN = "admin"
    ROLE_EDITOR = "editor"
    ROLE_CHOICES = [(ROLE_ADMIN, "Administrator"), (ROLE_EDITOR, "Editor")]

    user_id = models.BigIntegerField(unique=True)
    role = models.CharField(max_length=16, choices=ROLE_CHOICES)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.user_id} ({self.role})"


def role_for(user) -> str | None:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return UserRole.objects.filter(user_id=user.pk).values_list("role", flat=True).first()

from apps.accounts.models import UserRole, role_for


def staff_role(request):
    """Expose the admin-panel role of the signed-in user to every template."""
    role = role_for(getattr(request, "user", None))
    return {"staff_role": role, "staff_is_admin": role == UserRole.ROLE_ADMIN}

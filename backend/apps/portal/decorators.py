from __future__ import annotations

from functools import wraps

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from apps.accounts.guards import caller_from_user


def panel_required(view):
    """
    Admin console pages: anonymous or role-less users go to the login page.

    The resolved ``CallerContext`` is attached to the request as ``request.caller``.
    """

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        caller = caller_from_user(request.user, request)
        if not caller.has_panel_access:
            return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)
        request.caller = caller
        return view(request, *args, **kwargs)

    return wrapper


def admin_role_required(view):
    @wraps(view)
    @panel_required
    def wrapper(request, *args, **kwargs):
        if not request.caller.is_admin:
            messages.error(request, "Doar administratorii pot gestiona utilizatorii.")
            return redirect("portal:admin-dashboard")
        return view(request, *args, **kwargs)

    return wrapper

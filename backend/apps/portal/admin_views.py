"""
Server-rendered admin console (/admin/...).

Every page is wrapped in ``panel_required``; writes go through the same
service and privileged-function layers as the REST API, so validation,
cache invalidation and audit logging behave identically.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login as auth_login, logout as auth_logout
from django.http import Http404
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from apps.accounts import functions
from apps.accounts.guards import caller_from_user
from apps.accounts.provider import generate_temporary_password, get_provider
from apps.competitions import services
from apps.competitions.filters import CompetitionFilter
from apps.competitions.models import Competition
from apps.core.errors import NotFound, StoreError, Unauthenticated, ValidationFailed

from .decorators import admin_role_required, panel_required
from .forms import CompetitionForm, DocumentForm, LoginForm, UserCreateForm, apply_errors

logger = logging.getLogger(__name__)


def _safe_next(request, fallback: str) -> str:
    target = request.POST.get("next") or request.GET.get("next")
    if target and url_has_allowed_host_and_scheme(target, allowed_hosts={request.get_host()}):
        return target
    return fallback


def login_view(request):
    if caller_from_user(request.user, request).has_panel_access:
        return redirect("portal:admin-dashboard")

    form = LoginForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            user = get_provider().check_credentials(
                form.cleaned_data["email"], form.cleaned_data["password"], request=request
            )
        except Unauthenticated as e:
            form.add_error(None, str(e.detail))
        else:
            if caller_from_user(user).has_panel_access:
                auth_login(request, user)
                logger.info("Admin console sign-in for %s", user.email)
                return redirect(_safe_next(request, "/admin/"))
            form.add_error(None, "Contul nu are acces la panoul de administrare.")
    return render(request, "portal/admin/login.html", {"form": form, "next": _safe_next(request, "")})


@require_POST
def logout_view(request):
    auth_logout(request)
    return redirect(settings.LOGIN_URL)


@panel_required
def dashboard(request):
    return render(request, "portal/admin/dashboard.html", {"summary": services.dashboard_summary()})


@panel_required
def competition_list(request):
    filterset = CompetitionFilter(request.GET, queryset=Competition.objects.order_by("-created_at", "-id"))
    return render(
        request,
        "portal/admin/competition_list.html",
        {"competitions": filterset.qs, "query": request.GET.get("q", ""), "status": request.GET.get("status", "")},
    )


@panel_required
def competition_create(request):
    form = CompetitionForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            competition = services.create_competition(form.payload(), actor=request.user)
        except ValidationFailed as e:
            apply_errors(form, e)
        except StoreError as e:
            form.add_error(None, str(e.detail))
        else:
            messages.success(request, "Concursul a fost creat.")
            return redirect("portal:admin-competition-edit", id=competition.pk)
    return render(request, "portal/admin/competition_form.html", {"form": form, "competition": None})


def _edit_context(competition, form=None, document_form=None):
    return {
        "competition": competition,
        "form": form or CompetitionForm.for_competition(competition),
        "document_form": document_form or DocumentForm(),
        "documents": services.list_documents(competition.pk),
    }


@panel_required
def competition_edit(request, id: int):
    """
    Competition editor with the document manager.

    POSTs carry an ``action``: save, delete, upload, update_document,
    delete_document or move.
    """
    try:
        competition = services.get_competition_by_id(id)
    except NotFound:
        raise Http404

    if request.method != "POST":
        return render(request, "portal/admin/competition_form.html", _edit_context(competition))

    action = request.POST.get("action", "save")
    back = redirect("portal:admin-competition-edit", id=competition.pk)

    if action == "save":
        form = CompetitionForm.for_competition(competition, data=request.POST)
        if form.is_valid():
            try:
                services.update_competition(competition.pk, form.payload(), actor=request.user)
            except ValidationFailed as e:
                apply_errors(form, e)
            except StoreError as e:
                form.add_error(None, str(e.detail))
            else:
                messages.success(request, "Modificările au fost salvate.")
                return back
        return render(request, "portal/admin/competition_form.html", _edit_context(competition, form=form), status=400)

    if action == "delete":
        services.delete_competition(competition.pk, actor=request.user)
        messages.success(request, "Concursul a fost șters.")
        return redirect("portal:admin-competitions")

    if action == "upload":
        document_form = DocumentForm(request.POST, request.FILES)
        if document_form.is_valid():
            try:
                services.create_document(
                    competition.pk, document_form.payload(), upload=request.FILES.get("file"), actor=request.user
                )
            except ValidationFailed as e:
                apply_errors(document_form, e)
            else:
                messages.success(request, "Documentul a fost încărcat.")
                return back
        return render(
            request,
            "portal/admin/competition_form.html",
            _edit_context(competition, document_form=document_form),
            status=400,
        )

    document_id = request.POST.get("document_id")
    try:
        if action == "update_document":
            document_form = DocumentForm(request.POST, request.FILES)
            if not document_form.is_valid():
                messages.error(request, "Titlul documentului este obligatoriu.")
                return back
            services.update_document(
                document_id,
                document_form.payload(),
                upload=request.FILES.get("file"),
                actor=request.user,
                competition_id=competition.pk,
            )
            messages.success(request, "Documentul a fost actualizat.")
        elif action == "delete_document":
            services.delete_document(document_id, actor=request.user, competition_id=competition.pk)
            messages.success(request, "Documentul a fost șters.")
        elif action == "move":
            services.move_document(competition.pk, document_id, request.POST.get("direction"))
        else:
            messages.error(request, "Acțiune necunoscută.")
    except (ValidationFailed, NotFound, StoreError) as e:
        messages.error(request, str(e.detail))
    return back


@admin_role_required
def users(request):
    """User manager built on the privileged functions; the caller is the signed-in admin."""
    caller = request.caller
    form = UserCreateForm(initial={"password": generate_temporary_password()})

    if request.method == "POST":
        action = request.POST.get("action")
        if action == "create":
            form = UserCreateForm(request.POST)
            if form.is_valid():
                try:
                    result = functions.create_user(caller, form.cleaned_data)
                except ValidationFailed as e:
                    apply_errors(form, e)
                except StoreError as e:
                    form.add_error(None, str(e.detail))
                else:
                    messages.success(
                        request,
                        f"Utilizatorul {result['user']['email']} a fost creat. "
                        f"Parolă temporară: {form.cleaned_data['password']}",
                    )
                    return redirect("portal:admin-users")
        elif action == "delete":
            try:
                functions.delete_user(caller, {"user_id": request.POST.get("user_id")})
            except (ValidationFailed, NotFound, StoreError) as e:
                messages.error(request, str(e.detail))
            else:
                messages.success(request, "Utilizatorul a fost șters.")
            return redirect("portal:admin-users")

    try:
        listing = functions.list_users(caller)["users"]
    except StoreError as e:
        messages.error(request, str(e.detail))
        listing = []
    return render(request, "portal/admin/users.html", {"form": form, "users": listing, "me": caller.user_id})

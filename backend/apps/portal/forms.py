from __future__ import annotations

from django import forms

from apps.accounts.models import UserRole
from apps.competitions.models import Competition
from apps.core.errors import ValidationFailed

_DATE = forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d")


def apply_errors(form: forms.Form, exc: ValidationFailed) -> None:
    """Copy a ValidationFailed onto ``form``: field messages where the field exists, otherwise a form error."""
    placed = False
    for field, messages in (exc.fields or {}).items():
        if field in form.fields:
            for message in messages if isinstance(messages, (list, tuple)) else [messages]:
                form.add_error(field, str(message))
            placed = True
    if not placed:
        form.add_error(None, str(exc.detail))


class LoginForm(forms.Form):
    email = forms.EmailField(label="Email", widget=forms.EmailInput(attrs={"placeholder": "utilizator@icmpp.ro"}))
    password = forms.CharField(label="Parolă", widget=forms.PasswordInput)


class CompetitionForm(forms.Form):
    title = forms.CharField(
        label="Titlu concurs",
        max_length=300,
        widget=forms.TextInput(attrs={"placeholder": "ex: Concurs pentru post de CS II"}),
    )
    slug = forms.CharField(
        label="Slug (URL)",
        max_length=220,
        required=False,
        help_text="Lăsați gol pentru a fi generat din titlu.",
    )
    description = forms.CharField(
        label="Descriere",
        required=False,
        widget=forms.Textarea(attrs={"rows": 6, "placeholder": "Descrierea concursului..."}),
    )
    status = forms.ChoiceField(label="Status", choices=Competition.STATUS_CHOICES, initial=Competition.STATUS_ACTIVE)
    start_date = forms.DateField(label="Data publicării", required=False, widget=_DATE)
    end_date = forms.DateField(label="Data încheierii", required=False, widget=_DATE)
    keywords = forms.CharField(
        label="Cuvinte cheie",
        max_length=500,
        required=False,
        widget=forms.TextInput(attrs={"placeholder": "CS, cercetător, chimie (separate prin virgulă)"}),
    )
    auto_archive = forms.BooleanField(label="Auto-arhivare", required=False)

    @classmethod
    def for_competition(cls, competition: Competition, data=None):
        initial = {name: getattr(competition, name) for name in cls.base_fields}
        return cls(data=data, initial=initial)

    def payload(self) -> dict:
        data = dict(self.cleaned_data)
        for name in ("start_date", "end_date"):
            data[name] = data[name].isoformat() if data.get(name) else None
        return data


class DocumentForm(forms.Form):
    title = forms.CharField(
        label="Titlu document",
        max_length=300,
        widget=forms.TextInput(attrs={"placeholder": "ex: Anunț rezultate - selecție dosare"}),
    )
    doc_date = forms.DateField(label="Data document", required=False, widget=_DATE)
    description = forms.CharField(
        label="Descriere (opțional)",
        required=False,
        widget=forms.TextInput(attrs={"placeholder": "Descriere scurtă..."}),
    )
    file = forms.FileField(label="Fișier", required=False)

    def payload(self) -> dict:
        data = {k: v for k, v in self.cleaned_data.items() if k != "file"}
        data["doc_date"] = data["doc_date"].isoformat() if data.get("doc_date") else None
        return data


class UserCreateForm(forms.Form):
    email = forms.EmailField(label="Email utilizator", widget=forms.EmailInput(attrs={"placeholder": "utilizator@icmpp.ro"}))
    password = forms.CharField(label="Parolă temporară", min_length=8)
    role = forms.ChoiceField(label="Rol", choices=UserRole.ROLE_CHOICES, initial=UserRole.ROLE_EDITOR)

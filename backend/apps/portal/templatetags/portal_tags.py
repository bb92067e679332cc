from django import template

from apps.competitions.models import Competition
from apps.competitions.storage import extension_of, public_url
from apps.competitions.utils import format_date_long_ro, format_date_ro

register = template.Library()

_STATUS_LABELS = dict(Competition.STATUS_CHOICES)


@register.filter
def date_ro(value):
    return format_date_ro(value)


@register.filter
def date_long_ro(value):
    return format_date_long_ro(value)


@register.filter
def status_label(value):
    return _STATUS_LABELS.get(value, value)


@register.filter
def document_url(document):
    return public_url(getattr(document, "file_path", "")) or ""


@register.filter
def file_extension(document):
    return extension_of(getattr(document, "file_name", "")).upper()

from __future__ import annotations

import logging
import mimetypes
import time
from typing import Optional, Tuple

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.crypto import get_random_string
from django.utils.translation import gettext_lazy as _

from apps.core.errors import ValidationFailed

logger = logging.getLogger(__name__)

_KEY_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"


def extension_of(filename: str) -> str:
    _base, dot, ext = (filename or "").rpartition(".")
    return ext.lower() if dot else ""


def validate_upload(upload) -> None:
    allowed = settings.COMPETITION_DOCUMENT_EXTENSIONS
    if extension_of(upload.name) not in allowed:
        message = _("Format de fișier neacceptat. Formate acceptate: %(formats)s") % {
            "formats": ", ".join(ext.upper() for ext in allowed)
        }
        raise ValidationFailed(message, fields={"file": [message]})


def document_key(competition_id, filename: str) -> str:
    """<prefix>/<competition id>/<millis>-<random>.<ext>"""
    unique = f"{int(time.time() * 1000)}-{get_random_string(9, _KEY_CHARS)}"
    ext = extension_of(filename)
    name = f"{unique}.{ext}" if ext else unique
    return f"{settings.COMPETITION_DOCUMENTS_PREFIX}/{competition_id}/{name}"


def store_document_file(competition_id, upload) -> Tuple[str, str, str]:
    """Save ``upload`` and return (storage key, original file name, content type)."""
    validate_upload(upload)
    key = default_storage.save(document_key(competition_id, upload.name), upload)
    content_type = getattr(upload, "content_type", None) or mimetypes.guess_type(upload.name)[0] or ""
    logger.info("Stored document file %s for competition %s", key, competition_id)
    return key, upload.name, content_type


def public_url(file_path: str) -> Optional[str]:
    if not file_path:
        return None
    return default_storage.url(file_path)


def delete_document_file(file_path: str) -> None:
    if not file_path:
        return
    try:
        default_storage.delete(file_path)
    except Exception:
        # A missing or unreachable object must not block deleting the row
        logger.warning("Could not delete stored file %s", file_path, exc_info=True)

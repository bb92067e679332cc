"""
Data-access layer for competitions and their documents.

Reads go through the Django cache (see ``cache``); model signals invalidate
the affected keys on every write, including cascade deletes. Database
failures surface as ``StoreError``, bad input as ``ValidationFailed``.
"""
from __future__ import annotations

import functools
import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Max
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.audit import record_audit
from apps.core.errors import NotFound, StoreError, ValidationFailed, validated_data
from apps.core.metrics import competitions_auto_archived_total, document_uploads_total

from . import cache as competition_cache
from .models import Competition, CompetitionDocument
from .serializers import CompetitionWriteSerializer, DocumentWriteSerializer, ReorderItemSerializer
from .storage import delete_document_file, store_document_file
from .utils import generate_slug

logger = logging.getLogger(__name__)

STATUSES = (Competition.STATUS_ACTIVE, Competition.STATUS_ARCHIVED)
DIRECTION_UP = "up"
DIRECTION_DOWN = "down"


def _store_errors(func):
    """Turn unexpected database failures into StoreError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError:
            logger.exception("Store failure in %s", func.__name__)
            raise StoreError()

    return wrapper


def _field_error(field: str, message) -> ValidationFailed:
    return ValidationFailed(message, fields={field: [message]})


def _check_status(status: Optional[str]) -> None:
    if status and status not in STATUSES:
        raise ValidationFailed(_("Status invalid."))


# Competitions

@_store_errors
def list_competitions(status: Optional[str] = None) -> List[Competition]:
    """Competitions newest first, optionally only those with ``status``."""
    _check_status(status)

    def load():
        qs = Competition.objects.all()
        if status:
            qs = qs.filter(status=status)
        return list(qs.order_by("-created_at", "-id"))

    return competition_cache.cached(competition_cache.list_key(status), load)


def _load_with_documents(**lookup) -> Optional[Competition]:
    competition = Competition.objects.filter(**lookup).first()
    if competition is None:
        return None
    competition.document_list = list(competition.documents.order_by("order_index", "id"))
    return competition


@_store_errors
def get_competition_by_slug(slug: str) -> Competition:
    competition = competition_cache.cached(
        competition_cache.slug_key(slug), lambda: _load_with_documents(slug=slug)
    )
    if competition is None:
        raise NotFound(_("Concursul solicitat nu a fost găsit sau a fost șters."))
    return competition


@_store_errors
def get_competition_by_id(competition_id) -> Competition:
    competition = competition_cache.cached(
        competition_cache.id_key(competition_id), lambda: _load_with_documents(pk=competition_id)
    )
    if competition is None:
        raise NotFound(_("Concursul solicitat nu a fost găsit sau a fost șters."))
    return competition


def _get_competition(competition_id) -> Competition:
    try:
        return Competition.objects.get(pk=competition_id)
    except (Competition.DoesNotExist, ValueError, TypeError):
        raise NotFound(_("Concursul solicitat nu a fost găsit sau a fost șters."))


@_store_errors
def create_competition(data: dict, actor=None) -> Competition:
    data = dict(data)
    if not (data.get("slug") or "").strip() and data.get("title"):
        data["slug"] = generate_slug(data["title"])
    values = validated_data(CompetitionWriteSerializer(data=data))
    try:
        with transaction.atomic():
            competition = Competition.objects.create(**values)
    except IntegrityError:
        raise _field_error("slug", _("Există deja un concurs cu acest slug."))
    logger.info("Created competition %s (%s)", competition.pk, competition.slug)
    record_audit(actor, "competition_create", "competition", competition.pk, data={"slug": competition.slug})
    return competition


@_store_errors
def update_competition(competition_id, data: dict, actor=None) -> Competition:
    """Partial update: only the fields present in ``data`` change."""
    competition = _get_competition(competition_id)
    data = dict(data)
    if "slug" in data and not (data.get("slug") or "").strip():
        data["slug"] = generate_slug(data.get("title") or competition.title)
    values = validated_data(CompetitionWriteSerializer(instance=competition, data=data, partial=True))
    if not values:
        return competition
    prev_status = competition.status
    for field, value in values.items():
        setattr(competition, field, value)
    try:
        with transaction.atomic():
            competition.save()
    except IntegrityError:
        raise _field_error("slug", _("Există deja un concurs cu acest slug."))
    if competition.status != prev_status:
        record_audit(
            actor,
            "competition_status",
            "competition",
            competition.pk,
            data={"prev_status": prev_status, "new_status": competition.status},
        )
    return competition


@_store_errors
def set_status(competition_id, status: str, actor=None) -> Competition:
    _check_status(status)
    return update_competition(competition_id, {"status": status}, actor=actor)


@_store_errors
def delete_competition(competition_id, actor=None) -> None:
    """Delete a competition; its documents (rows and files) go with it."""
    competition = _get_competition(competition_id)
    slug = competition.slug
    with transaction.atomic():
        competition.delete()
    logger.info("Deleted competition %s (%s)", competition_id, slug)
    record_audit(actor, "competition_delete", "competition", competition_id, data={"slug": slug})


# Documents

@_store_errors
def list_documents(competition_id) -> List[CompetitionDocument]:
    def load():
        return list(CompetitionDocument.objects.filter(competition_id=competition_id).order_by("order_index", "id"))

    return competition_cache.cached(competition_cache.documents_key(competition_id), load)


def _get_document(document_id, competition_id=None) -> CompetitionDocument:
    qs = CompetitionDocument.objects.all()
    if competition_id is not None:
        qs = qs.filter(competition_id=competition_id)
    try:
        return qs.get(pk=document_id)
    except (CompetitionDocument.DoesNotExist, ValueError, TypeError):
        raise NotFound(_("Documentul nu a fost găsit."))


@_store_errors
def create_document(competition_id, data: dict, upload=None, actor=None) -> CompetitionDocument:
    """
    Store ``upload`` and attach it to the competition.

    Without an explicit order_index the document goes last (max + 1). If the
    row cannot be written the stored file is removed again.
    """
    competition = _get_competition(competition_id)
    values = validated_data(DocumentWriteSerializer(data=data))
    if upload is None:
        raise _field_error("file", _("Selectați un fișier pentru încărcare."))

    file_path, file_name, file_type = store_document_file(competition.pk, upload)
    try:
        with transaction.atomic():
            Competition.objects.select_for_update().filter(pk=competition.pk).first()
            if values.get("order_index") is None:
                current = competition.documents.aggregate(m=Max("order_index"))["m"]
                values["order_index"] = 0 if current is None else current + 1
            document = CompetitionDocument.objects.create(
                competition=competition,
                file_path=file_path,
                file_name=file_name,
                file_type=file_type,
                **values,
            )
    except IntegrityError:
        delete_document_file(file_path)
        raise _field_error("order_index", _("Poziția documentului este deja ocupată."))
    except DatabaseError:
        delete_document_file(file_path)
        raise
    document_uploads_total.inc()
    logger.info("Added document %s to competition %s", document.pk, competition.pk)
    return document


@_store_errors
def update_document(document_id, data: dict, upload=None, actor=None, competition_id=None) -> CompetitionDocument:
    """Partial update; a new upload replaces the stored file. ``competition_id`` restricts the lookup."""
    document = _get_document(document_id, competition_id)
    values = validated_data(DocumentWriteSerializer(instance=document, data=data, partial=True))
    old_path = None
    if upload is not None:
        file_path, file_name, file_type = store_document_file(document.competition_id, upload)
        old_path = document.file_path
        values.update(file_path=file_path, file_name=file_name, file_type=file_type)
    if not values:
        return document
    for field, value in values.items():
        setattr(document, field, value)
    try:
        with transaction.atomic():
            document.save()
    except DatabaseError as e:
        if upload is not None:
            delete_document_file(document.file_path)
        if isinstance(e, IntegrityError):
            raise _field_error("order_index", _("Poziția documentului este deja ocupată."))
        raise
    if old_path and old_path != document.file_path:
        delete_document_file(old_path)
        document_uploads_total.inc()
    return document


@_store_errors
def delete_document(document_id, actor=None, competition_id=None) -> None:
    document = _get_document(document_id, competition_id)
    competition_id = document.competition_id
    with transaction.atomic():
        document.delete()
    record_audit(
        actor,
        "document_delete",
        "competition",
        competition_id,
        data={"document_id": document_id, "file_name": document.file_name},
    )


def _parse_reorder(pairs: Iterable) -> Tuple[List[Tuple[int, int]], List[str]]:
    parsed, errors = [], []
    seen_ids, seen_orders = set(), set()
    for position, item in enumerate(pairs):
        if isinstance(item, (list, tuple)) and len(item) == 2:
            item = {"id": item[0], "order_index": item[1]}
        serializer = ReorderItemSerializer(data=item if isinstance(item, dict) else {})
        if not serializer.is_valid():
            errors.append(f"#{position}: {serializer.errors}")
            continue
        doc_id = serializer.validated_data["id"]
        order = serializer.validated_data["order_index"]
        if doc_id in seen_ids:
            errors.append(f"#{position}: document {doc_id} apare de mai multe ori")
        if order in seen_orders:
            errors.append(f"#{position}: poziția {order} apare de mai multe ori")
        seen_ids.add(doc_id)
        seen_orders.add(order)
        parsed.append((doc_id, order))
    return parsed, errors


@_store_errors
def reorder_documents(competition_id, pairs: Sequence) -> List[CompetitionDocument]:
    """
    Apply (document id, order_index) pairs as one unit.

    Invalid entries are collected and reported together before anything is
    written. The competition row is locked for the duration so concurrent
    reorders of the same competition run one after the other.
    """
    competition = _get_competition(competition_id)
    parsed, errors = _parse_reorder(pairs)
    if not parsed and not errors:
        return list_documents(competition.pk)

    try:
        with transaction.atomic():
            Competition.objects.select_for_update().filter(pk=competition.pk).first()
            ids = [doc_id for doc_id, _order in parsed]
            known = set(
                CompetitionDocument.objects.filter(competition_id=competition.pk, id__in=ids).values_list("id", flat=True)
            )
            errors += [f"document {doc_id} nu aparține concursului" for doc_id in ids if doc_id not in known]
            if errors:
                raise ValidationFailed(_("Reordonarea documentelor a eșuat."), fields={"documents": errors})

            # Park the moved rows on negative slots so (competition, order_index) stays unique mid-update
            for n, (doc_id, _order) in enumerate(parsed):
                CompetitionDocument.objects.filter(pk=doc_id).update(order_index=-(n + 1))
            for doc_id, order in parsed:
                CompetitionDocument.objects.filter(pk=doc_id).update(order_index=order)
    except IntegrityError:
        raise ValidationFailed(
            _("Reordonarea documentelor a eșuat."),
            fields={"documents": ["pozițiile se suprapun cu documente existente"]},
        )
    finally:
        # queryset.update() bypasses model signals
        competition_cache.invalidate_now_and_on_commit(competition_cache.invalidate_documents, competition.pk)

    logger.info("Reordered %d documents of competition %s", len(parsed), competition.pk)
    return list_documents(competition.pk)


@_store_errors
def move_document(competition_id, document_id, direction: str) -> List[CompetitionDocument]:
    """Swap a document with its neighbour and renumber the whole list 0..N-1."""
    if direction not in (DIRECTION_UP, DIRECTION_DOWN):
        raise ValidationFailed(_("Direcție invalidă."))
    competition = _get_competition(competition_id)
    documents = list(CompetitionDocument.objects.filter(competition_id=competition.pk).order_by("order_index", "id"))
    index = next((i for i, d in enumerate(documents) if str(d.pk) == str(document_id)), None)
    if index is None:
        raise NotFound(_("Documentul nu a fost găsit."))
    target = index - 1 if direction == DIRECTION_UP else index + 1
    if target < 0 or target >= len(documents):
        return documents
    documents[index], documents[target] = documents[target], documents[index]
    return reorder_documents(competition.pk, [(d.pk, i) for i, d in enumerate(documents)])


# Housekeeping

@_store_errors
def archive_expired_competitions(today: Optional[date] = None) -> List[Competition]:
    """Archive active competitions flagged auto_archive whose end date has passed."""
    today = today or timezone.localdate()
    expired = Competition.objects.filter(
        status=Competition.STATUS_ACTIVE,
        auto_archive=True,
        end_date__isnull=False,
        end_date__lt=today,
    )
    archived = []
    for competition in expired:
        competition.status = Competition.STATUS_ARCHIVED
        competition.save(update_fields=["status", "updated_at"])
        record_audit(
            None,
            "competition_auto_archive",
            "competition",
            competition.pk,
            data={"end_date": competition.end_date.isoformat()},
        )
        archived.append(competition)
    if archived:
        competitions_auto_archived_total.inc(len(archived))
        logger.info("Auto-archived %d competitions", len(archived))
    return archived


@_store_errors
def dashboard_summary(recent: int = 5) -> dict:
    competitions = list_competitions()
    active = sum(1 for c in competitions if c.status == Competition.STATUS_ACTIVE)
    return {
        "total": len(competitions),
        "active": active,
        "archived": len(competitions) - active,
        "recent": competitions[:recent],
    }

from __future__ import annotations

from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from . import cache as competition_cache
from .models import Competition, CompetitionDocument
from .storage import delete_document_file


@receiver(pre_save, sender=Competition)
def remember_previous_slug(sender, instance: Competition, **kwargs):
    # A slug change must also drop the entry cached under the old slug
    instance._previous_slug = None
    if instance.pk:
        instance._previous_slug = (
            Competition.objects.filter(pk=instance.pk).values_list("slug", flat=True).first()
        )


@receiver(post_save, sender=Competition)
def invalidate_on_competition_save(sender, instance: Competition, **kwargs):
    slugs = {instance.slug, getattr(instance, "_previous_slug", None)}
    competition_cache.invalidate_now_and_on_commit(competition_cache.invalidate_competition, instance.pk, slugs)


@receiver(post_delete, sender=Competition)
def invalidate_on_competition_delete(sender, instance: Competition, **kwargs):
    competition_cache.invalidate_now_and_on_commit(
        competition_cache.invalidate_competition, instance.pk, [instance.slug]
    )


@receiver(post_save, sender=CompetitionDocument)
def invalidate_on_document_save(sender, instance: CompetitionDocument, **kwargs):
    competition_cache.invalidate_now_and_on_commit(competition_cache.invalidate_documents, instance.competition_id)


@receiver(post_delete, sender=CompetitionDocument)
def cleanup_on_document_delete(sender, instance: CompetitionDocument, **kwargs):
    # Runs for cascades from Competition.delete() too
    competition_cache.invalidate_now_and_on_commit(competition_cache.invalidate_documents, instance.competition_id)
    path = instance.file_path
    transaction.on_commit(lambda: delete_document_file(path))

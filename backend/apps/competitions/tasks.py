from __future__ import annotations

from celery import shared_task

from .services import archive_expired_competitions


@shared_task
def auto_archive_competitions():
    """Daily sweep: archive flagged competitions whose end date has passed."""
    archived = archive_expired_competitions()
    return [c.pk for c in archived]

from __future__ import annotations

from typing import Callable, Iterable, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from .models import Competition

_LIST_STATUSES = (None, Competition.STATUS_ACTIVE, Competition.STATUS_ARCHIVED)


def list_key(status: Optional[str] = None) -> str:
    return f"competitions:list:{status or 'all'}"


def slug_key(slug: str) -> str:
    return f"competitions:slug:{slug}"


def id_key(competition_id) -> str:
    return f"competitions:id:{competition_id}"


def documents_key(competition_id) -> str:
    return f"competitions:documents:{competition_id}"


def cached(key: str, loader: Callable):
    """Read-through: return the cached value or load, store and return it. None is never cached."""
    value = cache.get(key)
    if value is None:
        value = loader()
        if value is not None:
            cache.set(key, value, settings.COMPETITIONS_CACHE_TTL)
    return value


def invalidate_competition(competition_id=None, slugs: Iterable[str] = ()) -> None:
    keys = [list_key(s) for s in _LIST_STATUSES]
    if competition_id is not None:
        keys += [id_key(competition_id), documents_key(competition_id)]
    keys += [slug_key(s) for s in slugs if s]
    cache.delete_many(keys)


def invalidate_documents(competition_id) -> None:
    slugs = list(Competition.objects.filter(pk=competition_id).values_list("slug", flat=True))
    invalidate_competition(competition_id, slugs)


def invalidate_now_and_on_commit(invalidate: Callable, *args) -> None:
    """
    Run ``invalidate`` immediately and again once the current transaction commits.

    The first pass keeps reads inside the writing transaction consistent; the
    second drops anything a concurrent reader cached from the pre-commit rows.
    Outside a transaction the commit hook runs straight away.
    """
    invalidate(*args)
    transaction.on_commit(lambda: invalidate(*args))

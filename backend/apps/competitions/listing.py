from __future__ import annotations

from typing import Iterable, List, Optional

from .models import Competition


def year_of(competition: Competition) -> Optional[int]:
    # Start date when known, otherwise the publication date
    value = competition.start_date or competition.created_at
    return value.year if value else None


def available_years(competitions: Iterable[Competition]) -> List[int]:
    years = {year_of(c) for c in competitions}
    years.discard(None)
    return sorted(years, reverse=True)


def matches_query(competition: Competition, query: str) -> bool:
    needle = query.lower()
    return any(
        needle in (field or "").lower()
        for field in (competition.title, competition.keywords, competition.description)
    )


def filter_competitions(
    competitions: Iterable[Competition],
    status: Optional[str] = None,
    year: Optional[int] = None,
    query: Optional[str] = None,
) -> List[Competition]:
    query = (query or "").strip()
    results = []
    for c in competitions:
        if status and c.status != status:
            continue
        if year and year_of(c) != year:
            continue
        if query and not matches_query(c, query):
            continue
        results.append(c)
    return results


def status_counts(competitions: Iterable[Competition]) -> dict:
    counts = {Competition.STATUS_ACTIVE: 0, Competition.STATUS_ARCHIVED: 0}
    for c in competitions:
        counts[c.status] = counts.get(c.status, 0) + 1
    return counts


def parse_year(value) -> Optional[int]:
    try:
        year = int(value)
    except (TypeError, ValueError):
        return None
    return year if year > 0 else None

from __future__ import annotations

from django.shortcuts import render
from django.views.decorators.clickjacking import xframe_options_exempt

from apps.competitions import services
from apps.competitions.listing import available_years, filter_competitions, parse_year, status_counts
from apps.competitions.models import Competition
from apps.core.errors import NotFound

PUBLIC_LAYOUT = "portal/public_base.html"
EMBED_LAYOUT = "portal/embed_base.html"


def _layout(embed: bool) -> dict:
    return {
        "layout": EMBED_LAYOUT if embed else PUBLIC_LAYOUT,
        "embed": embed,
        "list_url": "/embed/concursuri/" if embed else "/concursuri/",
    }


def competition_list(request, embed: bool = False):
    """Status tabs (active by default), year select and free-text search."""
    status = request.GET.get("status")
    if status not in (Competition.STATUS_ACTIVE, Competition.STATUS_ARCHIVED):
        status = Competition.STATUS_ACTIVE
    year = parse_year(request.GET.get("year"))
    query = (request.GET.get("q") or "").strip()

    competitions = services.list_competitions()
    context = {
        "competitions": filter_competitions(competitions, status=status, year=year, query=query),
        "years": available_years(competitions),
        "counts": status_counts(competitions),
        "status": status,
        "year": year,
        "query": query,
        **_layout(embed),
    }
    return render(request, "portal/competition_list.html", context)


def competition_detail(request, slug: str, embed: bool = False):
    try:
        competition = services.get_competition_by_slug(slug)
    except NotFound:
        return render(request, "portal/competition_missing.html", _layout(embed), status=404)
    context = {"competition": competition, "documents": competition.document_list, **_layout(embed)}
    return render(request, "portal/competition_detail.html", context)


@xframe_options_exempt
def embed_competition_list(request):
    return competition_list(request, embed=True)


@xframe_options_exempt
def embed_competition_detail(request, slug: str):
    return competition_detail(request, slug, embed=True)

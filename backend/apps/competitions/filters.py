from __future__ import annotations

import django_filters
from django.db.models import Q

from .models import Competition


class CompetitionFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Competition.STATUS_CHOICES)
    q = django_filters.CharFilter(method="filter_query")

    class Meta:
        model = Competition
        fields = ["status", "q"]

    def filter_query(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(title__icontains=value) | Q(keywords__icontains=value))

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.generics import ListAPIView
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import HasPanelAccess
from apps.core.errors import ValidationFailed

from . import services
from .filters import CompetitionFilter
from .listing import available_years, filter_competitions, parse_year, status_counts
from .models import Competition
from .serializers import (
    CompetitionDetailSerializer,
    CompetitionSerializer,
    CompetitionWriteSerializer,
    DocumentSerializer,
    DocumentWriteSerializer,
)

logger = logging.getLogger(__name__)


def _form_data(request) -> dict:
    # QueryDict -> plain dict of single values, without the uploaded file
    data = request.data
    if hasattr(data, "dict"):
        data = data.dict()
    return {k: v for k, v in dict(data).items() if k != "file"}


class CompetitionListView(APIView):
    """Public listing with status tab, year and search applied to the cached list."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):
        status_q = request.query_params.get("status") or None
        competitions = services.list_competitions()
        results = filter_competitions(
            competitions,
            status=status_q,
            year=parse_year(request.query_params.get("year")),
            query=request.query_params.get("q"),
        )
        return Response(
            {
                "results": CompetitionSerializer(results, many=True).data,
                "years": available_years(competitions),
                "counts": status_counts(competitions),
            }
        )


class CompetitionDetailView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, slug: str):
        competition = services.get_competition_by_slug(slug)
        return Response(CompetitionDetailSerializer(competition).data)


# Admin panel (admins and editors)

class AdminCompetitionListCreateView(ListAPIView):
    serializer_class = CompetitionSerializer
    permission_classes = [HasPanelAccess]
    filter_backends = [DjangoFilterBackend]
    filterset_class = CompetitionFilter
    queryset = Competition.objects.all().order_by("-created_at", "-id")

    @extend_schema(request=CompetitionWriteSerializer, responses=CompetitionSerializer)
    def post(self, request):
        competition = services.create_competition(_form_data(request), actor=request.user)
        return Response(CompetitionSerializer(competition).data, status=status.HTTP_201_CREATED)


class AdminCompetitionDetailView(APIView):
    permission_classes = [HasPanelAccess]

    def get(self, request, id: int):
        return Response(CompetitionDetailSerializer(services.get_competition_by_id(id)).data)

    @extend_schema(request=CompetitionWriteSerializer, responses=CompetitionSerializer)
    def patch(self, request, id: int):
        competition = services.update_competition(id, _form_data(request), actor=request.user)
        return Response(CompetitionSerializer(competition).data)

    put = patch

    def delete(self, request, id: int):
        services.delete_competition(id, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminDashboardView(APIView):
    permission_classes = [HasPanelAccess]

    def get(self, request):
        summary = services.dashboard_summary()
        summary["recent"] = CompetitionSerializer(summary["recent"], many=True).data
        return Response(summary)


class AdminDocumentListCreateView(APIView):
    permission_classes = [HasPanelAccess]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request, id: int):
        services.get_competition_by_id(id)
        return Response({"results": DocumentSerializer(services.list_documents(id), many=True).data})

    @extend_schema(request=DocumentWriteSerializer, responses=DocumentSerializer)
    def post(self, request, id: int):
        document = services.create_document(
            id, _form_data(request), upload=request.FILES.get("file"), actor=request.user
        )
        return Response(DocumentSerializer(document).data, status=status.HTTP_201_CREATED)


class AdminDocumentDetailView(APIView):
    permission_classes = [HasPanelAccess]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(request=DocumentWriteSerializer, responses=DocumentSerializer)
    def patch(self, request, id: int):
        document = services.update_document(
            id, _form_data(request), upload=request.FILES.get("file"), actor=request.user
        )
        return Response(DocumentSerializer(document).data)

    def delete(self, request, id: int):
        services.delete_document(id, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminDocumentReorderView(APIView):
    """Body: {"order": [{"id": <document id>, "order_index": <n>}, ...]}"""

    permission_classes = [HasPanelAccess]

    def post(self, request, id: int):
        order = request.data.get("order") if isinstance(request.data, dict) else None
        if not isinstance(order, list):
            message = "Lista de ordonare lipsește."
            raise ValidationFailed(message, fields={"order": [message]})
        documents = services.reorder_documents(id, order)
        return Response({"results": DocumentSerializer(documents, many=True).data})


class AdminDocumentMoveView(APIView):
    permission_classes = [HasPanelAccess]

    def post(self, request, id: int, document_id: int):
        direction = request.data.get("direction") if isinstance(request.data, dict) else None
        documents = services.move_document(id, document_id, direction)
        return Response({"results": DocumentSerializer(documents, many=True).data})

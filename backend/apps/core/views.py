from __future__ import annotations

import logging

from django.db import DatabaseError, connection
from django.http import HttpResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


# Observability endpoints

class HealthzView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({"status": "ok"})


class ReadinessView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError:
            logger.exception("Readiness check failed: database unreachable")
            return Response({"status": "unavailable"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response({"status": "ready"})


class MetricsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        # Expose Prometheus metrics
        data = generate_latest()
        return HttpResponse(data, content_type=CONTENT_TYPE_LATEST)

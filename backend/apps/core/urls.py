from django.urls import path

from .views import HealthzView, ReadinessView, MetricsView

urlpatterns = [
    # Observability
    path("healthz", HealthzView.as_view()),
    path("readiness", ReadinessView.as_view()),
    path("metrics", MetricsView.as_view()),
]

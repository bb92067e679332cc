from django.urls import path

from .views import (
    CompetitionListView,
    CompetitionDetailView,
    AdminCompetitionListCreateView,
    AdminCompetitionDetailView,
    AdminDashboardView,
    AdminDocumentListCreateView,
    AdminDocumentDetailView,
    AdminDocumentReorderView,
    AdminDocumentMoveView,
)

urlpatterns = [
    path("competitions", CompetitionListView.as_view()),
    path("competitions/<slug:slug>", CompetitionDetailView.as_view()),
    # Admin panel
    path("admin/dashboard", AdminDashboardView.as_view()),
    path("admin/competitions", AdminCompetitionListCreateView.as_view()),
    path("admin/competitions/<int:id>", AdminCompetitionDetailView.as_view()),
    path("admin/competitions/<int:id>/documents", AdminDocumentListCreateView.as_view()),
    path("admin/competitions/<int:id>/documents/reorder", AdminDocumentReorderView.as_view()),
    path("admin/competitions/<int:id>/documents/<int:document_id>/move", AdminDocumentMoveView.as_view()),
    path("admin/documents/<int:id>", AdminDocumentDetailView.as_view()),
]

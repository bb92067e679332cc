from django.urls import path

from . import admin_views, views

app_name = "portal"

urlpatterns = [
    path("", views.competition_list, name="home"),
    path("concursuri/", views.competition_list, name="competitions"),
    path("concursuri/<slug:slug>/", views.competition_detail, name="competition-detail"),
    # Frameable mirror for the institutional site
    path("embed/concursuri/", views.embed_competition_list, name="embed-competitions"),
    path("embed/concursuri/<slug:slug>/", views.embed_competition_detail, name="embed-competition-detail"),
    # Admin console
    path("admin/login/", admin_views.login_view, name="admin-login"),
    path("admin/logout/", admin_views.logout_view, name="admin-logout"),
    path("admin/", admin_views.dashboard, name="admin-dashboard"),
    path("admin/concursuri/", admin_views.competition_list, name="admin-competitions"),
    path("admin/concursuri/nou/", admin_views.competition_create, name="admin-competition-create"),
    path("admin/concursuri/<int:id>/", admin_views.competition_edit, name="admin-competition-edit"),
    path("admin/utilizatori/", admin_views.users, name="admin-users"),
]

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    LoginView,
    MeView,
    CreateUserFunctionView,
    ListUsersFunctionView,
    DeleteUserFunctionView,
)

urlpatterns = [
    path("auth/login", LoginView.as_view()),
    path("auth/refresh", TokenRefreshView.as_view()),
    path("auth/me", MeView.as_view()),
    # Privileged functions
    path("functions/create-user", CreateUserFunctionView.as_view()),
    path("functions/list-users", ListUsersFunctionView.as_view()),
    path("functions/delete-user", DeleteUserFunctionView.as_view()),
]

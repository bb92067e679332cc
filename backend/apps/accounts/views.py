from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.errors import validated_data

from . import functions
from .guards import caller_from_user, require_admin
from .provider import get_provider
from .serializers import CreateUserSerializer, DeleteUserSerializer, LoginSerializer

logger = logging.getLogger(__name__)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    throttle_scope = "login"

    @extend_schema(request=LoginSerializer)
    def post(self, request):
        values = validated_data(LoginSerializer(data=request.data))
        tokens = get_provider().sign_in(values["email"], values["password"])
        return Response(tokens)


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        caller = caller_from_user(request.user, request)
        return Response({"id": request.user.pk, "email": request.user.email, "role": caller.role})


class PrivilegedFunctionView(APIView):
    """
    Base for the privileged user-management endpoints.

    The bearer token is resolved by the admin guard rather than DRF
    authentication so that missing/invalid tokens map to 401 and non-admins to
    403 with the function's own message.
    """

    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    forbidden_message = None

    def run(self, caller, payload):
        raise NotImplementedError

    def post(self, request):
        caller = require_admin(request, message=self.forbidden_message)
        payload = request.data if isinstance(request.data, dict) else {}
        return Response(self.run(caller, payload), status=status.HTTP_200_OK)


class CreateUserFunctionView(PrivilegedFunctionView):
    forbidden_message = "Nu aveți permisiunea de a crea utilizatori."

    @extend_schema(request=CreateUserSerializer)
    def post(self, request):
        return super().post(request)

    def run(self, caller, payload):
        return functions.create_user(caller, payload)


class ListUsersFunctionView(PrivilegedFunctionView):
    forbidden_message = "Nu aveți permisiunea de a gestiona utilizatori."

    def run(self, caller, payload):
        return functions.list_users(caller, payload)


class DeleteUserFunctionView(PrivilegedFunctionView):
    forbidden_message = "Nu aveți permisiunea de a gestiona utilizatori."

    @extend_schema(request=DeleteUserSerializer)
    def post(self, request):
        return super().post(request)

    def run(self, caller, payload):
        return functions.delete_user(caller, payload)

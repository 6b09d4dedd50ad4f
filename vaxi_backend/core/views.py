"""Core app views.

Contains:
- health: liveness + database check, with catalog size
- LoginView / RefreshView: JWT pair and access-token refresh
- LogoutView: audit-only logout (tokens simply expire)
- MeView: the signed-in account
"""

import logging

from django.contrib.auth.models import update_last_login
from django.db import DatabaseError, connection
from django.http import JsonResponse

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from rest_framework_simplejwt.tokens import RefreshToken

from vaxi_backend.core.serializers import AccountSerializer, LoginSerializer, RefreshSerializer
from vaxi_backend.core.utils import log_subject_action
from vaxi_backend.vaccines.models import Vaccine

logger = logging.getLogger(__name__)


def health(request):
    """Health check endpoint - no authentication required."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1;')
        catalog_size = Vaccine.objects.filter(is_active=True).count()
    except DatabaseError as exc:
        logger.error('Health check failed: %s', exc)
        return JsonResponse({'status': 'error', 'detail': str(exc)}, status=503)

    return JsonResponse({'status': 'ok', 'vaccines': catalog_size})


class LoginView(APIView):
    """Obtain a JWT pair.

    POST /api/auth/login/
    Body: {"login": "<username, email or phone>", "password": "..."}
    Returns: {"user": {...}, "access": "...", "refresh": "..."}
    """

    permission_classes = [AllowAny]
    throttle_scope = 'auth'

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        refresh = RefreshToken.for_user(user)
        role = getattr(user, 'role', None)
        refresh['role'] = role.name if role else None

        update_last_login(None, user)
        log_subject_action(user, 'login')

        return Response(
            {
                'user': AccountSerializer(user).data,
                'access': str(refresh.access_token),
                'refresh': str(refresh),
            },
            status=status.HTTP_200_OK,
        )


class RefreshView(APIView):
    """POST /api/auth/refresh/ {"refresh": "..."} -> {"access": "..."}"""

    permission_classes = [AllowAny]
    throttle_scope = 'auth'

    def post(self, request, *args, **kwargs):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refresh = RefreshToken(serializer.validated_data['refresh'])
        return Response({'access': str(refresh.access_token)}, status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        log_subject_action(request.user, 'logout')
        return Response({'detail': 'Logged out successfully'}, status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response(AccountSerializer(request.user).data, status=status.HTTP_200_OK)

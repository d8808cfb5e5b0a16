"""Accounts API views: token login and the current-user endpoint."""

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import AccessToken

from .serializers import LoginSerializer, UserSerializer

logger = logging.getLogger(__name__)


class LoginView(APIView):
    """Exchange email and password for a bearer access token.

    The dashboard stores the returned ``accessToken`` in an httpOnly cookie;
    API clients send it as ``Authorization: Bearer <token>``.
    """

    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        token = AccessToken.for_user(user)
        logger.info('User %s logged in', user.pk)
        return Response(
            {'accessToken': str(token), 'user': UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )


class MeView(APIView):
    """Return the user the bearer token belongs to."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)

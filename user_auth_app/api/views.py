"""Auth API views.

Implements token-based registration and login, and a ``me`` endpoint that
exposes the session identity (id, email, name, avatar) used by every other
app for authorization decisions.
"""

import logging

from rest_framework import generics, status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import CurrentUserSerializer, LoginSerializer, RegistrationSerializer

logger = logging.getLogger(__name__)


def _token_payload(user, token):
    return {
        "token": token.key,
        "userId": user.id,
        "email": user.email,
        "name": user.name,
        "avatar": user.avatar,
    }


class RegistrationView(APIView):
    """POST /api/registration/ -> create user, return auth token."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        token, _ = Token.objects.get_or_create(user=user)
        logger.info("Registered user %s", user.id)
        return Response(_token_payload(user, token), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/login/ -> validate credentials and return auth token."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        token, _ = Token.objects.get_or_create(user=user)
        return Response(_token_payload(user, token), status=status.HTTP_200_OK)


class CurrentUserView(generics.RetrieveUpdateAPIView):
    """GET/PATCH /api/me/ -> the authenticated user's identity."""

    serializer_class = CurrentUserSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user

    def update(self, request, *args, **kwargs):
        """Always apply partial updates."""
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

from django.contrib.auth import get_user_model
from django.db.models import Avg
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework import status

from games.models import Game
from reviews.models import Review

User = get_user_model()


class BaseInfoAPIView(APIView):
    """
    GET /api/base-info/

    Returns platform-wide aggregate statistics:
    - gameCount: number of games in the catalog
    - reviewCount: total number of reviews
    - userCount: number of registered users
    - averageRating: average rating across all reviews (rounded to 1 decimal),
      null when there are no reviews

    Authentication: none
    Permissions: AllowAny
    """

    authentication_classes = []          # No authentication required
    permission_classes = [AllowAny]      # Explicitly allow public access

    def get(self, request):
        avg = Review.objects.aggregate(avg=Avg("rating"))["avg"]
        data = {
            "gameCount": Game.objects.count(),
            "reviewCount": Review.objects.count(),
            "userCount": User.objects.count(),
            "averageRating": round(float(avg), 1) if avg is not None else None,
        }
        return Response(data, status=status.HTTP_200_OK)

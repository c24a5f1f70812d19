"""Games API views.

List and create games on the same endpoint with limit/offset pagination,
searching and ordering. Listing is public, creating requires authentication.
A single game is retrieved by its slug together with its review statistics.
"""

import json
import logging

from django.db.models import Avg, Count, F, Prefetch, Q
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import LimitOffsetPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from games.models import Game
from reviews.models import Review
from .serializers import GameCreateSerializer, GameDetailSerializer, GameSerializer

logger = logging.getLogger(__name__)


def _tag_match(field, tag):
    """Match games whose *field* tag list holds *tag* as a whole element.

    Looks for the quoted JSON string in the stored list, so ``rogue`` does not
    match ``Roguelike``. SQLite stores non-ASCII escaped, PostgreSQL does not.
    """
    escaped = json.dumps(tag)
    raw = json.dumps(tag, ensure_ascii=False)
    q = Q(**{f"{field}__icontains": escaped})
    if raw != escaped:
        q |= Q(**{f"{field}__icontains": raw})
    return q


class GamesPagination(LimitOffsetPagination):
    """limit/offset pagination; the default page matches the catalog page size."""

    default_limit = 50
    max_limit = 100


class GameListCreateAPIView(generics.ListCreateAPIView):
    """GET: paginated list with search and ordering; POST: create game (authenticated)."""

    queryset = Game.objects.all()
    pagination_class = GamesPagination

    def get_permissions(self):
        """Only authenticated users may add games; the catalog is public."""
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_serializer_class(self):
        """Use list serializer for GET and creation serializer for POST."""
        if self.request.method == "GET":
            return GameSerializer
        return GameCreateSerializer

    def get_queryset(self):
        qs = self._annotate_base(super().get_queryset())
        qs = self._apply_filters(qs, self.request.query_params)
        return self._apply_ordering(qs, self.request.query_params.get("ordering"))

    def create(self, request, *args, **kwargs):
        """Validate, allocate a slug and create; averageRating starts as null."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        game = serializer.save()
        logger.info("Game %s created with slug %r by user %s", game.id, game.slug, request.user.id)
        return Response(GameSerializer(game).data, status=status.HTTP_201_CREATED)

    # --- helpers ---
    def _annotate_base(self, qs):
        return qs.annotate(
            _average_rating=Avg("reviews__rating"),
            _review_count=Count("reviews"),
        )

    def _apply_filters(self, qs, params):
        search = (params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(title__icontains=search)
                | Q(description__icontains=search)
                | _tag_match("genre", search)
            )
        return qs

    def _apply_ordering(self, qs, ordering):
        if not ordering:
            return qs.order_by("title")

        allowed = {
            "title", "-title", "created_at", "-created_at", "average_rating", "-average_rating",
        }
        if ordering not in allowed:
            raise ValidationError(
                {"ordering": f"Allowed values: {', '.join(sorted(allowed))}."}
            )

        if ordering.endswith("average_rating"):
            # Unrated games sort last in both directions.
            rating = F("_average_rating")
            rating = rating.desc(nulls_last=True) if ordering.startswith("-") else rating.asc(nulls_last=True)
            return qs.order_by(rating, "title")
        return qs.order_by(ordering, "title")


class GameDetailAPIView(generics.RetrieveAPIView):
    """GET /api/games/{slug}/ -> game with stats and reviews."""

    serializer_class = GameDetailSerializer
    permission_classes = [AllowAny]
    lookup_field = "slug"

    def get_queryset(self):
        reviews = Review.objects.select_related("user", "game").order_by("-created_at")
        return Game.objects.prefetch_related(Prefetch("reviews", queryset=reviews))

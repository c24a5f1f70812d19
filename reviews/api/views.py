"""Reviews API views.

List and create reviews on the same endpoint. Listing is public and supports
filtering by gameId and userId, ordering by created_at, updated_at or rating,
and limit/offset pagination. Creating requires authentication.
Retrieve is public; update and delete are owner-only.
"""

import logging
import uuid

from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import LimitOffsetPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from reviews.models import Review
from .permissions import IsReviewOwner
from .serializers import (
    ReviewCreateSerializer,
    ReviewOutputSerializer,
    ReviewUpdateSerializer,
)

logger = logging.getLogger(__name__)

ALLOWED_ORDERING = (
    "created_at", "-created_at", "updated_at", "-updated_at", "rating", "-rating",
)
UPDATABLE_FIELDS = {"rating", "content"}


# ----------------------------- helpers (module-level) -----------------------------

def _apply_filters_and_ordering(qs, params):
    """Filter by game/user and apply ordering; raises ValidationError on bad input."""
    v = params.get("gameId")
    if v:
        try:
            qs = qs.filter(game_id=uuid.UUID(v))
        except ValueError:
            raise ValidationError({"gameId": "Must be a valid game id."})

    v = params.get("userId")
    if v:
        if not v.isdigit():
            raise ValidationError({"userId": "Must be an integer."})
        qs = qs.filter(user_id=int(v))

    ordering = params.get("ordering")
    if ordering:
        if ordering not in ALLOWED_ORDERING:
            raise ValidationError(
                {"ordering": f"Allowed values: {', '.join(ALLOWED_ORDERING)}."}
            )
        return qs.order_by(ordering, "-id")
    return qs.order_by("-created_at", "-id")


def _validate_update_fields(data):
    """Allow only rating/content; anything else (e.g. gameId) is a 400."""
    if not isinstance(data, dict):
        raise ValidationError({"detail": "Expected a JSON object."})
    extra = set(data.keys()) - UPDATABLE_FIELDS
    if extra:
        raise ValidationError(
            {
                "detail": (
                    "Only 'rating' and 'content' may be updated. "
                    f"Invalid: {', '.join(sorted(extra))}."
                )
            }
        )


# --------------------------------------- views ---------------------------------------

class ReviewsPagination(LimitOffsetPagination):
    """limit/offset pagination with a capped page size."""

    default_limit = 50
    max_limit = 100


class ReviewListCreateAPIView(generics.ListCreateAPIView):
    """GET: list reviews (filter/order). POST: create review (authenticated)."""

    queryset = Review.objects.all().select_related("user", "game")
    pagination_class = ReviewsPagination

    def get_permissions(self):
        """Authentication for POST; public read."""
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_serializer_class(self):
        """Use output serializer for GET and create serializer for POST."""
        return ReviewOutputSerializer if self.request.method == "GET" else ReviewCreateSerializer

    def get_queryset(self):
        """Apply optional filters and ordering from query parameters."""
        return _apply_filters_and_ordering(super().get_queryset(), self.request.query_params)

    def create(self, request, *args, **kwargs):
        """Validate and create a review; return the created representation."""
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        review = ser.save()
        logger.info(
            "User %s reviewed game %s with rating %s", review.user_id, review.game_id, review.rating
        )
        return Response(ReviewOutputSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDetailUpdateDeleteAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: public. PUT/PATCH: owner-only update of rating/content. DELETE: owner-only."""

    queryset = Review.objects.all().select_related("user", "game")

    def get_permissions(self):
        """Owner-only for writes; anyone may read."""
        if self.request.method in ("PUT", "PATCH", "DELETE"):
            return [IsAuthenticated(), IsReviewOwner()]
        return [AllowAny()]

    def get_serializer_class(self):
        """Use update serializer for PUT/PATCH; output serializer otherwise."""
        if self.request.method in ("PUT", "PATCH"):
            return ReviewUpdateSerializer
        return ReviewOutputSerializer

    def update(self, request, *args, **kwargs):
        """Update rating/content after the ownership check; return full review."""
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        _validate_update_fields(request.data)
        ser = self.get_serializer(instance, data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        self.perform_update(ser)
        logger.info("Review %s updated by its owner", instance.id)
        return Response(ReviewOutputSerializer(instance).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        """Delete the review (owner-only) and return 204 No Content."""
        instance = self.get_object()
        review_id = instance.id
        self.perform_destroy(instance)
        logger.info("Review %s deleted by its owner", review_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

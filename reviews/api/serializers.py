"""Reviews API serializers.

Provide serializers for creating a review, returning review data, and
updating rating/content. Enforces one review per (user, game); the owner is
always the authenticated user and never taken from the payload.
"""

import logging

from django.db import IntegrityError, transaction
from rest_framework import serializers
from rest_framework.exceptions import NotFound

from core.exceptions import DuplicateError
from games.models import Game
from reviews.models import MAX_CONTENT_LENGTH, MAX_RATING, MIN_RATING, Review, normalize_content

logger = logging.getLogger(__name__)

DUPLICATE_REVIEW_MESSAGE = "You have already reviewed this game."


class RatingField(serializers.IntegerField):
    """Integer rating in 1..10. Strings, booleans and fractions are rejected."""

    default_error_messages = {
        "invalid": f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}.",
    }

    def __init__(self, **kwargs):
        kwargs.setdefault("min_value", MIN_RATING)
        kwargs.setdefault("max_value", MAX_RATING)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


def _content_field():
    return serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=MAX_CONTENT_LENGTH,
    )


class ReviewUserSerializer(serializers.Serializer):
    """Public identity of a review's author."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    avatar = serializers.CharField(read_only=True)


class ReviewGameSerializer(serializers.Serializer):
    """Minimal representation of the reviewed game."""

    id = serializers.UUIDField(read_only=True)
    title = serializers.CharField(read_only=True)
    slug = serializers.CharField(read_only=True)


class ReviewCreateSerializer(serializers.Serializer):
    """Input serializer for creating a new review."""

    gameId = serializers.UUIDField(source="game_id")
    rating = RatingField()
    content = _content_field()

    def validate_gameId(self, value):
        """Ensure the target game exists."""
        game = Game.objects.filter(pk=value).first()
        if game is None:
            raise NotFound("Game not found.")
        self.context["game_obj"] = game
        return value

    def validate_content(self, value):
        return normalize_content(value)

    def validate(self, attrs):
        """Ensure the reviewer has not reviewed this game before."""
        user = self.context["request"].user
        game = self.context["game_obj"]
        if Review.objects.filter(user=user, game=game).exists():
            raise DuplicateError(DUPLICATE_REVIEW_MESSAGE)
        return attrs

    def create(self, validated_data):
        """Create and return the review; a lost insert race is a duplicate too."""
        try:
            with transaction.atomic():
                return Review.objects.create(
                    game=self.context["game_obj"],
                    user=self.context["request"].user,
                    rating=validated_data["rating"],
                    content=validated_data.get("content"),
                )
        except IntegrityError:
            logger.info("Concurrent duplicate review rejected by the database")
            raise DuplicateError(DUPLICATE_REVIEW_MESSAGE)


class ReviewOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a review."""

    gameId = serializers.UUIDField(source="game_id", read_only=True)
    userId = serializers.IntegerField(source="user_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    user = ReviewUserSerializer(read_only=True)
    game = ReviewGameSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "gameId",
            "userId",
            "rating",
            "content",
            "createdAt",
            "updatedAt",
            "user",
            "game",
        ]


class ReviewUpdateSerializer(serializers.ModelSerializer):
    """Update serializer for rating/content only.

    A full update (PUT) requires ``rating`` and clears ``content`` when it is
    omitted; a partial update (PATCH) touches only the given fields.
    """

    rating = RatingField()
    content = _content_field()

    class Meta:
        model = Review
        fields = ["rating", "content"]

    def validate_content(self, value):
        return normalize_content(value)

    def update(self, instance, validated_data):
        if not self.partial:
            validated_data.setdefault("content", None)
        return super().update(instance, validated_data)

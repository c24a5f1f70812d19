"""Games API serializers.

Provide serializers for creating a game, listing games with their average
rating, and retrieving a single game with review statistics and reviews.
"""

import logging

from django.db import IntegrityError, transaction
from rest_framework import serializers

from core.exceptions import DuplicateError, SlugAllocationError
from games.models import Game
from games.slugs import unique_game_slug
from reviews.api.serializers import ReviewOutputSerializer
from reviews.stats import compute_rating_stats

logger = logging.getLogger(__name__)

DUPLICATE_TITLE_MESSAGE = "A game with this title already exists."

# Inserts that lose a slug race are re-allocated at most this many times.
SLUG_RACE_RETRIES = 5


# --------------------------- helpers (pure functions) ---------------------------

def _clean_tags(values):
    """Trim tags, drop blanks and collapse duplicates, keeping first-seen order."""
    seen = []
    for value in values or []:
        tag = value.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _blank_to_none(value):
    if value is None:
        return None
    value = value.strip()
    return value or None


def _extract_annotated(obj, attr, caster, default=None):
    v = getattr(obj, attr, None)
    return caster(v) if v is not None else default


def _tag_list_field():
    return serializers.ListField(
        child=serializers.CharField(max_length=50, allow_blank=True),
        required=False,
        default=list,
    )


# --------------------------------- serializers ---------------------------------

class GameCreateSerializer(serializers.Serializer):
    """Input serializer for creating a game.

    The title is checked for case-insensitive uniqueness before a slug is
    allocated, so a duplicate title never consumes a slug suffix.
    """

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    imageUrl = serializers.URLField(
        source="image_url", max_length=500, required=False, allow_blank=True, allow_null=True
    )
    releaseDate = serializers.DateField(source="release_date", required=False, allow_null=True)
    genre = _tag_list_field()
    platform = _tag_list_field()

    def validate_title(self, value):
        if Game.objects.filter(title__iexact=value).exists():
            raise DuplicateError(DUPLICATE_TITLE_MESSAGE)
        return value

    def validate(self, attrs):
        attrs["description"] = _blank_to_none(attrs.get("description"))
        attrs["image_url"] = _blank_to_none(attrs.get("image_url"))
        attrs["genre"] = _clean_tags(attrs.get("genre"))
        attrs["platform"] = _clean_tags(attrs.get("platform"))
        return attrs

    def create(self, validated_data):
        """Allocate a slug and insert; re-allocate if another insert took it."""
        title = validated_data["title"]
        for _ in range(SLUG_RACE_RETRIES):
            slug = unique_game_slug(title)
            try:
                with transaction.atomic():
                    return Game.objects.create(slug=slug, **validated_data)
            except IntegrityError:
                if Game.objects.filter(title__iexact=title).exists():
                    raise DuplicateError(DUPLICATE_TITLE_MESSAGE)
                logger.warning("Slug %r was taken concurrently, allocating again", slug)
        raise SlugAllocationError()


class GameSerializer(serializers.ModelSerializer):
    """Representation of a game with its aggregate rating.

    ``averageRating`` is ``null`` for a game without reviews.
    """

    imageUrl = serializers.URLField(source="image_url", read_only=True)
    releaseDate = serializers.DateField(source="release_date", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    averageRating = serializers.SerializerMethodField()
    reviewCount = serializers.SerializerMethodField()

    class Meta:
        model = Game
        fields = [
            "id",
            "title",
            "slug",
            "description",
            "imageUrl",
            "releaseDate",
            "genre",
            "platform",
            "createdAt",
            "updatedAt",
            "averageRating",
            "reviewCount",
        ]

    def get_averageRating(self, obj):
        return _extract_annotated(obj, "_average_rating", float)

    def get_reviewCount(self, obj):
        return _extract_annotated(obj, "_review_count", int, default=0)


class GameDetailSerializer(GameSerializer):
    """Single game with rating statistics and its reviews (newest first)."""

    stats = serializers.SerializerMethodField()
    reviews = ReviewOutputSerializer(many=True, read_only=True)

    class Meta(GameSerializer.Meta):
        fields = GameSerializer.Meta.fields + ["stats", "reviews"]

    def _stats(self, obj):
        cached = getattr(obj, "_rating_stats", None)
        if cached is None:
            cached = compute_rating_stats(review.rating for review in obj.reviews.all())
            obj._rating_stats = cached
        return cached

    def get_stats(self, obj):
        return self._stats(obj).as_dict()

    def get_averageRating(self, obj):
        return self._stats(obj).average

    def get_reviewCount(self, obj):
        return self._stats(obj).count
